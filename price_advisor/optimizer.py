"""
Logique d'optimisation de prix du moteur de recommandation.

Ce module est responsable de :
- construire la grille de prix admissibles [prix plancher, plafond],
- simuler le profit attendu pour chaque prix de la grille,
- choisir le prix qui maximise le profit (passe grossière puis passe fine).

Il s'appuie sur le modèle de demande défini dans `models.demand_model`.

Il s'agit d'une recherche sur grille bornée, pas d'une optimisation globale :
pour les élasticités réalistes la courbe de profit n'a qu'un maximum
intérieur ; sinon le prix retourné est une borne de l'intervalle.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import PricingConfig, get_default_pricing_config
from .models.demand_model import calculate_profit, forecast_demand
from .rounding import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    optimal_price: int
    expected_demand: int
    expected_profit: int
    profit_increase_pct: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimalPrice": self.optimal_price,
            "expectedDemand": self.expected_demand,
            "expectedProfit": self.expected_profit,
            "profitIncreasePct": self.profit_increase_pct,
        }


def minimum_price(cost: int, min_margin_pct: int) -> int:
    """Prix plancher garantissant la marge minimale sur le coût (arrondi au supérieur)."""
    return math.ceil(cost * (1 + min_margin_pct / 100))


def price_bounds(
    current_price: int,
    cost: int,
    min_margin_pct: int,
    max_price: Optional[int] = None,
    config: Optional[PricingConfig] = None,
) -> Tuple[int, float]:
    """
    Retourne (prix plancher, plafond).

    Sans plafond explicite (None ou 0), le plafond vaut 1.5 x le prix courant
    et peut donc être fractionnaire.
    """
    config = config or get_default_pricing_config()
    max_bound = max_price if max_price else current_price * config.max_price_multiplier
    return minimum_price(cost, min_margin_pct), max_bound


def _build_price_grid(start: int, stop: float, step: int) -> List[int]:
    """
    Construit la grille start, start + step, ... <= stop.

    Grille vide si stop < start.
    """
    price_grid: List[int] = []
    price = start
    while price <= stop:
        price_grid.append(price)
        price += step
    return price_grid


def simulate_profit_for_price_grid(
    price_grid: List[int],
    current_price: int,
    cost: int,
    elasticity: float,
    competitor_price: int,
    baseline_demand: int,
    competitor_weight: float,
) -> List[Dict[str, Any]]:
    """
    Simule la demande et le profit pour chaque prix d'une grille.
    """
    results: List[Dict[str, Any]] = []
    for price in price_grid:
        demand = forecast_demand(
            baseline_demand,
            current_price,
            price,
            elasticity,
            competitor_price,
            competitor_weight,
        )
        results.append(
            {
                "price": price,
                "demand": demand,
                "profit": calculate_profit(price, cost, demand),
            }
        )
    return results


def _pick_best(
    simulations: List[Dict[str, Any]],
    best_price: Optional[int],
    best_profit: float,
) -> Tuple[Optional[int], float]:
    # Amélioration stricte : à profit égal, le premier prix rencontré est conservé
    for simulation in simulations:
        if simulation["profit"] > best_profit:
            best_profit = simulation["profit"]
            best_price = simulation["price"]
    return best_price, best_profit


def find_optimal_price(
    current_price: int,
    cost: int,
    min_margin_pct: int,
    max_price: Optional[int],
    elasticity: float,
    competitor_price: int,
    baseline_demand: int,
    competitor_weight: Optional[float] = None,
    config: Optional[PricingConfig] = None,
) -> OptimizationResult:
    """
    Cherche le prix qui maximise le profit dans [prix plancher, plafond].

    Étapes :
    1. Point de départ : profit au prix courant, s'il est dans l'intervalle.
    2. Passe grossière : ~50 prix répartis sur l'intervalle.
    3. Passe fine : pas 5x plus petit dans une fenêtre de ±2 pas grossiers
       autour du meilleur prix.
    4. Gain de profit en % par rapport au prix courant (0 si le profit
       courant est <= 0).

    Un prix courant hors de l'intervalle n'est jamais retourné : seul le
    meilleur prix de la grille compte. Si l'intervalle est vide
    (plancher > plafond), le plancher l'emporte.
    """
    config = config or get_default_pricing_config()
    if competitor_weight is None:
        competitor_weight = config.competitor_weight

    min_price, max_bound = price_bounds(current_price, cost, min_margin_pct, max_price, config)

    def demand_at(price: int) -> int:
        return forecast_demand(
            baseline_demand, current_price, price, elasticity, competitor_price, competitor_weight
        )

    current_profit = calculate_profit(current_price, cost, demand_at(current_price))
    # Le prix courant ne sert de point de départ que s'il est admissible
    if min_price <= current_price <= max_bound:
        best_price, best_profit = current_price, current_profit
    else:
        best_price, best_profit = None, -math.inf

    # Passe grossière
    step = max(1, math.floor((max_bound - min_price) / config.coarse_grid_divisions))
    coarse = simulate_profit_for_price_grid(
        _build_price_grid(min_price, max_bound, step),
        current_price, cost, elasticity, competitor_price, baseline_demand, competitor_weight,
    )
    best_price, best_profit = _pick_best(coarse, best_price, best_profit)

    fine: List[Dict[str, Any]] = []
    if best_price is None:
        # Intervalle vide (plancher > plafond) : le plancher l'emporte
        best_price = max(min_price, min(current_price, math.floor(max_bound)))
        best_profit = calculate_profit(best_price, cost, demand_at(best_price))
        logger.info(
            f"Empty price range [{min_price}, {max_bound}] for current price {current_price}, "
            f"using {best_price}"
        )
    else:
        # Passe fine autour du meilleur prix
        fine_step = max(1, math.floor(step / config.fine_step_divisor))
        window = step * config.fine_window_steps
        fine = simulate_profit_for_price_grid(
            _build_price_grid(max(min_price, best_price - window), min(max_bound, best_price + window), fine_step),
            current_price, cost, elasticity, competitor_price, baseline_demand, competitor_weight,
        )
        best_price, best_profit = _pick_best(fine, best_price, best_profit)

    expected_demand = demand_at(best_price)
    profit_increase = (
        ((best_profit - current_profit) / current_profit) * 100 if current_profit > 0 else 0
    )

    logger.debug(
        f"Grid search: {len(coarse)} coarse (step {step}) + {len(fine)} fine "
        f"evaluations, best price {best_price}"
    )

    return OptimizationResult(
        optimal_price=int(best_price),
        expected_demand=expected_demand,
        expected_profit=int(best_profit),
        profit_increase_pct=round_half_up(profit_increase),
    )
