"""
Modèle de demande du moteur de recommandation.

Ce module fournit :
- `forecast_demand` : demande attendue à un prix candidat, à partir
  d'une demande de référence, de l'élasticité et du prix concurrent,
- `calculate_profit` : profit = (prix - coût) * demande,
- `simulate_scenario` / `simulate_price_grid` : simulation « what-if »
  d'un ou plusieurs prix (demande, chiffre d'affaires, profit, marge).

Toutes les fonctions sont pures et déterministes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

import pandas as pd  # type: ignore

from ..config import get_default_pricing_config
from ..rounding import round_half_up


def forecast_demand(
    baseline_demand: float,
    current_price: float,
    new_price: float,
    elasticity: float,
    competitor_price: float,
    competitor_weight: Optional[float] = None,
) -> int:
    """
    Prévoit la demande (en unités) si le prix passe de `current_price` à `new_price`.

    demande = baseline * (1 + élasticité * variation_prix + influence_concurrent)

    L'influence concurrente est asymétrique : un concurrent moins cher que
    `new_price` réduit la demande, un concurrent plus cher n'a aucun effet.

    `current_price` doit être > 0 ; sinon ZeroDivisionError est propagée
    (la validation appartient à l'appelant).
    """
    if competitor_weight is None:
        competitor_weight = get_default_pricing_config().competitor_weight

    price_change_pct = (new_price - current_price) / current_price
    demand_change_pct = elasticity * price_change_pct

    competitor_influence = 0.0
    if competitor_price < new_price:
        competitor_influence = competitor_weight * ((competitor_price - new_price) / new_price)

    forecasted = baseline_demand * (1 + demand_change_pct + competitor_influence)
    return max(0, round_half_up(forecasted))


def calculate_profit(price: float, cost: float, demand: float) -> float:
    """Profit = (prix - coût) * demande. Peut être négatif si prix < coût."""
    return (price - cost) * demand


@dataclass(frozen=True)
class ScenarioResult:
    """Résultat d'une simulation de prix."""

    price: int
    demand: int
    revenue: int
    profit: int
    margin_pct: float


def simulate_scenario(
    price: int,
    cost: int,
    baseline_demand: int,
    current_price: int,
    elasticity: float,
    competitor_price: int,
    competitor_weight: Optional[float] = None,
) -> ScenarioResult:
    """
    Simule un prix : demande prévue, chiffre d'affaires, profit et marge sur prix.

    La marge est exprimée en pourcentage du prix de vente (0 si prix <= 0).
    """
    demand = forecast_demand(
        baseline_demand,
        current_price,
        price,
        elasticity,
        competitor_price,
        competitor_weight,
    )
    profit = calculate_profit(price, cost, demand)
    revenue = price * demand
    margin_pct = ((price - cost) / price) * 100 if price > 0 else 0.0

    return ScenarioResult(
        price=price,
        demand=demand,
        revenue=revenue,
        profit=profit,
        margin_pct=margin_pct,
    )


def simulate_price_grid(
    prices: Iterable[int],
    cost: int,
    baseline_demand: int,
    current_price: int,
    elasticity: float,
    competitor_price: int,
    competitor_weight: Optional[float] = None,
) -> pd.DataFrame:
    """
    Simule une grille de prix et retourne un DataFrame (une ligne par prix).

    Colonnes : price, demand, revenue, profit, margin_pct.
    """
    rows = [
        asdict(
            simulate_scenario(
                price=price,
                cost=cost,
                baseline_demand=baseline_demand,
                current_price=current_price,
                elasticity=elasticity,
                competitor_price=competitor_price,
                competitor_weight=competitor_weight,
            )
        )
        for price in prices
    ]
    return pd.DataFrame(rows, columns=["price", "demand", "revenue", "profit", "margin_pct"])
