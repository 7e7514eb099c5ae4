"""
Pipeline de recommandation de prix.

Enchaîne les étapes :
1. concurrents : dernier prix concurrent relevé,
2. prévision : élasticité, demande de référence, tendance de demande,
3. optimisation : recherche du prix qui maximise le profit,
4. stratégie : règles métier appliquées au prix optimal.

Le pipeline est une fonction pure de ses entrées : il ne lit ni n'écrit
rien en base. Appliquer la recommandation (mise à jour du prix, historique)
est une opération séparée, à la charge de l'appelant (voir `service`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .config import PricingConfig, get_default_pricing_config
from .interfaces.records import CompetitorPriceRecord, DemandRecord, Product
from .models.elasticity_model import calculate_elasticity
from .optimizer import OptimizationResult, find_optimal_price
from .rounding import round_half_up
from .strategy import DemandTrend, StrategyResult, apply_strategy_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScraperStage:
    competitor_count: int
    latest_competitor_price: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "competitorCount": self.competitor_count,
            "latestCompetitorPrice": self.latest_competitor_price,
        }


@dataclass(frozen=True)
class ForecastStage:
    elasticity: float
    baseline_demand: int
    demand_trend: DemandTrend

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elasticity": self.elasticity,
            "baselineDemand": self.baseline_demand,
            "demandTrend": self.demand_trend.value,
        }


@dataclass(frozen=True)
class Recommendation:
    current_price: int
    recommended_price: int
    expected_profit_change: int
    reason: str
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPrice": self.current_price,
            "recommendedPrice": self.recommended_price,
            "expectedProfitChange": self.expected_profit_change,
            "reason": self.reason,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PipelineResult:
    scraper: ScraperStage
    forecast: ForecastStage
    optimization: OptimizationResult
    strategy: StrategyResult
    recommendation: Recommendation

    def to_dict(self) -> Dict[str, Any]:
        """Sérialisation JSON (clés camelCase) consommée par l'API et l'UI."""
        return {
            "stages": {
                "scraper": self.scraper.to_dict(),
                "forecast": self.forecast.to_dict(),
                "optimization": self.optimization.to_dict(),
                "strategy": self.strategy.to_dict(),
            },
            "recommendation": self.recommendation.to_dict(),
        }


def estimate_baseline_demand(
    demand_records: Sequence[DemandRecord],
    config: Optional[PricingConfig] = None,
) -> int:
    """Moyenne des quantités vendues sur les ventes les plus récentes (50 sans historique)."""
    config = config or get_default_pricing_config()
    recent = demand_records[: config.demand_history_window]
    if not recent:
        return config.default_baseline_demand
    return round_half_up(sum(r.quantity for r in recent) / len(recent))


def detect_demand_trend(
    demand_records: Sequence[DemandRecord],
    config: Optional[PricingConfig] = None,
) -> DemandTrend:
    """
    Compare la vente la plus récente à celle située `demand_trend_lag` ventes plus tôt.

    « neutral » tant que l'historique n'est pas assez long.
    """
    config = config or get_default_pricing_config()
    lag = config.demand_trend_lag
    if len(demand_records) <= lag:
        return DemandTrend.NEUTRAL
    if demand_records[0].quantity > demand_records[lag].quantity:
        return DemandTrend.STRONG
    return DemandTrend.WEAK


def confidence_score(n_demand_records: int, config: Optional[PricingConfig] = None) -> int:
    """70 points de base, +0.5 point par vente (plafonné à +25), arrondi au demi supérieur, max 95."""
    config = config or get_default_pricing_config()
    bonus = min(config.confidence_bonus_cap, n_demand_records / 2)
    return round_half_up(min(config.confidence_max, config.confidence_base + bonus))


def run_pipeline(
    product: Product,
    competitor_records: Sequence[CompetitorPriceRecord],
    demand_records: Sequence[DemandRecord],
    config: Optional[PricingConfig] = None,
) -> PipelineResult:
    """
    Produit une recommandation de prix pour un produit.

    `competitor_records` et `demand_records` doivent être triés du plus
    récent au plus ancien. Un historique absent n'est pas une erreur :
    le prix concurrent retombe sur le prix courant, la demande de référence
    sur 50 unités et l'élasticité sur celle de la fiche produit.
    """
    config = config or get_default_pricing_config()

    # 1. Concurrents
    if competitor_records:
        competitor_price = competitor_records[0].price
    else:
        logger.info(f"Product {product.id}: no competitor data, using current price")
        competitor_price = product.current_price
    scraper = ScraperStage(
        competitor_count=len(competitor_records),
        latest_competitor_price=competitor_price,
    )

    # 2. Prévision
    if demand_records:
        elasticity = calculate_elasticity(demand_records, config)
    else:
        logger.info(f"Product {product.id}: no demand history, using catalog elasticity")
        elasticity = product.elasticity
    forecast = ForecastStage(
        elasticity=elasticity,
        baseline_demand=estimate_baseline_demand(demand_records, config),
        demand_trend=detect_demand_trend(demand_records, config),
    )

    # 3. Optimisation
    optimization = find_optimal_price(
        current_price=product.current_price,
        cost=product.base_cost,
        min_margin_pct=product.min_margin_pct,
        max_price=product.max_price,
        elasticity=forecast.elasticity,
        competitor_price=competitor_price,
        baseline_demand=forecast.baseline_demand,
        config=config,
    )

    # 4. Stratégie
    strategy = apply_strategy_rules(
        recommended_price=optimization.optimal_price,
        cost=product.base_cost,
        min_margin_pct=product.min_margin_pct,
        competitor_price=competitor_price,
        inventory=product.inventory,
        demand_trend=forecast.demand_trend,
        config=config,
    )

    recommendation = Recommendation(
        current_price=product.current_price,
        recommended_price=strategy.final_price,
        expected_profit_change=optimization.profit_increase_pct,
        reason=strategy.reason,
        confidence=confidence_score(len(demand_records), config),
    )

    logger.info(
        f"Product {product.id}: optimal {optimization.optimal_price}, "
        f"recommended {strategy.final_price} ({strategy.reason})"
    )

    return PipelineResult(
        scraper=scraper,
        forecast=forecast,
        optimization=optimization,
        strategy=strategy,
        recommendation=recommendation,
    )
