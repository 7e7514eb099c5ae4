"""
Moteur de recommandation de prix.

Ce package contient :
- la configuration globale du moteur (`config`),
- les modèles de demande et d'élasticité (`models`),
- la recherche du prix optimal (`optimizer`),
- les règles de stratégie métier (`strategy`),
- le score de santé du pricing (`health`),
- le pipeline complet (`pipeline`),
- les interfaces vers la base de données (`interfaces`).

Le moteur ne conserve aucun état entre deux appels.
"""

from .health import HealthReport, score_product_health
from .models import calculate_elasticity, calculate_profit, forecast_demand
from .optimizer import OptimizationResult, find_optimal_price
from .pipeline import PipelineResult, run_pipeline
from .strategy import DemandTrend, StrategyResult, apply_strategy_rules

__all__ = [
    "DemandTrend",
    "HealthReport",
    "OptimizationResult",
    "PipelineResult",
    "StrategyResult",
    "apply_strategy_rules",
    "calculate_elasticity",
    "calculate_profit",
    "find_optimal_price",
    "forecast_demand",
    "run_pipeline",
    "score_product_health",
]
