"""
Sous-package `models` du moteur de recommandation.

- `demand_model.py` : prévision de demande, profit, simulation de scénarios,
- `elasticity_model.py` : estimation de l'élasticité prix depuis l'historique.
"""

from .demand_model import (
    ScenarioResult,
    calculate_profit,
    forecast_demand,
    simulate_price_grid,
    simulate_scenario,
)
from .elasticity_model import calculate_elasticity

__all__ = [
    "ScenarioResult",
    "calculate_elasticity",
    "calculate_profit",
    "forecast_demand",
    "simulate_price_grid",
    "simulate_scenario",
]
