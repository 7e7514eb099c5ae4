"""
Configuration centrale pour le moteur de recommandation de prix.

Ce module définit :
- les constantes métier du moteur (élasticité par défaut, bornes,
  grille de recherche, règles de stratégie),
- les paramètres d'environnement (Supabase, niveau de log, devise).

Les montants sont exprimés en unités monétaires mineures (centimes).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Charger .env depuis la racine du projet
project_root = Path(__file__).parent.parent
load_dotenv(dotenv_path=project_root / ".env")


@dataclass(frozen=True)
class PricingConfig:
    """
    Paramètres du moteur de pricing.

    Les valeurs par défaut reproduisent le comportement de référence ;
    les modifier change les recommandations produites.
    """

    # Élasticité
    default_elasticity: float = 1.2
    min_elasticity: float = 0.5
    max_elasticity: float = 3.0

    # Demande
    default_baseline_demand: int = 50
    competitor_weight: float = 0.3
    demand_history_window: int = 30
    demand_trend_lag: int = 5

    # Grille de recherche
    max_price_multiplier: float = 1.5
    coarse_grid_divisions: int = 50
    fine_step_divisor: int = 5
    fine_window_steps: int = 2

    # Règles de stratégie
    low_inventory_threshold: int = 5
    low_inventory_markup: float = 1.1
    undercut_amount: int = 50
    weak_demand_factor: float = 0.95
    strong_demand_factor: float = 1.05

    # Confiance (en points)
    confidence_base: int = 70
    confidence_bonus_cap: int = 25
    confidence_max: int = 95

    # Nombre d'unités supposé pour estimer le gain d'un prix appliqué
    assumed_units_for_profit_estimate: int = 50


_DEFAULT_CONFIG = PricingConfig()


def get_default_pricing_config() -> PricingConfig:
    """Retourne la configuration par défaut (instance partagée, immuable)."""
    return _DEFAULT_CONFIG


@dataclass
class Settings:
    """Configuration d'environnement (base de données, logs)."""

    supabase_url: str = ""
    supabase_key: str = ""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @classmethod
    def from_env(cls) -> "Settings":
        """Crée une instance Settings depuis les variables d'environnement."""
        return cls(
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", os.getenv("SUPABASE_KEY", "")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
