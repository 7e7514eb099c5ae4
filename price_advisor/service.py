"""
Opérations appelées par l'API : lecture du catalogue, exécution du
pipeline, application d'une recommandation, santé des produits.

Ce module orchestre les entrées/sorties autour du moteur pur ;
toute la logique de calcul vit dans `pipeline`, `optimizer`,
`strategy` et `health`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .config import PricingConfig, get_default_pricing_config
from .health import HealthReport, score_product_health
from .interfaces import data_access
from .pipeline import PipelineResult, run_pipeline
from .rounding import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_APPLY_REASON = "Price optimization"


def recommend_price(product_id: int, config: Optional[PricingConfig] = None) -> PipelineResult:
    """
    Point d'entrée de haut niveau pour obtenir un prix recommandé.

    Lève ProductNotFoundError avant toute exécution du pipeline si le
    produit n'existe pas.
    """
    config = config or get_default_pricing_config()

    product = data_access.get_product(product_id)
    competitor_records = data_access.get_competitor_prices(product_id)
    demand_records = data_access.get_demand_records(product_id, limit=config.demand_history_window)

    return run_pipeline(product, competitor_records, demand_records, config)


def estimate_profit_change_pct(
    previous_price: int,
    new_price: int,
    cost: int,
    config: Optional[PricingConfig] = None,
) -> int:
    """
    Gain de profit estimé (en %) en passant de `previous_price` à `new_price`,
    à volume constant (50 unités). 0 si le profit de départ est <= 0.
    """
    config = config or get_default_pricing_config()
    units = config.assumed_units_for_profit_estimate
    profit_before = (previous_price - cost) * units
    profit_after = (new_price - cost) * units
    if profit_before <= 0:
        return 0
    return round_half_up(((profit_after - profit_before) / profit_before) * 100)


def apply_recommendation(
    product_id: int,
    recommended_price: int,
    reason: Optional[str] = None,
    config: Optional[PricingConfig] = None,
) -> Dict[str, Any]:
    """
    Applique un prix recommandé : met à jour le prix du produit et
    enregistre l'opération dans l'historique de pricing.

    Les deux écritures ne sont pas isolées : deux appels concurrents sur
    le même produit peuvent produire une mise à jour perdue.
    """
    if recommended_price <= 0:
        raise ValueError(f"recommended_price must be > 0 (got {recommended_price})")

    product = data_access.get_product(product_id)

    data_access.update_product_price(product_id, recommended_price)

    history = data_access.create_pricing_history_record(
        {
            "product_id": product_id,
            "previous_price": product.current_price,
            "new_price": recommended_price,
            "recommended_price": recommended_price,
            "reason": reason or DEFAULT_APPLY_REASON,
            "expected_profit_change": estimate_profit_change_pct(
                product.current_price, recommended_price, product.base_cost, config
            ),
            "applied": 1,
        }
    )
    logger.info(f"Product {product_id}: price {product.current_price} -> {recommended_price} applied")

    return {
        "success": True,
        "message": "Price updated successfully",
        "newPrice": recommended_price,
        "history": history,
    }


def get_products_health(user_id: int, config: Optional[PricingConfig] = None) -> List[HealthReport]:
    """Score de santé de chaque produit d'un utilisateur."""
    config = config or get_default_pricing_config()
    reports: List[HealthReport] = []
    for product in data_access.get_user_products(user_id):
        reports.append(
            score_product_health(
                product,
                data_access.get_competitor_prices(product.id),
                data_access.get_demand_records(product.id, limit=config.demand_history_window),
                config,
            )
        )
    return reports
