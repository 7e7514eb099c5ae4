"""
Accès au catalogue produits pour le moteur de recommandation.

Ce module est la seule frontière entre le moteur (fonctions pures) et
la base de données Supabase/PostgreSQL. Il :
- lit les snapshots produit, prix concurrents et historique de ventes,
- écrit le nouveau prix et l'historique de pricing quand l'appelant
  applique une recommandation.

Tables attendues : `products`, `competitor_prices`, `demand_data`,
`pricing_history` (colonnes en snake_case).

Les écritures ne sont pas transactionnelles : deux appelants qui
appliquent une recommandation au même produit en parallèle peuvent
s'écraser mutuellement (dernière écriture gagnante).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from supabase import Client, create_client  # type: ignore

from ..config import Settings
from ..exceptions import DataAccessError, ProductNotFoundError
from .records import CompetitorPriceRecord, DemandRecord, Product

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Retourne un client Supabase initialisé (créé une seule fois).
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    settings = Settings.from_env()
    if not settings.supabase_url or not settings.supabase_key:
        raise DataAccessError(
            "Les variables d'environnement SUPABASE_URL et SUPABASE_SERVICE_ROLE_KEY/SUPABASE_KEY "
            "doivent être configurées pour accéder au catalogue."
        )

    _supabase_client = create_client(settings.supabase_url, settings.supabase_key)
    return _supabase_client


def _rows(response: Any) -> List[Dict[str, Any]]:
    # Vérifier si response.data existe (compatible avec différentes versions de Supabase)
    if not hasattr(response, "data"):
        raise DataAccessError("Réponse Supabase invalide: pas d'attribut 'data'")
    data = response.data or []
    return data if isinstance(data, list) else [data]


def get_product(product_id: int) -> Product:
    """
    Récupère le snapshot d'un produit.

    Lève ProductNotFoundError si le produit n'existe pas.
    """
    client = get_supabase_client()

    response = (
        client.table("products")
        .select("*")
        .eq("id", product_id)
        .limit(1)
        .execute()
    )
    rows = _rows(response)
    if not rows:
        raise ProductNotFoundError(product_id)

    return Product.from_row(rows[0])


def get_user_products(user_id: int) -> List[Product]:
    """Liste les produits d'un utilisateur (plus récents d'abord)."""
    client = get_supabase_client()

    response = (
        client.table("products")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Product.from_row(row) for row in _rows(response)]


def get_competitor_prices(product_id: int) -> List[CompetitorPriceRecord]:
    """
    Récupère les prix concurrents d'un produit, du plus récent au plus ancien.
    """
    client = get_supabase_client()

    response = (
        client.table("competitor_prices")
        .select("*")
        .eq("product_id", product_id)
        .order("recorded_at", desc=True)
        .execute()
    )
    return [CompetitorPriceRecord.from_row(row) for row in _rows(response)]


def get_demand_records(product_id: int, limit: int = 100) -> List[DemandRecord]:
    """
    Récupère l'historique de ventes d'un produit, du plus récent au plus ancien.

    L'ordre est significatif : l'estimation d'élasticité compare les
    enregistrements consécutifs.
    """
    client = get_supabase_client()

    response = (
        client.table("demand_data")
        .select("*")
        .eq("product_id", product_id)
        .order("recorded_at", desc=True)
        .limit(limit)
        .execute()
    )
    return [DemandRecord.from_row(row) for row in _rows(response)]


def update_product_price(product_id: int, new_price: int) -> None:
    client = get_supabase_client()
    response = (
        client.table("products")
        .update({"current_price": int(new_price)})
        .eq("id", product_id)
        .execute()
    )
    _rows(response)
    logger.info(f"Product {product_id}: current_price set to {new_price}")


def create_pricing_history_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Insère une ligne dans `pricing_history` et la retourne."""
    client = get_supabase_client()
    response = client.table("pricing_history").insert(record).execute()
    rows = _rows(response)
    return rows[0] if rows else record


def get_pricing_history(product_id: int, limit: int = 50) -> List[Dict[str, Any]]:
    client = get_supabase_client()
    response = (
        client.table("pricing_history")
        .select("*")
        .eq("product_id", product_id)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return _rows(response)
