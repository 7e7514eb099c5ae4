"""
Enregistrements d'entrée du moteur de recommandation.

Ces dataclasses sont des snapshots en lecture seule des données
fournies par le catalogue (produit, prix concurrents, historique de ventes).
Le moteur ne les modifie jamais.

Tous les montants sont des entiers en unités monétaires mineures (centimes).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from ..config import get_default_pricing_config
from ..exceptions import InvalidProductError


def _pick(row: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Lit une colonne en snake_case (Supabase) ou camelCase (API)."""
    if snake in row:
        return row[snake]
    return row.get(camel, default)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return date_parser.isoparse(str(value))


@dataclass(frozen=True)
class Product:
    """
    Snapshot d'un produit du catalogue.

    `current_price` doit être strictement positif : le modèle de demande
    divise par ce prix. La validation est faite à la construction afin
    que le pipeline ne soit jamais invoqué avec un snapshot invalide.
    """

    base_cost: int
    current_price: int
    min_margin_pct: int = 15
    max_price: Optional[int] = None
    inventory: int = 0
    demand_elasticity: Optional[str] = "1.2"
    id: Optional[int] = None
    name: Optional[str] = None
    sku: Optional[str] = None
    user_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.current_price <= 0:
            raise InvalidProductError(
                f"current_price must be > 0 (got {self.current_price}) for product {self.id}"
            )
        if self.base_cost < 0:
            raise InvalidProductError(f"base_cost must be >= 0 (got {self.base_cost})")
        if self.inventory < 0:
            raise InvalidProductError(f"inventory must be >= 0 (got {self.inventory})")
        # Fait échouer tôt une élasticité non numérique
        _ = self.elasticity

    @property
    def elasticity(self) -> float:
        """Élasticité déclarée sur la fiche produit (1.2 si absente)."""
        if self.demand_elasticity is None or str(self.demand_elasticity).strip() == "":
            return get_default_pricing_config().default_elasticity
        try:
            return float(self.demand_elasticity)
        except (TypeError, ValueError) as e:
            raise InvalidProductError(
                f"demand_elasticity is not numeric: {self.demand_elasticity!r}"
            ) from e

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Product":
        max_price = _pick(row, "max_price", "maxPrice")
        elasticity = _pick(row, "demand_elasticity", "demandElasticity", "1.2")
        return cls(
            id=row.get("id"),
            name=row.get("name"),
            sku=row.get("sku"),
            user_id=_pick(row, "user_id", "userId"),
            base_cost=int(_pick(row, "base_cost", "baseCost")),
            current_price=int(_pick(row, "current_price", "currentPrice")),
            min_margin_pct=int(_pick(row, "min_margin", "minMargin", 15)),
            # 0 est traité comme « pas de plafond »
            max_price=int(max_price) if max_price else None,
            inventory=int(_pick(row, "inventory", "inventory", 0) or 0),
            demand_elasticity=None if elasticity is None else str(elasticity),
        )


@dataclass(frozen=True)
class CompetitorPriceRecord:
    """Prix relevé chez un concurrent."""

    competitor_name: str
    price: int
    recorded_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CompetitorPriceRecord":
        return cls(
            competitor_name=str(_pick(row, "competitor_name", "competitorName")),
            price=int(row["price"]),
            recorded_at=_parse_timestamp(_pick(row, "recorded_at", "recordedAt")),
        )


@dataclass(frozen=True)
class DemandRecord:
    """Ventes observées à un prix donné."""

    price: int
    quantity: int
    revenue: int = 0
    recorded_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DemandRecord":
        return cls(
            price=int(row["price"]),
            quantity=int(row["quantity"]),
            revenue=int(row.get("revenue") or 0),
            recorded_at=_parse_timestamp(_pick(row, "recorded_at", "recordedAt")),
        )
