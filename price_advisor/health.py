"""
Score de santé du pricing d'un produit.

Heuristique indépendante du pipeline : on part de 100 points et on
retire des points (cumulables) pour :
- une marge sous le minimum (-35) ou à moins de 5 points du minimum (-10),
- un prix > 20 % (-30) ou > 5 % (-10) au-dessus du prix concurrent moyen,
- aucun prix concurrent (-15),
- aucune donnée de vente ni prix concurrent (-10, en plus du point précédent),
- un stock entre 1 et 4 unités (-5).

Statut : >= 80 « healthy », >= 50 « attention », sinon « critical ».
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd  # type: ignore

from .config import PricingConfig, get_default_pricing_config
from .interfaces.records import CompetitorPriceRecord, DemandRecord, Product
from .rounding import round_half_up

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
ATTENTION = "attention"
CRITICAL = "critical"


@dataclass
class HealthReport:
    product_id: Optional[int]
    score: int
    status: str
    margin_pct: Optional[int]
    competitor_count: int
    avg_competitor_price: Optional[int]
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "productId": data["product_id"],
            "score": data["score"],
            "status": data["status"],
            "marginPct": data["margin_pct"],
            "competitorCount": data["competitor_count"],
            "avgCompetitorPrice": data["avg_competitor_price"],
            "issues": data["issues"],
        }


def health_status(score: int) -> str:
    if score >= 80:
        return HEALTHY
    if score >= 50:
        return ATTENTION
    return CRITICAL


def latest_competitor_prices(records: Sequence[CompetitorPriceRecord]) -> pd.Series:
    """
    Prix le plus récent de chaque concurrent.

    Les enregistrements sont supposés déjà triés du plus récent au plus
    ancien : on garde la première occurrence de chaque nom.
    """
    if not records:
        return pd.Series([], dtype=float)
    df = pd.DataFrame(
        [{"competitor_name": r.competitor_name, "price": r.price} for r in records]
    )
    return df.drop_duplicates(subset="competitor_name", keep="first")["price"]


def score_product_health(
    product: Product,
    competitor_records: Sequence[CompetitorPriceRecord],
    demand_records: Sequence[DemandRecord],
    config: Optional[PricingConfig] = None,
) -> HealthReport:
    """
    Calcule le score de santé d'un produit.

    La marge est la marge sur coût (même base que `min_margin_pct`) ;
    elle n'est pas évaluée quand le coût est nul.
    """
    config = config or get_default_pricing_config()
    score = 100
    issues: List[str] = []

    margin_pct: Optional[float] = None
    if product.base_cost > 0:
        margin_pct = (product.current_price - product.base_cost) / product.base_cost * 100
        if margin_pct < product.min_margin_pct:
            score -= 35
            issues.append("Margin below minimum")
        elif margin_pct < product.min_margin_pct + 5:
            score -= 10
            issues.append("Margin close to minimum")

    latest = latest_competitor_prices(competitor_records)
    avg_competitor_price: Optional[float] = None
    if len(latest) > 0:
        avg_competitor_price = float(latest.mean())
        if product.current_price > avg_competitor_price * 1.2:
            score -= 30
            issues.append("Priced more than 20% above competitors")
        elif product.current_price > avg_competitor_price * 1.05:
            score -= 10
            issues.append("Priced above competitors")

    if not competitor_records:
        score -= 15
        issues.append("No competitor data")
        if not demand_records:
            score -= 10
            issues.append("No demand history")

    if 0 < product.inventory < config.low_inventory_threshold:
        score -= 5
        issues.append("Low inventory")

    score = max(0, min(100, score))
    report = HealthReport(
        product_id=product.id,
        score=score,
        status=health_status(score),
        margin_pct=None if margin_pct is None else round_half_up(margin_pct),
        competitor_count=int(len(latest)),
        avg_competitor_price=None if avg_competitor_price is None else round_half_up(avg_competitor_price),
        issues=issues,
    )
    logger.debug(f"Health for product {product.id}: {report.score} ({report.status})")
    return report


def summarize_health(reports: Iterable[HealthReport]) -> Dict[str, int]:
    """Nombre de produits par statut."""
    counts = Counter(r.status for r in reports)
    return {status: counts.get(status, 0) for status in (HEALTHY, ATTENTION, CRITICAL)}
