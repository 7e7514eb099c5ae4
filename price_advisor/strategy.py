"""
Règles de stratégie appliquées au prix proposé par l'optimiseur.

Les règles s'exécutent dans un ordre fixe sur un prix courant
(initialisé au prix recommandé). Chaque règle qui se déclenche remplace
le prix et la raison ; une règle plus tardive peut annuler l'effet d'une
règle précédente. La raison finale est celle de la dernière règle
déclenchée.

Ordre :
1. plancher de marge,
2. stock faible (+10 %),
3. sous-cotation du concurrent (déclenchée sur le prix recommandé
   d'origine, pas sur le prix courant),
4. demande faible (-5 %, sans passer sous le plancher),
5. demande forte (+5 %, sans re-contrôle du plancher ni du plafond).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .config import PricingConfig, get_default_pricing_config
from .optimizer import minimum_price

logger = logging.getLogger(__name__)


class DemandTrend(str, Enum):
    STRONG = "strong"
    WEAK = "weak"
    NEUTRAL = "neutral"


DEFAULT_REASON = "optimization recommended"


@dataclass(frozen=True)
class StrategyContext:
    """Entrées immuables partagées par toutes les règles."""

    recommended_price: int
    min_price: int
    competitor_price: int
    inventory: int
    demand_trend: DemandTrend
    config: PricingConfig


@dataclass(frozen=True)
class StrategyRule:
    """
    Règle métier : `adjust(prix_courant, contexte)` retourne le nouveau prix
    si la règle se déclenche, None sinon.
    """

    name: str
    adjust: Callable[[int, StrategyContext], Optional[int]]


@dataclass(frozen=True)
class StrategyResult:
    final_price: int
    reason: str
    # Règles déclenchées, dans l'ordre (la raison est la dernière)
    fired_rules: Tuple[str, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        return {"finalPrice": self.final_price, "reason": self.reason}


def _margin_floor(price: int, ctx: StrategyContext) -> Optional[int]:
    if price < ctx.min_price:
        return ctx.min_price
    return None


def _low_inventory(price: int, ctx: StrategyContext) -> Optional[int]:
    if ctx.inventory < ctx.config.low_inventory_threshold:
        return math.ceil(price * ctx.config.low_inventory_markup)
    return None


def _undercut_competitor(price: int, ctx: StrategyContext) -> Optional[int]:
    # Comparé au prix recommandé d'origine, appliqué au prix courant
    if ctx.competitor_price > 0 and ctx.recommended_price > ctx.competitor_price:
        undercut = ctx.competitor_price - ctx.config.undercut_amount
        if undercut >= ctx.min_price:
            return undercut
    return None


def _weak_demand(price: int, ctx: StrategyContext) -> Optional[int]:
    if ctx.demand_trend == DemandTrend.WEAK and price > ctx.min_price:
        return max(ctx.min_price, math.floor(price * ctx.config.weak_demand_factor))
    return None


def _strong_demand(price: int, ctx: StrategyContext) -> Optional[int]:
    if ctx.demand_trend == DemandTrend.STRONG:
        return math.ceil(price * ctx.config.strong_demand_factor)
    return None


STRATEGY_RULES: List[StrategyRule] = [
    StrategyRule("margin floor", _margin_floor),
    StrategyRule("low inventory", _low_inventory),
    StrategyRule("undercut competitor", _undercut_competitor),
    StrategyRule("weak demand", _weak_demand),
    StrategyRule("strong demand", _strong_demand),
]


def apply_strategy_rules(
    recommended_price: int,
    cost: int,
    min_margin_pct: int,
    competitor_price: int,
    inventory: int,
    demand_trend: Union[DemandTrend, str] = DemandTrend.NEUTRAL,
    config: Optional[PricingConfig] = None,
) -> StrategyResult:
    """
    Applique les règles de stratégie, dans l'ordre, au prix recommandé.

    Retourne le prix final et la raison de la dernière règle déclenchée
    ("optimization recommended" si aucune règle ne s'est déclenchée).
    """
    config = config or get_default_pricing_config()
    ctx = StrategyContext(
        recommended_price=recommended_price,
        min_price=minimum_price(cost, min_margin_pct),
        competitor_price=competitor_price,
        inventory=inventory,
        demand_trend=DemandTrend(demand_trend),
        config=config,
    )

    price, reason = recommended_price, DEFAULT_REASON
    fired: List[str] = []
    for rule in STRATEGY_RULES:
        adjusted = rule.adjust(price, ctx)
        if adjusted is None:
            continue
        logger.debug(f"Rule '{rule.name}' fired: {price} -> {adjusted}")
        fired.append(rule.name)
        price, reason = adjusted, rule.name

    return StrategyResult(final_price=int(price), reason=reason, fired_rules=tuple(fired))
