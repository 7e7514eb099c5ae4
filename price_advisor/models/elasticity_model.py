"""
Estimation de l'élasticité prix à partir de l'historique de ventes.

Élasticité = |variation % quantité| / |variation % prix|, moyennée sur les
paires d'observations consécutives puis bornée à [0.5, 3.0].

L'historique doit être fourni dans un ordre chronologique cohérent
(plus récent d'abord, tel que renvoyé par la couche d'accès aux données) :
réordonner les observations change les paires comparées, donc le résultat.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np  # type: ignore

from ..config import PricingConfig, get_default_pricing_config

logger = logging.getLogger(__name__)


def _price_quantity(observation: Any) -> Tuple[float, float]:
    if isinstance(observation, Mapping):
        return float(observation["price"]), float(observation["quantity"])
    return float(observation.price), float(observation.quantity)


def calculate_elasticity(
    history: Sequence[Any],
    config: Optional[PricingConfig] = None,
) -> float:
    """
    Calcule l'élasticité prix à partir d'une séquence ordonnée d'observations.

    Chaque observation expose `price` et `quantity` (attributs ou clés).
    Une paire (précédent, courant) contribue si le prix et la quantité
    précédents sont > 0 et si le prix a varié.

    Retourne l'élasticité par défaut (1.2) si moins de deux observations
    ou aucune paire exploitable.
    """
    config = config or get_default_pricing_config()

    if isinstance(history, (set, frozenset, dict)):
        raise TypeError("history must be an ordered sequence, not an unordered collection")

    if len(history) < 2:
        return config.default_elasticity

    observations = np.array([_price_quantity(o) for o in history], dtype=float)
    prices = observations[:, 0]
    quantities = observations[:, 1]

    prev_price, curr_price = prices[:-1], prices[1:]
    prev_qty, curr_qty = quantities[:-1], quantities[1:]

    valid = (prev_price > 0) & (prev_qty > 0)
    with np.errstate(divide="ignore", invalid="ignore"):
        price_change = np.where(valid, (curr_price - prev_price) / prev_price, 0.0)
        quantity_change = np.where(valid, (curr_qty - prev_qty) / prev_qty, 0.0)
    valid &= price_change != 0

    if not valid.any():
        logger.debug("No usable price change in history, using default elasticity")
        return config.default_elasticity

    contributions = np.abs(quantity_change[valid] / price_change[valid])
    elasticity = float(np.clip(contributions.mean(), config.min_elasticity, config.max_elasticity))

    logger.debug(f"Elasticity estimated from {int(valid.sum())} pairs: {elasticity:.4f}")
    return elasticity
