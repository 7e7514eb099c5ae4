"""
Initialisation du logging pour les scripts du moteur.
"""

import logging
from typing import Optional

from .config import Settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure le logger racine selon les settings.

    Les modules du package utilisent `logging.getLogger(__name__)` et
    n'installent aucun handler eux-mêmes.
    """
    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.log_format)
    logging.getLogger(__name__).debug(f"Logging configured (level: {settings.log_level})")
