"""
Sous-package `interfaces` du moteur de recommandation.

Responsabilités :
- définir les snapshots d'entrée (`records`) lus par le moteur,
- centraliser les appels à Supabase (`data_access`),
- faciliter le test (en permettant le mocking de cette couche).
"""

from .records import CompetitorPriceRecord, DemandRecord, Product

__all__ = [
    "CompetitorPriceRecord",
    "DemandRecord",
    "Product",
]
