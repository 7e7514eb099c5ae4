"""
Fonctions d'arrondi utilisées par le moteur.

`round()` de Python arrondit au pair le plus proche (0.5 -> 0, 2.5 -> 2) ;
les fixtures en centimes attendent un arrondi « demi vers le haut ».
"""

import math


def round_half_up(value: float) -> int:
    """Arrondit à l'entier le plus proche, les demis vers +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
