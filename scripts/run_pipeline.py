"""
Script pour lancer le pipeline de recommandation sur un produit du catalogue.

Usage (depuis la racine du projet) :

    python -m scripts.run_pipeline --product-id 42
    python -m scripts.run_pipeline --product-id 42 --apply

Affiche le résultat du pipeline en JSON sur stdout. Avec `--apply`, le prix
recommandé est ensuite écrit sur le produit et dans l'historique de pricing.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from price_advisor.exceptions import DataAccessError, ProductNotFoundError
from price_advisor.logging_config import configure_logging
from price_advisor.service import apply_recommendation, recommend_price

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the pricing pipeline for one product.")
    parser.add_argument("--product-id", type=int, required=True, help="ID du produit.")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Applique le prix recommandé (met à jour le produit et l'historique).",
    )
    args = parser.parse_args(argv)

    configure_logging()

    try:
        result = recommend_price(args.product_id)
    except ProductNotFoundError as e:
        print(json.dumps({"error": True, "error_type": type(e).__name__, "error_message": str(e)}))
        return 1
    except DataAccessError as e:
        logger.error(f"Catalog unavailable: {e}")
        return 2

    output = result.to_dict()
    if args.apply:
        recommendation = result.recommendation
        output["applied"] = apply_recommendation(
            args.product_id,
            recommendation.recommended_price,
            recommendation.reason,
        )

    # Uniquement le JSON sur stdout pour que l'appelant puisse le parser
    print(json.dumps(output, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
