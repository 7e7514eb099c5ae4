"""
Script pour simuler la demande et le profit sur une grille de prix.

Usage:
    python -m scripts.simulate_price_grid --cost 4500 --current-price 7999 \
        --competitor-price 7499 --price-grid 6000,7000,8000,9000

Tous les montants sont en centimes. N'accède pas à la base : toutes les
entrées sont passées en arguments. Le résultat est affiché en JSON.
"""

import argparse
import json
import sys
from typing import List, Optional

from price_advisor.config import get_default_pricing_config
from price_advisor.models.demand_model import simulate_price_grid


def _parse_price_grid(raw: str) -> List[int]:
    return [int(p.strip()) for p in raw.split(",") if p.strip()]


def main(argv: Optional[List[str]] = None) -> int:
    config = get_default_pricing_config()

    parser = argparse.ArgumentParser(description="Simule la demande et le profit pour une grille de prix.")
    parser.add_argument("--cost", type=int, required=True, help="Coût unitaire (centimes).")
    parser.add_argument("--current-price", type=int, required=True, help="Prix actuel (centimes).")
    parser.add_argument("--competitor-price", type=int, help="Prix concurrent (défaut : prix actuel).")
    parser.add_argument("--elasticity", type=float, default=config.default_elasticity)
    parser.add_argument("--baseline-demand", type=int, default=config.default_baseline_demand)
    parser.add_argument("--price-grid", required=True, help="Prix séparés par des virgules (ex: 6000,7000).")
    args = parser.parse_args(argv)

    try:
        price_grid = _parse_price_grid(args.price_grid)
    except ValueError:
        print(f"❌ Erreur: Format de grille de prix invalide: {args.price_grid}", file=sys.stderr)
        return 1

    if not price_grid:
        print("❌ Erreur: Grille de prix vide", file=sys.stderr)
        return 1

    if args.current_price <= 0:
        print("❌ Erreur: --current-price doit être > 0", file=sys.stderr)
        return 1

    competitor_price = args.competitor_price if args.competitor_price is not None else args.current_price

    df = simulate_price_grid(
        prices=price_grid,
        cost=args.cost,
        baseline_demand=args.baseline_demand,
        current_price=args.current_price,
        elasticity=args.elasticity,
        competitor_price=competitor_price,
    )
    print(json.dumps(json.loads(df.to_json(orient="records")), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
