"""
Fixtures partagées pour les tests.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Racine du projet (pour `scripts.*`)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from price_advisor.interfaces.records import CompetitorPriceRecord, DemandRecord, Product


@pytest.fixture
def sample_product():
    """Produit de référence (montants en centimes)."""
    return Product(
        id=42,
        name="Wireless Headphones",
        sku="WH-001",
        base_cost=4500,
        current_price=7999,
        min_margin_pct=20,
        max_price=9999,
        inventory=40,
        demand_elasticity="1.2",
    )


@pytest.fixture
def sample_competitor_records():
    """Prix concurrents, du plus récent au plus ancien."""
    now = datetime(2024, 6, 1, 12, 0, 0)
    return [
        CompetitorPriceRecord("ShopA", 7499, now),
        CompetitorPriceRecord("ShopB", 8299, now - timedelta(days=1)),
        CompetitorPriceRecord("ShopA", 7999, now - timedelta(days=2)),
    ]


@pytest.fixture
def sample_demand_records():
    """Cinq ventes (moyenne 20 unités), de la plus récente à la plus ancienne."""
    now = datetime(2024, 6, 1)
    rows = [(7999, 22), (8499, 18), (7999, 20), (7499, 21), (7999, 19)]
    return [
        DemandRecord(price=price, quantity=qty, revenue=price * qty, recorded_at=now - timedelta(days=i))
        for i, (price, qty) in enumerate(rows)
    ]


@pytest.fixture
def make_demand_records():
    """Fabrique d'historiques synthétiques à prix constant."""

    def _make(quantities, price=1000):
        return [DemandRecord(price=price, quantity=q, revenue=price * q) for q in quantities]

    return _make
