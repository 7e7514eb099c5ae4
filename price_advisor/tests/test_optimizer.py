"""
Tests unitaires pour optimizer.py
"""

import math
from unittest.mock import patch

import pytest

from price_advisor.optimizer import (
    _build_price_grid,
    find_optimal_price,
    minimum_price,
    price_bounds,
    simulate_profit_for_price_grid,
)

# Concurrent très cher : aucune influence sur la demande
NO_COMPETITOR = 1_000_000


class TestPriceBounds:
    """Tests pour minimum_price / price_bounds / _build_price_grid."""

    def test_minimum_price_rounds_up(self):
        assert minimum_price(8000, 15) == 9200
        assert minimum_price(4500, 20) == 5400
        assert minimum_price(999, 10) == math.ceil(999 * 1.1)

    def test_default_ceiling_is_one_and_a_half_current_price(self):
        assert price_bounds(7999, 4500, 20) == (5400, 7999 * 1.5)

    def test_zero_max_price_means_no_ceiling(self):
        assert price_bounds(1000, 500, 10, max_price=0)[1] == 1500

    def test_build_price_grid_includes_stop(self):
        assert _build_price_grid(100, 120, 10) == [100, 110, 120]

    def test_build_price_grid_empty_when_stop_below_start(self):
        assert _build_price_grid(100, 90, 1) == []


class TestSimulateProfitForPriceGrid:
    """Tests pour simulate_profit_for_price_grid."""

    @patch("price_advisor.optimizer.forecast_demand")
    def test_profit_uses_forecast(self, mock_forecast_demand):
        mock_forecast_demand.return_value = 10

        results = simulate_profit_for_price_grid(
            price_grid=[1000, 1500],
            current_price=1200,
            cost=800,
            elasticity=1.2,
            competitor_price=1100,
            baseline_demand=12,
            competitor_weight=0.3,
        )

        assert [r["price"] for r in results] == [1000, 1500]
        assert [r["profit"] for r in results] == [2000, 7000]
        assert mock_forecast_demand.call_count == 2


class TestFindOptimalPrice:
    """Tests pour find_optimal_price."""

    def test_within_constraints(self):
        result = find_optimal_price(10000, 8000, 15, 12000, 1.2, 9500, 100)

        assert 9200 <= result.optimal_price <= 12000
        assert result.expected_demand > 0
        assert result.expected_profit > 0
        assert isinstance(result.profit_increase_pct, int)

    def test_respects_minimum_margin(self):
        result = find_optimal_price(10000, 8000, 20, 15000, 1.2, 9500, 100)
        assert result.optimal_price >= minimum_price(8000, 20)

    @pytest.mark.parametrize(
        "current_price,cost,min_margin,max_price,elasticity,competitor_price",
        [
            (7999, 4500, 20, 9999, 1.2, 7499),
            (7999, 4500, 20, None, 0.5, 6000),
            (5000, 1000, 0, 6000, 3.0, 9000),
            (2000, 1500, 50, 5000, -1.5, 2500),
            (1000, 900, 5, None, -3.0, 800),
        ],
    )
    def test_optimal_price_always_in_range(
        self, current_price, cost, min_margin, max_price, elasticity, competitor_price
    ):
        result = find_optimal_price(
            current_price, cost, min_margin, max_price, elasticity, competitor_price, 30
        )
        min_price, max_bound = price_bounds(current_price, cost, min_margin, max_price)

        assert min_price <= result.optimal_price <= max_bound

    def test_monotonic_profit_returns_upper_bound(self):
        """Demande constante : le profit croît avec le prix."""
        result = find_optimal_price(1500, 1000, 0, 2000, 0.0, NO_COMPETITOR, 10)

        assert result.optimal_price == 2000
        assert result.expected_demand == 10
        assert result.expected_profit == 10000
        # (10000 - 5000) / 5000
        assert result.profit_increase_pct == 100

    def test_default_ceiling_reached(self):
        result = find_optimal_price(1000, 500, 0, None, 0.0, NO_COMPETITOR, 10)
        assert result.optimal_price == 1500

    def test_interior_maximum_refined_by_fine_pass(self):
        """
        demande = round(300 - 0.2 * prix) : profit maximal autour de 1000.

        La passe grossière (pas 30) ne bat pas le prix courant ; la passe fine
        (pas 6) trouve 1012 grâce à l'arrondi de la demande.
        """
        result = find_optimal_price(1000, 500, 0, 2000, -2.0, NO_COMPETITOR, 100)

        assert result.optimal_price == 1012
        assert result.expected_demand == 98
        assert result.expected_profit == 512 * 98
        assert result.profit_increase_pct == 0

    def test_current_price_above_ceiling_is_clamped(self):
        # Le prix courant (3000) bat toute la grille mais dépasse le plafond
        result = find_optimal_price(3000, 1000, 0, 2000, 0.0, NO_COMPETITOR, 10)

        assert result.optimal_price == 2000
        assert result.expected_profit == 10000
        assert result.profit_increase_pct == -50

    def test_current_price_above_ceiling_keeps_best_grid_price(self):
        """
        Concurrent à 1200 : la demande tombe à 9 au-delà de 1440.

        1440 (profit 9400) bat le plafond 1500 (profit 9000).
        """
        result = find_optimal_price(3000, 500, 0, 1500, 0.0, 1200, 10)
        min_price, max_bound = price_bounds(3000, 500, 0, 1500)
        in_range_profits = [
            r["profit"]
            for r in simulate_profit_for_price_grid(
                _build_price_grid(min_price, max_bound, 20), 3000, 500, 0.0, 1200, 10, 0.3
            )
        ]

        assert result.optimal_price == 1440
        assert result.expected_demand == 10
        assert result.expected_profit == 9400
        assert result.expected_profit >= max(in_range_profits)

    @pytest.mark.parametrize("max_price", [1500, None])
    def test_floor_wins_when_floor_above_ceiling(self, max_price):
        # Plancher = 1000 * 2 = 2000 > plafond (1500)
        result = find_optimal_price(1000, 1000, 100, max_price, 1.2, 900, 10)

        assert result.optimal_price == 2000
        assert result.expected_profit == 1000 * result.expected_demand
        # Profit courant nul
        assert result.profit_increase_pct == 0

    def test_no_profit_increase_when_current_profit_not_positive(self):
        # Prix courant = coût : profit courant nul
        result = find_optimal_price(1000, 1000, 0, 1500, 0.0, NO_COMPETITOR, 10)

        assert result.profit_increase_pct == 0
        assert result.optimal_price == 1500

    def test_deterministic(self):
        args = (7999, 4500, 20, 9999, 1.37, 7499, 20)
        assert find_optimal_price(*args) == find_optimal_price(*args)

    def test_to_dict_keys(self):
        result = find_optimal_price(10000, 8000, 15, 12000, 1.2, 9500, 100)
        assert set(result.to_dict()) == {
            "optimalPrice",
            "expectedDemand",
            "expectedProfit",
            "profitIncreasePct",
        }
