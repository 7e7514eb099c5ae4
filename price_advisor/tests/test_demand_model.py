"""
Tests unitaires pour models/demand_model.py
"""

import pandas as pd
import pytest

from price_advisor.models.demand_model import (
    calculate_profit,
    forecast_demand,
    simulate_price_grid,
    simulate_scenario,
)


class TestForecastDemand:
    """Tests pour forecast_demand."""

    def test_price_decrease_returns_non_negative_integer(self):
        """Baisse de 10 % avec élasticité 1.5 : variation de demande = 1.5 * -0.1."""
        demand = forecast_demand(100, 10000, 9000, 1.5, 9500)

        assert isinstance(demand, int)
        assert demand >= 0
        # demande = 100 * (1 - 0.15), concurrent plus cher : aucune influence
        assert demand == 85

    def test_unchanged_price_keeps_baseline(self):
        assert forecast_demand(100, 10000, 10000, 1.2, 10000) == 100

    def test_cheaper_competitor_reduces_demand(self):
        # influence = 0.3 * (9000 - 10000) / 10000 = -0.03
        assert forecast_demand(100, 10000, 10000, 1.2, 9000) == 97

    def test_pricier_competitor_has_no_effect(self):
        with_expensive_competitor = forecast_demand(100, 10000, 10000, 1.2, 12000)
        assert with_expensive_competitor == 100

    def test_competitor_weight_is_configurable(self):
        # influence = 0.5 * (9000 - 10000) / 10000 = -0.05
        assert forecast_demand(100, 10000, 10000, 1.2, 9000, competitor_weight=0.5) == 95

    def test_never_negative(self):
        """Une demande négative est ramenée à 0."""
        assert forecast_demand(100, 10000, 1000, 3.0, 10000) == 0
        assert forecast_demand(10, 10000, 50000, 3.0, 5000, 0.5) >= 0

    def test_rounds_half_up(self):
        # 10 * (1 + 1.0 * 0.05) = 10.5 -> 11
        assert forecast_demand(10, 1000, 1050, 1.0, 2000) == 11

    def test_zero_current_price_is_not_recovered(self):
        with pytest.raises(ZeroDivisionError):
            forecast_demand(100, 0, 1000, 1.2, 1000)

    def test_deterministic(self):
        args = (37, 7999, 8450, 1.37, 7499)
        assert forecast_demand(*args) == forecast_demand(*args)


class TestCalculateProfit:
    """Tests pour calculate_profit."""

    def test_profit(self):
        assert calculate_profit(15000, 10000, 100) == 500000

    def test_price_equals_cost(self):
        assert calculate_profit(10000, 10000, 100) == 0

    def test_zero_demand(self):
        assert calculate_profit(15000, 10000, 0) == 0
        assert calculate_profit(5000, 10000, 0) == 0

    def test_price_below_cost_is_negative(self):
        assert calculate_profit(9000, 10000, 10) == -10000


class TestSimulateScenario:
    """Tests pour simulate_scenario et simulate_price_grid."""

    def test_scenario_metrics(self):
        result = simulate_scenario(
            price=12000,
            cost=8000,
            baseline_demand=100,
            current_price=10000,
            elasticity=1.0,
            competitor_price=12000,
        )

        assert result.demand == 120
        assert result.revenue == 12000 * 120
        assert result.profit == 4000 * 120
        assert result.margin_pct == pytest.approx(33.333, rel=1e-3)

    def test_zero_price_margin(self):
        result = simulate_scenario(
            price=0,
            cost=100,
            baseline_demand=10,
            current_price=100,
            elasticity=0.0,
            competitor_price=100,
        )
        assert result.margin_pct == 0.0
        assert result.revenue == 0

    def test_price_grid_dataframe(self):
        df = simulate_price_grid(
            prices=[6000, 7000, 8000],
            cost=4500,
            baseline_demand=20,
            current_price=7999,
            elasticity=1.2,
            competitor_price=7499,
        )

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["price", "demand", "revenue", "profit", "margin_pct"]
        assert df["price"].tolist() == [6000, 7000, 8000]
        assert (df["demand"] >= 0).all()
        assert (df["profit"] == (df["price"] - 4500) * df["demand"]).all()
