"""Tests for the portfolio valuation fold."""

import pytest

from stock_market_mcp.tools.portfolio import (
    Holding,
    HoldingValuation,
    PortfolioValuation,
)


class TestHolding:
    """Tests for Holding.from_argument."""

    def test_valid(self):
        holding = Holding.from_argument({"symbol": " aapl ", "shares": 10})
        assert holding == Holding(symbol="aapl", shares=10)

    def test_fractional_shares(self):
        assert Holding.from_argument({"symbol": "VTI", "shares": 2.5}).shares == 2.5

    @pytest.mark.parametrize(
        "raw",
        [
            {"shares": 10},
            {"symbol": "", "shares": 10},
            {"symbol": "AAPL"},
            {"symbol": "AAPL", "shares": 0},
            {"symbol": "AAPL", "shares": "ten"},
            {"symbol": "AAPL", "shares": True},
            {"symbol": 42, "shares": 1},
            "AAPL",
            None,
        ],
    )
    def test_malformed_returns_none(self, raw):
        assert Holding.from_argument(raw) is None


class TestHoldingValuation:
    def test_line_rounds_for_display(self):
        valuation = HoldingValuation(Holding("aapl", 3), 123.4)

        assert valuation.render() == "3 shares of AAPL at $123.40 = $370.20"

    def test_value_is_unrounded(self):
        valuation = HoldingValuation(Holding("AAPL", 3), 123.4)
        assert valuation.value == 123.4 * 3


class TestPortfolioValuation:
    """Tests for the immutable accumulator."""

    def test_empty(self):
        valuation = PortfolioValuation()

        assert valuation.total == 0
        assert valuation.render() == "Portfolio Value:\n\n\nTotal Estimated Value: $0.00"

    def test_add_returns_new_instance(self):
        start = PortfolioValuation()
        after = start.add(Holding("AAPL", 10), 100.0)

        assert start.valued == ()
        assert len(after.valued) == 1

    def test_skip_excluded_from_lines_and_total(self):
        valuation = (
            PortfolioValuation()
            .add(Holding("AAPL", 10), 150.0)
            .skip("BAD", "no price data")
        )

        assert valuation.total == 1500.0
        assert "BAD" not in valuation.render()
        assert valuation.skipped[0].symbol == "BAD"
        assert valuation.skipped[0].reason == "no price data"

    def test_total_sums_unrounded_values(self):
        """Each line rounds on its own; the total is rounded once at the end."""
        valuation = (
            PortfolioValuation()
            .add(Holding("A", 1), 0.004)
            .add(Holding("B", 1), 0.004)
        )

        text = valuation.render()

        assert "1 shares of A at $0.00 = $0.00" in text
        assert valuation.total == pytest.approx(0.008)
        assert text.endswith("Total Estimated Value: $0.01")

    def test_duplicate_symbols_each_valued(self):
        valuation = (
            PortfolioValuation()
            .add(Holding("AAPL", 1), 10.0)
            .add(Holding("AAPL", 2), 10.0)
        )

        assert valuation.total == 30.0
        assert len(valuation.valued) == 2
