# tests/services/test_calculators.py
"""
Unit tests for the valuation calculators and trade records.

These run without a database: every input is built in memory.
"""

from decimal import Decimal

import pytest

from finsight.models import TransactionType
from finsight.services.exceptions import InvalidTradeError, OversellError
from finsight.services.valuation import (
    CostBasisReplayCalculator,
    Holding,
    HoldingAssembler,
    ReplayResult,
    SummaryAggregator,
    TradeRecord,
)


def buy(quantity, price, symbol="AAPL") -> TradeRecord:
    return TradeRecord(symbol, TransactionType.BUY, quantity, price)


def sell(quantity, price, symbol="AAPL") -> TradeRecord:
    return TradeRecord(symbol, TransactionType.SELL, quantity, price)


# =============================================================================
# TRADE RECORD
# =============================================================================

class TestTradeRecord:
    """Construction-time validation of ledger entries."""

    def test_normalizes_symbol_and_numbers(self):
        trade = TradeRecord(" aapl ", "BUY", "10", 150)

        assert trade.symbol == "AAPL"
        assert trade.transaction_type == TransactionType.BUY
        assert trade.quantity == Decimal("10")
        assert trade.price == Decimal("150")
        assert trade.is_buy is True

    def test_float_goes_through_str(self):
        trade = buy(0.1, 0.3)
        assert trade.quantity == Decimal("0.1")
        assert trade.price == Decimal("0.3")

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidTradeError) as exc_info:
            TradeRecord("AAPL", "DIVIDEND", "1", "1")
        assert exc_info.value.field == "transaction_type"

    @pytest.mark.parametrize("quantity", ["0", "-1"])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(InvalidTradeError) as exc_info:
            buy(quantity, "100")
        assert exc_info.value.field == "quantity"

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidTradeError) as exc_info:
            buy("1", "-0.01")
        assert exc_info.value.field == "price"

    def test_zero_price_allowed(self):
        assert buy("1", "0").price == Decimal("0")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "abc", None, True])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(InvalidTradeError):
            buy(value, "100")

    def test_empty_symbol_rejected(self):
        with pytest.raises(InvalidTradeError):
            buy("1", "1", symbol="  ")

    def test_is_immutable(self):
        trade = buy("1", "1")
        with pytest.raises(AttributeError):
            trade.quantity = Decimal("2")


# =============================================================================
# COST BASIS REPLAY
# =============================================================================

class TestCostBasisReplayCalculator:

    @pytest.fixture
    def calc(self) -> CostBasisReplayCalculator:
        return CostBasisReplayCalculator()

    def test_empty_ledger(self, calc):
        assert calc.replay([]) == ReplayResult()

    def test_single_buy(self, calc):
        result = calc.replay([buy("10", "100")])

        assert result.quantity == Decimal("10")
        assert result.avg_cost == Decimal("100")
        assert result.realized == Decimal("0")

    def test_weighted_average_on_second_buy(self, calc):
        """10@100 + 5@120 -> 15 shares at 1600/15."""
        result = calc.replay([buy("10", "100"), buy("5", "120")])

        assert result.quantity == Decimal("15")
        assert result.avg_cost == Decimal("1600") / Decimal("15")
        assert round(result.avg_cost, 2) == Decimal("106.67")

    def test_sell_realizes_against_average_cost(self, calc):
        result = calc.replay([buy("10", "100"), sell("3", "150")])

        assert result.quantity == Decimal("7")
        assert result.avg_cost == Decimal("100")
        assert result.realized == Decimal("150")

    def test_sell_leaves_average_cost_unchanged(self, calc):
        result = calc.replay([buy("10", "100"), buy("10", "200"), sell("5", "50")])

        assert result.avg_cost == Decimal("150")
        assert result.realized == Decimal("-500")

    def test_realized_is_cumulative(self, calc):
        result = calc.replay([
            buy("10", "100"),
            sell("2", "110"),
            sell("3", "90"),
        ])
        assert result.realized == Decimal("20") + Decimal("-30")

    def test_full_liquidation(self, calc):
        result = calc.replay([buy("10", "100"), sell("10", "120")])

        assert result.quantity == Decimal("0")
        assert result.is_closed is True
        assert result.realized == Decimal("200")

    def test_buy_after_close_reopens_at_new_price(self, calc):
        result = calc.replay([
            buy("10", "100"),
            sell("10", "120"),
            buy("4", "80"),
        ])

        assert result.quantity == Decimal("4")
        assert result.avg_cost == Decimal("80")
        assert result.realized == Decimal("200")

    def test_oversell_rejected(self, calc):
        with pytest.raises(OversellError) as exc_info:
            calc.replay([buy("5", "100"), sell("6", "100")])

        assert exc_info.value.symbol == "AAPL"
        assert exc_info.value.requested == Decimal("6")
        assert exc_info.value.held == Decimal("5")

    def test_sell_before_any_buy_rejected(self, calc):
        with pytest.raises(OversellError):
            calc.replay([sell("1", "100"), buy("5", "100")])

    def test_oversell_message_uses_fixed_point_quantities(self, calc):
        with pytest.raises(OversellError) as exc_info:
            calc.replay([
                buy(Decimal("2.50000000"), "100"),
                sell(Decimal("2.50000000"), "100"),
                sell(Decimal("1.00000000"), "100"),
            ])

        message = str(exc_info.value)
        assert message == "Cannot sell 1 shares of AAPL. Only 0 shares available."
        assert "E-" not in message

    def test_mixed_symbols_rejected(self, calc):
        with pytest.raises(InvalidTradeError):
            calc.replay([buy("1", "1", "AAPL"), buy("1", "1", "MSFT")])

    def test_quantity_is_buys_minus_sells(self, calc):
        trades = [
            buy("3.5", "10"), buy("2", "11"), sell("1.25", "12"),
            buy("0.75", "9"), sell("4", "13"),
        ]
        expected = sum((t.quantity for t in trades if t.is_buy), Decimal("0")) - sum(
            (t.quantity for t in trades if not t.is_buy), Decimal("0")
        )
        assert calc.replay(trades).quantity == expected

    def test_no_intermediate_rounding(self, calc):
        """Three buys at thirds should not drift."""
        result = calc.replay([buy("1", "1"), buy("1", "2"), buy("1", "3")])
        assert result.avg_cost == Decimal("2")


# =============================================================================
# HOLDING ASSEMBLY
# =============================================================================

class TestHoldingAssembler:

    @pytest.fixture
    def assembler(self) -> HoldingAssembler:
        return HoldingAssembler()

    def test_with_price(self, assembler):
        holding = assembler.assemble(
            "AAPL", ReplayResult(Decimal("10"), Decimal("100")), Decimal("150")
        )

        assert holding.market_price == Decimal("150")
        assert holding.market_value == Decimal("1500")
        assert holding.cost_basis == Decimal("1000")
        assert holding.unrealized_pl == Decimal("500")
        assert holding.has_price is True

    def test_missing_price_values_at_zero(self, assembler):
        holding = assembler.assemble(
            "NEWCO", ReplayResult(Decimal("10"), Decimal("100")), None
        )

        assert holding.market_price == Decimal("0")
        assert holding.market_value == Decimal("0")
        assert holding.cost_basis == Decimal("1000")
        assert holding.has_price is False

    def test_closed_position_has_zero_cost_basis(self, assembler):
        holding = assembler.assemble(
            "AAPL",
            ReplayResult(Decimal("0"), Decimal("100"), Decimal("200")),
            Decimal("150"),
        )

        assert holding.cost_basis == Decimal("0")
        assert holding.market_value == Decimal("0")
        assert holding.realized == Decimal("200")


# =============================================================================
# SUMMARY AGGREGATION
# =============================================================================

class TestSummaryAggregator:

    def _holding(self, symbol, value, cost, realized="0", has_price=True) -> Holding:
        return Holding(
            symbol=symbol,
            quantity=Decimal("1"),
            avg_cost=Decimal(cost),
            market_price=Decimal(value),
            market_value=Decimal(value),
            cost_basis=Decimal(cost),
            realized=Decimal(realized),
            has_price=has_price,
        )

    def test_empty(self):
        summary = SummaryAggregator().aggregate([])

        assert summary.holdings == ()
        assert summary.total_value == Decimal("0")
        assert summary.total_cost == Decimal("0")
        assert summary.unrealized_pl == Decimal("0")
        assert summary.total_realized == Decimal("0")

    def test_sums_holdings(self):
        summary = SummaryAggregator().aggregate(
            [self._holding("AAPL", "150", "100", "5"), self._holding("MSFT", "0", "50", has_price=False)],
            portfolio_id=7,
        )

        assert summary.portfolio_id == 7
        assert summary.total_value == Decimal("150")
        assert summary.total_cost == Decimal("150")
        assert summary.unrealized_pl == Decimal("0")
        assert summary.total_realized == Decimal("5")
        assert summary.missing_prices == ["MSFT"]
