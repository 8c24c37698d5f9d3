# finsight/services/valuation/calculators.py
"""
Point-in-time valuation calculators.

Each calculator follows the Single Responsibility Principle:
- CostBasisReplayCalculator: Folds one symbol's ledger into (quantity, avg_cost, realized)
- HoldingAssembler: Joins a replay result with the price snapshot
- SummaryAggregator: Sums holdings into portfolio totals

Design Principles:
- Stateless (no instance state, pure functions)
- Receives all inputs explicitly, performs no I/O
- Uses Decimal for ALL financial calculations, no intermediate rounding

Usage:
    replay = CostBasisReplayCalculator().replay(trades_for_symbol)
    holding = HoldingAssembler().assemble("AAPL", replay, Decimal("150"))
    summary = SummaryAggregator().aggregate([holding])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from finsight.services.constants import ZERO
from finsight.services.exceptions import InvalidTradeError, OversellError
from finsight.services.valuation.types import (
    Holding,
    PortfolioSummary,
    ReplayResult,
    TradeRecord,
)

logger = logging.getLogger(__name__)


# =============================================================================
# COST BASIS REPLAY
# =============================================================================

class CostBasisReplayCalculator:
    """
    Replays one symbol's ordered trades through the average-cost method.

    BUY q @ p:
        avg_cost = (held_qty × avg_cost + q × p) ÷ (held_qty + q)
        held_qty += q
        (a BUY into a flat position opens at p)

    SELL q @ p:
        realized += q × (p - avg_cost)
        held_qty -= q
        avg_cost unchanged

    Trades are taken in the order given; the caller is responsible for
    (created_at, id) ordering.
    """

    def replay(self, trades: Sequence[TradeRecord]) -> ReplayResult:
        """
        Fold a single symbol's trades into its final position.

        Args:
            trades: Trades for exactly one symbol, oldest first

        Returns:
            ReplayResult with final quantity, average cost and realized P&L

        Raises:
            InvalidTradeError: If trades span more than one symbol
            OversellError: If a SELL exceeds the quantity held at that point
        """
        held_qty = ZERO
        held_cost = ZERO
        realized = ZERO
        symbol: str | None = None

        for trade in trades:
            if symbol is None:
                symbol = trade.symbol
            elif trade.symbol != symbol:
                raise InvalidTradeError(
                    f"Replay expects a single symbol, got {symbol} and {trade.symbol}",
                    field="symbol",
                )

            if trade.is_buy:
                if held_qty == ZERO:
                    held_cost = trade.price
                else:
                    held_cost = (held_qty * held_cost + trade.quantity * trade.price) / (
                        held_qty + trade.quantity
                    )
                held_qty += trade.quantity
            else:
                if trade.quantity > held_qty:
                    raise OversellError(trade.symbol, trade.quantity, held_qty)
                realized += trade.quantity * (trade.price - held_cost)
                held_qty -= trade.quantity

        return ReplayResult(quantity=held_qty, avg_cost=held_cost, realized=realized)


# =============================================================================
# HOLDING ASSEMBLY
# =============================================================================

class HoldingAssembler:
    """
    Turns a replay result plus the current price into a Holding.

    A missing price is not an error: market_price and market_value become 0
    and the holding is flagged with has_price=False.
    """

    def assemble(
            self,
            symbol: str,
            replay: ReplayResult,
            market_price: Decimal | None,
    ) -> Holding:
        has_price = market_price is not None
        price = market_price if has_price else ZERO

        # Cost basis of a flat position is 0 regardless of residual avg_cost
        cost_basis = ZERO if replay.quantity == ZERO else replay.quantity * replay.avg_cost

        return Holding(
            symbol=symbol,
            quantity=replay.quantity,
            avg_cost=replay.avg_cost,
            market_price=price,
            market_value=replay.quantity * price,
            cost_basis=cost_basis,
            realized=replay.realized,
            has_price=has_price,
        )


# =============================================================================
# SUMMARY AGGREGATION
# =============================================================================

class SummaryAggregator:
    """Sums holdings into portfolio-level totals."""

    def aggregate(
            self,
            holdings: Iterable[Holding],
            portfolio_id: int | None = None,
    ) -> PortfolioSummary:
        """
        Aggregate holdings.

        Args:
            holdings: Holdings for one portfolio
            portfolio_id: Optional ID carried onto the summary

        Returns:
            PortfolioSummary; all totals are exactly 0 for no holdings
        """
        items = tuple(holdings)
        total_cost = sum((h.cost_basis for h in items), ZERO)
        total_value = sum((h.market_value for h in items), ZERO)

        return PortfolioSummary(
            holdings=items,
            total_cost=total_cost,
            total_value=total_value,
            unrealized_pl=total_value - total_cost,
            portfolio_id=portfolio_id,
        )
