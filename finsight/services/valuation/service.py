# finsight/services/valuation/service.py
"""
Valuation Service - Main orchestrator for portfolio valuation.

Single entry point for valuation operations:
- summarize(): Pure valuation of given trades against a given price snapshot
- compute_summary(): Loads a stored portfolio's ledger and the snapshot, then summarizes

Design Principles:
- Dependency Injection: PriceSnapshotService injected via constructor
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Composable: Uses specialized calculators for each task
- Stateless per call: never writes to the database

Usage:
    from finsight.services.valuation import ValuationService

    service = ValuationService()
    summary = service.compute_summary(db, portfolio_id=1)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from finsight.config import settings
from finsight.models import Portfolio, Transaction
from finsight.services.exceptions import PortfolioNotFoundError
from finsight.services.valuation.calculators import (
    CostBasisReplayCalculator,
    HoldingAssembler,
    SummaryAggregator,
)
from finsight.services.valuation.types import Holding, PortfolioSummary, TradeRecord

if TYPE_CHECKING:
    from finsight.services.market_data.snapshot import PriceSnapshotService

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Main service for portfolio valuation operations.

    Attributes:
        _snapshot_service: Reads the latest price per symbol
        _include_closed: Default closed-position policy
        _replay_calc: Cost-basis fold per symbol
        _assembler: Replay + price -> Holding
        _aggregator: Holdings -> PortfolioSummary
    """

    def __init__(
            self,
            snapshot_service: PriceSnapshotService | None = None,
            include_closed: bool | None = None,
    ) -> None:
        """
        Initialize the valuation service.

        Args:
            snapshot_service: Price snapshot reader. If None, creates a new instance.
            include_closed: Keep zero-quantity holdings by default.
                            If None, uses settings.include_closed_positions.
        """
        if snapshot_service is None:
            from finsight.services.market_data.snapshot import PriceSnapshotService
            snapshot_service = PriceSnapshotService()

        self._snapshot_service = snapshot_service
        self._include_closed = (
            settings.include_closed_positions if include_closed is None else include_closed
        )

        self._replay_calc = CostBasisReplayCalculator()
        self._assembler = HoldingAssembler()
        self._aggregator = SummaryAggregator()

        logger.info("ValuationService initialized")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def summarize(
            self,
            trades: Iterable[TradeRecord],
            prices: Mapping[str, Decimal],
            include_closed: bool | None = None,
            portfolio_id: int | None = None,
    ) -> PortfolioSummary:
        """
        Value an ordered ledger against a price snapshot.

        Pure function of its inputs: identical trades and prices always yield
        an identical summary.

        Args:
            trades: Trades oldest first, any mix of symbols
            prices: Latest price per symbol; absent symbols are valued at 0
            include_closed: Keep zero-quantity holdings (None = service default)
            portfolio_id: Carried onto the result

        Returns:
            PortfolioSummary with holdings in first-seen symbol order

        Raises:
            OversellError: If any SELL exceeds the quantity held at that point
        """
        keep_closed = self._include_closed if include_closed is None else include_closed

        holdings: list[Holding] = []
        for symbol, symbol_trades in self._group_by_symbol(trades).items():
            replay = self._replay_calc.replay(symbol_trades)
            if replay.is_closed and not keep_closed:
                continue
            holdings.append(self._assembler.assemble(symbol, replay, prices.get(symbol)))

        return self._aggregator.aggregate(holdings, portfolio_id=portfolio_id)

    def compute_summary(
            self,
            db: Session,
            portfolio_id: int,
            include_closed: bool | None = None,
    ) -> PortfolioSummary:
        """
        Compute the summary of a stored portfolio.

        Args:
            db: Database session (read only)
            portfolio_id: Portfolio to value
            include_closed: Keep zero-quantity holdings (None = service default)

        Returns:
            PortfolioSummary for the portfolio's full ledger

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
            OversellError: If the stored ledger oversells a symbol
        """
        portfolio = db.get(Portfolio, portfolio_id)
        if portfolio is None:
            raise PortfolioNotFoundError(portfolio_id)

        trades = self._load_trades(db, portfolio_id)
        symbols = {t.symbol for t in trades}
        prices = self._snapshot_service.get_snapshot(db, symbols=symbols) if symbols else {}

        summary = self.summarize(
            trades,
            prices,
            include_closed=include_closed,
            portfolio_id=portfolio_id,
        )

        if summary.missing_prices:
            logger.warning(
                f"Portfolio {portfolio_id}: no market price for "
                f"{', '.join(summary.missing_prices)}, valued at 0"
            )
        logger.debug(
            f"Portfolio {portfolio_id} valued: {len(summary.holdings)} holdings, "
            f"total_value={summary.total_value}"
        )
        return summary

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _load_trades(self, db: Session, portfolio_id: int) -> list[TradeRecord]:
        """Load the ledger in replay order: created_at, then id for ties."""
        query = (
            select(Transaction)
            .where(Transaction.portfolio_id == portfolio_id)
            .order_by(Transaction.created_at, Transaction.id)
        )
        return [TradeRecord.from_transaction(txn) for txn in db.scalars(query)]

    @staticmethod
    def _group_by_symbol(trades: Iterable[TradeRecord]) -> dict[str, list[TradeRecord]]:
        # dict keeps insertion order, so symbols come out in first-seen order
        grouped: dict[str, list[TradeRecord]] = {}
        for trade in trades:
            grouped.setdefault(trade.symbol, []).append(trade)
        return grouped
