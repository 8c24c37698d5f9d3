# finsight/services/market_data/price_update_service.py
"""
Price update orchestration.

One update run walks the active stock catalog, asks the price provider for
the next quote of every stock, rewrites the stock's quote fields and upserts
the symbol's price snapshot row.

Failures are isolated per stock: a stock whose quote fails is logged and
reported in the result, the rest of the catalog is still updated.

Usage:
    service = PriceUpdateService(provider=SimulatedPriceProvider())
    seeded = service.seed_stocks(db)
    result = service.update_prices(db)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finsight.models import Stock
from finsight.services.exceptions import MarketDataError
from finsight.services.market_data.base import PriceProvider
from finsight.services.market_data.seed_data import SEED_STOCKS
from finsight.services.market_data.snapshot import PriceSnapshotService

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT DATACLASSES
# =============================================================================

@dataclass
class PriceUpdateResult:
    """Outcome of one update run over the stock catalog."""

    started_at: datetime
    completed_at: datetime | None = None
    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def updated_count(self) -> int:
        return len(self.updated)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def status(self) -> str:
        if not self.failed:
            return "completed"
        return "partial" if self.updated else "failed"


# =============================================================================
# SERVICE
# =============================================================================

class PriceUpdateService:
    """
    Applies provider quotes to the stock catalog and the price snapshot.

    Attributes:
        _provider: Source of quotes
        _snapshot_service: Writer for market_prices rows
    """

    def __init__(
            self,
            provider: PriceProvider,
            snapshot_service: PriceSnapshotService | None = None,
    ) -> None:
        self._provider = provider
        self._snapshot_service = snapshot_service or PriceSnapshotService()
        logger.info(f"PriceUpdateService initialized with provider '{provider.name}'")

    @property
    def provider(self) -> PriceProvider:
        return self._provider

    def update_prices(self, db: Session) -> PriceUpdateResult:
        """
        Run one update over every active stock and commit.

        Args:
            db: Database session

        Returns:
            PriceUpdateResult listing updated and failed symbols

        Raises:
            SQLAlchemyError: If the commit fails (the session is rolled back)
        """
        result = PriceUpdateResult(started_at=datetime.now(timezone.utc))
        stocks = list(db.scalars(
            select(Stock).where(Stock.is_active.is_(True)).order_by(Stock.symbol)
        ))

        for stock in stocks:
            try:
                quote = self._provider.get_quote(stock)
            except (MarketDataError, ValueError) as e:
                logger.error(f"Price update failed for {stock.symbol}: {e}")
                result.failed[stock.symbol] = str(e)
                continue

            stock.current_price = quote.price
            stock.day_high = quote.day_high
            stock.day_low = quote.day_low
            stock.volume = quote.volume
            stock.last_updated = quote.timestamp

            self._snapshot_service.upsert_price(
                db, stock.symbol, quote.price, timestamp=quote.timestamp
            )
            result.updated.append(stock.symbol)

        try:
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error storing price updates: {e}")
            db.rollback()
            raise

        result.completed_at = datetime.now(timezone.utc)
        logger.info(
            f"Price update {result.status}: "
            f"updated={result.updated_count}, failed={result.failed_count}"
        )
        return result

    def seed_stocks(self, db: Session) -> int:
        """
        Seed the stock catalog and its snapshot rows if the catalog is empty.

        Args:
            db: Database session

        Returns:
            Number of stocks inserted (0 when the catalog already has rows)
        """
        existing = db.scalar(select(func.count()).select_from(Stock))
        if existing:
            logger.info(f"Stock catalog already has {existing} rows, skipping seed")
            return 0

        now = datetime.now(timezone.utc)
        for data in SEED_STOCKS:
            db.add(Stock(**data, last_updated=now, is_active=True))
            self._snapshot_service.upsert_price(
                db, data["symbol"], data["current_price"], timestamp=now
            )

        try:
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error seeding stock catalog: {e}")
            db.rollback()
            raise

        logger.info(f"Seeded {len(SEED_STOCKS)} stocks")
        return len(SEED_STOCKS)
