# finsight/services/market_data/snapshot.py
"""
Price snapshot store.

The `market_prices` table holds the latest price per symbol. The price
updater is its only writer; valuation and alert evaluation read it.
Readers get whatever value is committed at read time.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from finsight.models import MarketPrice

logger = logging.getLogger(__name__)


class PriceSnapshotService:
    """Reads and upserts the latest price per symbol."""

    def get_snapshot(
            self,
            db: Session,
            symbols: Iterable[str] | None = None,
    ) -> dict[str, Decimal]:
        """
        Get the latest price per symbol.

        Args:
            db: Database session
            symbols: Restrict to these symbols (None = all)

        Returns:
            Mapping symbol -> price. Symbols without a price are absent.
        """
        query = select(MarketPrice.symbol, MarketPrice.price)
        if symbols is not None:
            wanted = {s.upper() for s in symbols}
            if not wanted:
                return {}
            query = query.where(MarketPrice.symbol.in_(wanted))

        return {symbol: price for symbol, price in db.execute(query)}

    def list_prices(self, db: Session) -> list[MarketPrice]:
        return list(db.scalars(select(MarketPrice).order_by(MarketPrice.symbol)))

    def get_price(self, db: Session, symbol: str) -> MarketPrice | None:
        return db.scalars(
            select(MarketPrice).where(MarketPrice.symbol == symbol.upper())
        ).first()

    def upsert_price(
            self,
            db: Session,
            symbol: str,
            price: Decimal,
            timestamp: datetime | None = None,
    ) -> MarketPrice:
        """
        Insert or update the snapshot row for a symbol.

        Does not commit; the caller owns the transaction.
        """
        timestamp = timestamp or datetime.now(timezone.utc)
        row = self.get_price(db, symbol)

        if row is None:
            row = MarketPrice(symbol=symbol.upper(), price=price, timestamp=timestamp)
            db.add(row)
            logger.debug(f"Inserted market price {symbol}={price}")
        else:
            row.price = price
            row.timestamp = timestamp

        return row
