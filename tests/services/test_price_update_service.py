# tests/services/test_price_update_service.py
"""
Integration tests for PriceUpdateService.

Covers catalog seeding, one update run over the catalog, snapshot upserts
and per-stock failure isolation.
"""

import random
from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from finsight.models import MarketPrice, Stock
from finsight.services.market_data import (
    PriceSnapshotService,
    PriceUpdateService,
    SEED_STOCKS,
    SimulatedPriceProvider,
)
from tests.conftest import MockPriceProvider, create_stock, set_price


@pytest.fixture
def service(mock_provider: MockPriceProvider) -> PriceUpdateService:
    return PriceUpdateService(provider=mock_provider, snapshot_service=PriceSnapshotService())


class TestSeedStocks:

    def test_seeds_empty_catalog(self, db: Session, service: PriceUpdateService):
        seeded = service.seed_stocks(db)

        assert seeded == len(SEED_STOCKS) == 20
        assert db.scalar(select(Stock).where(Stock.symbol == "AAPL")).name == "Apple Inc."

    def test_seeds_snapshot_prices(self, db: Session, service: PriceUpdateService):
        service.seed_stocks(db)

        snapshot = PriceSnapshotService().get_snapshot(db)
        assert len(snapshot) == 20
        assert snapshot["AAPL"] == Decimal("178.50")

    def test_skips_when_catalog_has_rows(self, db: Session, service: PriceUpdateService):
        create_stock(db, symbol="ZZZ")

        assert service.seed_stocks(db) == 0
        assert db.query(Stock).count() == 1

    def test_seed_is_repeatable(self, db: Session, service: PriceUpdateService):
        service.seed_stocks(db)
        assert service.seed_stocks(db) == 0
        assert db.query(Stock).count() == 20

    def test_seed_symbols_unique_and_uppercase(self):
        symbols = [s["symbol"] for s in SEED_STOCKS]
        assert len(set(symbols)) == len(symbols)
        assert all(s == s.upper() for s in symbols)


class TestUpdatePrices:

    def test_updates_stock_and_snapshot(
            self, db: Session, service: PriceUpdateService, mock_provider: MockPriceProvider
    ):
        create_stock(db, symbol="AAPL", current_price="100.00")
        mock_provider.set_price("AAPL", Decimal("104.20"))

        result = service.update_prices(db)

        assert result.updated == ["AAPL"]
        assert result.status == "completed"
        assert result.completed_at is not None

        stock = db.scalar(select(Stock).where(Stock.symbol == "AAPL"))
        assert stock.current_price == Decimal("104.20")
        assert stock.day_high == Decimal("104.20")
        assert stock.volume == 1_000_000
        assert stock.last_updated is not None

        row = db.scalar(select(MarketPrice).where(MarketPrice.symbol == "AAPL"))
        assert row.price == Decimal("104.20")

    def test_upserts_existing_snapshot_row(self, db: Session, service: PriceUpdateService):
        create_stock(db, symbol="AAPL", current_price="100.00")
        set_price(db, "AAPL", "100.00")

        service.update_prices(db)
        service.update_prices(db)

        rows = db.scalars(select(MarketPrice).where(MarketPrice.symbol == "AAPL")).all()
        assert len(rows) == 1
        assert rows[0].price == Decimal("100.02")

    def test_skips_inactive_stocks(
            self, db: Session, service: PriceUpdateService, mock_provider: MockPriceProvider
    ):
        create_stock(db, symbol="AAPL")
        create_stock(db, symbol="OLD", name="Delisted", is_active=False)

        result = service.update_prices(db)

        assert result.updated == ["AAPL"]
        assert mock_provider.call_count == 1
        assert db.scalar(select(MarketPrice).where(MarketPrice.symbol == "OLD")) is None

    def test_failure_isolated_per_stock(
            self, db: Session, service: PriceUpdateService, mock_provider: MockPriceProvider
    ):
        create_stock(db, symbol="AAPL", current_price="100.00")
        create_stock(db, symbol="MSFT", name="Microsoft", current_price="300.00")
        mock_provider.set_fail_symbol("AAPL")

        result = service.update_prices(db)

        assert result.updated == ["MSFT"]
        assert "AAPL" in result.failed
        assert result.status == "partial"
        assert db.scalar(select(Stock).where(Stock.symbol == "AAPL")).current_price == Decimal("100.00")

    def test_all_failed(
            self, db: Session, service: PriceUpdateService, mock_provider: MockPriceProvider
    ):
        create_stock(db, symbol="AAPL")
        mock_provider.set_fail_symbol("AAPL")

        assert service.update_prices(db).status == "failed"

    def test_empty_catalog(self, db: Session, service: PriceUpdateService):
        result = service.update_prices(db)

        assert result.updated == []
        assert result.status == "completed"

    def test_with_simulator(self, db: Session):
        service = PriceUpdateService(
            provider=SimulatedPriceProvider(volatility=0.04, rng=random.Random(3))
        )
        service.seed_stocks(db)

        result = service.update_prices(db)

        assert result.updated_count == 20
        for stock in db.scalars(select(Stock)):
            assert stock.day_low <= stock.current_price <= stock.day_high
