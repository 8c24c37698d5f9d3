# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- TestClient with the database dependency overridden
- Mock price provider
- Sample data factories
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test App")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finsight.database import get_db
from finsight.dependencies import clear_service_caches
from finsight.main import app
from finsight.models import (
    Alert,
    AlertCondition,
    Base,
    MarketPrice,
    Portfolio,
    Stock,
    Transaction,
    TransactionType,
    User,
)
from finsight.services.exceptions import MarketDataError
from finsight.services.market_data.base import PriceProvider, PriceQuote


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory) -> Iterator[Session]:
    """Create a database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """Create TestClient with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    clear_service_caches()
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    clear_service_caches()


# =============================================================================
# MOCK PRICE PROVIDER
# =============================================================================

class MockPriceProvider(PriceProvider):
    """
    Price provider with scripted quotes.

    Symbols without a configured price move up by one cent; symbols marked
    as failing raise MarketDataError.
    """

    MAX_RETRY_ATTEMPTS = 1

    def __init__(self):
        self._prices: dict[str, Decimal] = {}
        self._fail_symbols: set[str] = set()
        self.call_count = 0

    @property
    def name(self) -> str:
        return "mock"

    def set_price(self, symbol: str, price: Decimal) -> None:
        self._prices[symbol.upper()] = Decimal(price)

    def set_fail_symbol(self, symbol: str) -> None:
        self._fail_symbols.add(symbol.upper())

    def next_quote(self, stock: Stock) -> PriceQuote:
        self.call_count += 1
        if stock.symbol in self._fail_symbols:
            raise MarketDataError(f"No quote for {stock.symbol}", provider=self.name)

        price = self._prices.get(stock.symbol, stock.current_price + Decimal("0.01"))
        return PriceQuote(
            symbol=stock.symbol,
            price=price,
            day_high=max(stock.day_high or price, price),
            day_low=min(stock.day_low or price, price),
            volume=1_000_000,
        )


@pytest.fixture
def mock_provider() -> MockPriceProvider:
    """Create a fresh mock provider for each test."""
    return MockPriceProvider()


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def create_user(
        db: Session,
        email: str = "test@example.com",
        name: str | None = "Test User",
) -> User:
    """Factory function for creating User entities in the database."""
    user = User(email=email, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_portfolio(
        db: Session,
        user: User,
        name: str = "Test Portfolio",
        currency: str = "USD",
) -> Portfolio:
    """Factory function for creating Portfolio entities in the database."""
    portfolio = Portfolio(user_id=user.id, name=name, currency=currency)
    db.add(portfolio)
    db.commit()
    db.refresh(portfolio)
    return portfolio


def create_transaction(
        db: Session,
        portfolio: Portfolio,
        symbol: str,
        transaction_type: TransactionType,
        quantity: str | Decimal,
        price: str | Decimal,
        created_at: datetime | None = None,
) -> Transaction:
    """
    Factory function for ledger entries.

    Bypasses the oversell check of the API so tests can store any ledger.
    """
    transaction = Transaction(
        portfolio_id=portfolio.id,
        symbol=symbol,
        transaction_type=transaction_type,
        quantity=Decimal(quantity),
        price=Decimal(price),
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return transaction


def create_stock(
        db: Session,
        symbol: str = "AAPL",
        name: str = "Apple Inc.",
        sector: str | None = "Technology",
        current_price: str | Decimal = "100.00",
        previous_close: str | Decimal | None = "100.00",
        volume: int | None = 10_000_000,
        is_active: bool = True,
        **fields,
) -> Stock:
    """Factory function for catalog stocks."""
    stock = Stock(
        symbol=symbol,
        name=name,
        sector=sector,
        current_price=Decimal(current_price),
        previous_close=Decimal(previous_close) if previous_close is not None else None,
        volume=volume,
        is_active=is_active,
        **fields,
    )
    db.add(stock)
    db.commit()
    db.refresh(stock)
    return stock


def set_price(db: Session, symbol: str, price: str | Decimal) -> MarketPrice:
    """Insert or overwrite the snapshot price for a symbol."""
    row = db.query(MarketPrice).filter(MarketPrice.symbol == symbol).first()
    if row is None:
        row = MarketPrice(symbol=symbol, price=Decimal(price), timestamp=datetime.now(timezone.utc))
        db.add(row)
    else:
        row.price = Decimal(price)
    db.commit()
    return row


def create_alert(
        db: Session,
        user: User,
        symbol: str = "AAPL",
        condition: AlertCondition = AlertCondition.GT,
        price: str | Decimal = "150.00",
        triggered: bool = False,
) -> Alert:
    alert = Alert(
        user_id=user.id,
        symbol=symbol,
        condition=condition,
        price=Decimal(price),
        triggered=triggered,
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    return alert


# =============================================================================
# FIXTURE EXPORTS (for convenience imports in tests)
# =============================================================================

@pytest.fixture
def sample_user(db: Session) -> User:
    """Provide a sample User for tests."""
    return create_user(db)


@pytest.fixture
def sample_portfolio(db: Session, sample_user: User) -> Portfolio:
    """Provide a sample Portfolio for tests."""
    return create_portfolio(db, sample_user)
