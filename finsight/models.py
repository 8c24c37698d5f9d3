# finsight/models.py
import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, ForeignKey, Enum, Numeric, Boolean, BigInteger, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TransactionType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class AlertCondition(str, enum.Enum):
    GT = "GT"  # price rises above target
    LT = "LT"  # price falls below target


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    portfolios: Mapped[list["Portfolio"]] = relationship(back_populates="owner", cascade="all, delete-orphan")
    alerts: Mapped[list["Alert"]] = relationship(back_populates="owner", cascade="all, delete-orphan")


class Portfolio(Base):
    __tablename__ = "portfolios"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    owner: Mapped["User"] = relationship(back_populates="portfolios")
    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="portfolio",
        cascade="all, delete-orphan",
    )


class Transaction(Base):
    """
    Append-only ledger entry for one BUY or SELL.

    There is no trade-date field: (created_at, id) is the replay order,
    with id breaking ties between rows stamped in the same instant.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        # "Get all transactions for portfolio X in ledger order"
        Index('ix_transaction_portfolio_created', 'portfolio_id', 'created_at'),
        Index('ix_transaction_portfolio_symbol', 'portfolio_id', 'symbol'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    portfolio_id: Mapped[int] = mapped_column(ForeignKey("portfolios.id"), index=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)  # uppercase, normalized at entry
    transaction_type: Mapped[TransactionType] = mapped_column(Enum(TransactionType))

    # Numeric(18, 8) supports fractional shares up to 8 decimal places
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 8))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    portfolio: Mapped["Portfolio"] = relationship(back_populates="transactions")


class MarketPrice(Base):
    """
    Latest known price per symbol (the price snapshot).

    Written only by the price updater; read by valuation and alert evaluation.
    """
    __tablename__ = "market_prices"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Stock(Base):
    """
    Catalog of simulated instruments.

    Quote fields (current_price, day_high, day_low, volume) are rewritten
    on every price updater run. Descriptive fields are static seed data.
    """
    __tablename__ = "stocks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    name: Mapped[str] = mapped_column(String)
    sector: Mapped[str | None] = mapped_column(String, index=True, nullable=True)
    industry: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # =========================================================================
    # QUOTE DATA
    # =========================================================================
    current_price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    previous_close: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    day_high: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    day_low: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    volume: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    # =========================================================================
    # FUNDAMENTALS (static)
    # =========================================================================
    market_cap: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    pe_ratio: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    dividend_yield: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    fifty_two_week_high: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    fifty_two_week_low: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)

    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class Alert(Base):
    """
    Price threshold alert.

    `triggered` is one-way: once set by the alert sweep it is never cleared.
    """
    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)
    condition: Mapped[AlertCondition] = mapped_column(Enum(AlertCondition))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    triggered: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    triggered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    owner: Mapped["User"] = relationship(back_populates="alerts")
