# finsight/services/valuation/types.py
"""
Internal data types for the Valuation Service.

These dataclasses are used internally by the valuation calculators.
They are NOT Pydantic schemas - those are defined in finsight/schemas/valuation.py
for API serialization.

Design Principles:
- Immutable value objects (frozen=True)
- Use Decimal for ALL financial values (never float)
- Validate ledger records at construction, not at consumption time
- No rounding here; rounding is a presentation concern

Type Hierarchy:
    TradeRecord       - One validated BUY or SELL for a symbol
    ReplayResult      - Final (quantity, avg_cost, realized) for one symbol
    Holding           - Replay result joined with the price snapshot
    PortfolioSummary  - Holdings plus portfolio-level totals
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from finsight.models import TransactionType
from finsight.services.constants import ZERO
from finsight.services.exceptions import InvalidTradeError

if TYPE_CHECKING:
    from finsight.models import Transaction


def _to_decimal(value, field_name: str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)) and not isinstance(value, bool):
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise InvalidTradeError(f"Invalid {field_name}: {value!r}", field=field_name) from e
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise InvalidTradeError(f"Invalid {field_name}: {value!r}", field=field_name)

    if not result.is_finite():
        raise InvalidTradeError(f"Invalid {field_name}: {value!r}", field=field_name)
    return result


# =============================================================================
# LEDGER INPUT
# =============================================================================

@dataclass(frozen=True)
class TradeRecord:
    """
    A single validated ledger entry.

    Tagged variant over exactly {BUY, SELL}. Construction normalizes the
    symbol to uppercase and coerces numbers to Decimal.

    Attributes:
        symbol: Uppercase ticker
        transaction_type: BUY or SELL
        quantity: Shares traded (> 0)
        price: Execution price per share (>= 0)
        timestamp: Creation time, used only for ordering by the loader
        transaction_id: Database ID when built from a stored transaction

    Raises:
        InvalidTradeError: On unknown type, empty symbol, quantity <= 0
            or negative price
    """

    symbol: str
    transaction_type: TransactionType
    quantity: Decimal
    price: Decimal
    timestamp: datetime | None = None
    transaction_id: int | None = None

    def __post_init__(self) -> None:
        try:
            tx_type = TransactionType(self.transaction_type)
        except ValueError as e:
            raise InvalidTradeError(
                f"Unknown transaction type: {self.transaction_type!r}",
                field="transaction_type",
            ) from e

        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise InvalidTradeError("Symbol cannot be empty", field="symbol")

        quantity = _to_decimal(self.quantity, "quantity")
        price = _to_decimal(self.price, "price")

        if quantity <= ZERO:
            raise InvalidTradeError(f"Quantity must be positive, got {quantity}", field="quantity")
        if price < ZERO:
            raise InvalidTradeError(f"Price cannot be negative, got {price}", field="price")

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "transaction_type", tx_type)
        object.__setattr__(self, "symbol", self.symbol.strip().upper())
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "price", price)

    @property
    def is_buy(self) -> bool:
        return self.transaction_type == TransactionType.BUY

    @classmethod
    def from_transaction(cls, txn: Transaction) -> TradeRecord:
        """Build a TradeRecord from a stored Transaction row."""
        return cls(
            symbol=txn.symbol,
            transaction_type=txn.transaction_type,
            quantity=txn.quantity,
            price=txn.price,
            timestamp=txn.created_at,
            transaction_id=txn.id,
        )


# =============================================================================
# REPLAY
# =============================================================================

@dataclass(frozen=True)
class ReplayResult:
    """
    Final state of the cost-basis fold for one symbol.

    Attributes:
        quantity: Net open shares (0 after full liquidation)
        avg_cost: Weighted average cost of the open lot
        realized: Cumulative realized P&L from all SELLs
    """

    quantity: Decimal = ZERO
    avg_cost: Decimal = ZERO
    realized: Decimal = ZERO

    @property
    def is_closed(self) -> bool:
        return self.quantity == ZERO


# =============================================================================
# HOLDINGS & SUMMARY
# =============================================================================

@dataclass(frozen=True)
class Holding:
    """
    Derived per-symbol position. Recomputed on every request, never persisted.

    Attributes:
        symbol: Uppercase ticker
        quantity: Net open shares
        avg_cost: Weighted average cost of the open lot
        market_price: Snapshot price, or 0 when the snapshot has none
        market_value: quantity x market_price
        cost_basis: quantity x avg_cost (0 when quantity is 0)
        realized: Cumulative realized P&L
        has_price: False when market_price is the zero fallback
    """

    symbol: str
    quantity: Decimal
    avg_cost: Decimal
    market_price: Decimal
    market_value: Decimal
    cost_basis: Decimal
    realized: Decimal
    has_price: bool = True

    @property
    def unrealized_pl(self) -> Decimal:
        return self.market_value - self.cost_basis


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Portfolio-level aggregation over holdings.

    An empty ledger yields no holdings and all totals exactly 0.

    Attributes:
        holdings: One Holding per symbol, first-seen order
        total_cost: Sum of cost_basis
        total_value: Sum of market_value
        unrealized_pl: total_value - total_cost
        portfolio_id: Set when computed from a stored portfolio
    """

    holdings: tuple[Holding, ...] = field(default_factory=tuple)
    total_cost: Decimal = ZERO
    total_value: Decimal = ZERO
    unrealized_pl: Decimal = ZERO
    portfolio_id: int | None = None

    @property
    def total_realized(self) -> Decimal:
        return sum((h.realized for h in self.holdings), ZERO)

    @property
    def missing_prices(self) -> list[str]:
        """Symbols valued at zero because the snapshot had no price."""
        return [h.symbol for h in self.holdings if not h.has_price]
