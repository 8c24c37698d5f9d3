# finsight/schemas/transactions.py
"""
Pydantic schemas for Transaction validation.

Transactions are append-only: there is a Create schema and Response
schemas, no Update.

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finsight.models import TransactionType
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.validators import validate_symbol


class TransactionCreate(BaseModel):
    """
    Schema for recording a BUY or SELL.

    The symbol is normalized to uppercase. Whether a SELL is covered by
    current holdings is checked by the router against the stored ledger.
    """

    portfolio_id: int = Field(..., gt=0, description="Owning portfolio")

    symbol: str = Field(
        ...,
        min_length=1,
        max_length=20,
        examples=["AAPL", "brk.b"],
        description="Ticker symbol (normalized to uppercase)"
    )

    transaction_type: TransactionType = Field(
        ...,
        description="BUY or SELL"
    )

    quantity: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=8,
        description="Number of shares traded (must be positive)",
        examples=["10", "0.5"]
    )

    price: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=8,
        description="Execution price per share (must be positive)",
        examples=["150.50"]
    )

    @field_validator('symbol')
    @classmethod
    def validate_and_normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)


class TransactionResponse(BaseModel):
    id: int
    portfolio_id: int
    symbol: str
    transaction_type: TransactionType
    quantity: Decimal
    price: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse] = Field(..., description="Transactions for current page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")
