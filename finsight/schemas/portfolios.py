# finsight/schemas/portfolios.py
"""
Pydantic schemas for Portfolio validation.

These schemas define:
- What data clients must send (Create)
- What data clients can update (Update)
- What data the API returns (Response)

Existence checks (owner user, portfolio ID) happen in the router.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.validators import validate_currency


# =============================================================================
# BASE SCHEMA
# =============================================================================

class PortfolioBase(BaseModel):
    """Fields common to Create and Response."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["Retirement", "Tech Stocks"],
        description="Name of the portfolio"
    )

    description: str | None = Field(
        default=None,
        max_length=500,
        description="Free-text description"
    )

    currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        examples=["USD", "EUR"],
        description="Currency all amounts are expressed in (ISO 4217)"
    )

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be blank")
        return stripped

    @field_validator('currency')
    @classmethod
    def validate_and_normalize_currency(cls, v: str) -> str:
        return validate_currency(v)


# =============================================================================
# CREATE / UPDATE
# =============================================================================

class PortfolioCreate(PortfolioBase):
    user_id: int = Field(
        ...,
        gt=0,
        description="ID of the user who owns this portfolio"
    )


class PortfolioUpdate(BaseModel):
    """
    Partial update. Only sent fields change.

    Ownership (user_id) cannot be transferred.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    currency: str | None = Field(default=None, min_length=3, max_length=3)

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be blank")
        return stripped

    @field_validator('currency')
    @classmethod
    def validate_and_normalize_currency(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return validate_currency(v)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class PortfolioResponse(PortfolioBase):
    id: int = Field(..., description="Unique identifier")
    user_id: int = Field(..., description="ID of the portfolio owner")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PortfolioListResponse(BaseModel):
    items: list[PortfolioResponse] = Field(..., description="Portfolios for current page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")
