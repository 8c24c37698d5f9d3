# finsight/schemas/prices.py
"""Pydantic schemas for the price snapshot and updater runs."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MarketPriceResponse(BaseModel):
    symbol: str
    price: Decimal
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class MarketPriceListResponse(BaseModel):
    items: list[MarketPriceResponse]
    count: int = Field(..., ge=0)


class PriceRefreshResponse(BaseModel):
    """Outcome of an on-demand updater run."""

    status: str = Field(..., description="completed, partial or failed")
    updated: list[str] = Field(..., description="Symbols whose price moved")
    failed: dict[str, str] = Field(default_factory=dict, description="Symbol -> error")
    alerts_checked: int = Field(..., ge=0)
    alerts_skipped: int = Field(..., ge=0)
    alerts_triggered: list[int] = Field(default_factory=list, description="Triggered alert IDs")
    started_at: datetime
    completed_at: datetime | None = None
