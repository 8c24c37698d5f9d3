# finsight/schemas/stocks.py
"""Pydantic schemas for the simulated stock catalog."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from finsight.schemas.pagination import PaginationMeta
from finsight.services.constants import DISPLAY_PERCENTAGE_PRECISION, CURRENCY_PRECISION

StockSortField = Literal["symbol", "name", "current_price", "volume", "market_cap", "change_percent"]
SortOrder = Literal["asc", "desc"]


class StockResponse(BaseModel):
    """
    Catalog entry with its latest simulated quote.

    `change` and `change_percent` are measured against previous_close and
    are None when previous_close is unknown or zero.
    """

    id: int
    symbol: str
    name: str
    sector: str | None = None
    industry: str | None = None
    description: str | None = None
    current_price: Decimal
    previous_close: Decimal | None = None
    day_high: Decimal | None = None
    day_low: Decimal | None = None
    volume: int | None = None
    market_cap: int | None = None
    pe_ratio: Decimal | None = None
    dividend_yield: Decimal | None = None
    fifty_two_week_high: Decimal | None = None
    fifty_two_week_low: Decimal | None = None
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def change(self) -> Decimal | None:
        if not self.previous_close:
            return None
        return (self.current_price - self.previous_close).quantize(CURRENCY_PRECISION)

    @computed_field
    @property
    def change_percent(self) -> Decimal | None:
        if not self.previous_close:
            return None
        pct = (self.current_price - self.previous_close) / self.previous_close * 100
        return pct.quantize(DISPLAY_PERCENTAGE_PRECISION)


class StockListResponse(BaseModel):
    items: list[StockResponse] = Field(..., description="Stocks for current page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")


class SectorListResponse(BaseModel):
    sectors: list[str] = Field(..., description="Distinct sectors, alphabetical")
