# finsight/schemas/valuation.py
"""
Pydantic schemas for portfolio valuation.

Values arrive here at full precision and are rounded by the router when
the response is built: money to 2 decimal places, average cost to 8.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from finsight.schemas.portfolios import PortfolioResponse


class HoldingResponse(BaseModel):
    """One symbol's derived position."""

    symbol: str = Field(..., description="Ticker symbol")
    quantity: Decimal = Field(..., description="Net open shares (0 once fully sold)")
    avg_cost: Decimal = Field(..., description="Weighted average cost of open shares")
    market_price: Decimal = Field(..., description="Latest snapshot price, 0 if unknown")
    market_value: Decimal = Field(..., description="quantity x market_price")
    cost_basis: Decimal = Field(..., description="quantity x avg_cost")
    unrealized_pl: Decimal = Field(..., description="market_value - cost_basis")
    realized: Decimal = Field(..., description="Cumulative realized P&L from sells")
    has_price: bool = Field(..., description="False when no snapshot price exists")


class HoldingsResponse(BaseModel):
    portfolio_id: int
    holdings: list[HoldingResponse]


class PortfolioSummaryResponse(BaseModel):
    """Portfolio, its holdings and the aggregate totals."""

    portfolio: PortfolioResponse
    holdings: list[HoldingResponse]
    total_value: Decimal = Field(..., description="Sum of market_value")
    total_cost: Decimal = Field(..., description="Sum of cost_basis")
    unrealized_pl: Decimal = Field(..., description="total_value - total_cost")
    total_realized: Decimal = Field(..., description="Sum of realized P&L")
    missing_prices: list[str] = Field(
        default_factory=list,
        description="Symbols valued at 0 because no price is known"
    )
