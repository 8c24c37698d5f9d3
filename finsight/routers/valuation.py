# finsight/routers/valuation.py
"""
Portfolio valuation endpoints.

- GET /portfolios/{id}/summary  - Portfolio, holdings and totals
- GET /portfolios/{id}/holdings - Holdings only

Nested under /portfolios/{id} because a valuation always belongs to one
portfolio. Rounding to display precision happens here and only here.
"""

from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.dependencies import get_valuation_service
from finsight.routers.portfolios import get_portfolio_or_404
from finsight.schemas.portfolios import PortfolioResponse
from finsight.schemas.valuation import (
    HoldingResponse,
    HoldingsResponse,
    PortfolioSummaryResponse,
)
from finsight.services.constants import CURRENCY_PRECISION, SHARE_PRECISION
from finsight.services.valuation import Holding, ValuationService

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/portfolios",
    tags=["Valuation"],
)

INCLUDE_CLOSED_DESCRIPTION = (
    "Keep fully sold symbols (quantity 0) in the holdings list. "
    "Defaults to the server setting."
)


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _money(value: Decimal) -> Decimal:
    return value.quantize(CURRENCY_PRECISION, rounding=ROUND_HALF_UP)


def _shares(value: Decimal) -> Decimal:
    return value.quantize(SHARE_PRECISION, rounding=ROUND_HALF_UP)


def _map_holding(holding: Holding) -> HoldingResponse:
    return HoldingResponse(
        symbol=holding.symbol,
        quantity=_shares(holding.quantity),
        avg_cost=_shares(holding.avg_cost),
        market_price=_money(holding.market_price),
        market_value=_money(holding.market_value),
        cost_basis=_money(holding.cost_basis),
        unrealized_pl=_money(holding.unrealized_pl),
        realized=_money(holding.realized),
        has_price=holding.has_price,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/{portfolio_id}/summary",
    response_model=PortfolioSummaryResponse,
    summary="Get portfolio summary",
    response_description="Holdings with cost, value and P&L totals",
)
def get_portfolio_summary(
        portfolio_id: int,
        include_closed: bool | None = Query(default=None, description=INCLUDE_CLOSED_DESCRIPTION),
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> PortfolioSummaryResponse:
    """
    Value a portfolio against the latest price snapshot.

    Per holding: **quantity**, **avg_cost**, **market_price**,
    **market_value**, **cost_basis**, **unrealized_pl** and **realized**.

    Totals: **total_value**, **total_cost** and
    **unrealized_pl** = total_value - total_cost.

    A symbol without a known price is valued at 0 and listed in
    **missing_prices**. An empty portfolio returns zeros.
    """
    portfolio = get_portfolio_or_404(db, portfolio_id)
    summary = service.compute_summary(db, portfolio_id, include_closed=include_closed)

    return PortfolioSummaryResponse(
        portfolio=PortfolioResponse.model_validate(portfolio),
        holdings=[_map_holding(h) for h in summary.holdings],
        total_value=_money(summary.total_value),
        total_cost=_money(summary.total_cost),
        unrealized_pl=_money(summary.unrealized_pl),
        total_realized=_money(summary.total_realized),
        missing_prices=summary.missing_prices,
    )


@router.get(
    "/{portfolio_id}/holdings",
    response_model=HoldingsResponse,
    summary="Get portfolio holdings",
)
def get_portfolio_holdings(
        portfolio_id: int,
        include_closed: bool | None = Query(default=None, description=INCLUDE_CLOSED_DESCRIPTION),
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> HoldingsResponse:
    """Holdings in first-traded order. Raises **404** for an unknown portfolio."""
    summary = service.compute_summary(db, portfolio_id, include_closed=include_closed)
    return HoldingsResponse(
        portfolio_id=portfolio_id,
        holdings=[_map_holding(h) for h in summary.holdings],
    )
