# finsight/routers/portfolios.py
"""
Portfolio management endpoints.

CRUD for portfolios. Each portfolio belongs to a single user and owns its
transactions; deleting a portfolio deletes its ledger.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.models import Portfolio
from finsight.routers.users import get_user_or_404
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.portfolios import (
    PortfolioCreate,
    PortfolioUpdate,
    PortfolioResponse,
    PortfolioListResponse,
)
from finsight.services.constants import MAX_LIST_LIMIT
from finsight.services.exceptions import PortfolioNotFoundError
from finsight.utils.sql import contains_pattern, LIKE_ESCAPE_CHAR

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/portfolios",
    tags=["Portfolios"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_portfolio_or_404(db: Session, portfolio_id: int) -> Portfolio:
    portfolio = db.get(Portfolio, portfolio_id)
    if portfolio is None:
        raise PortfolioNotFoundError(portfolio_id)
    return portfolio


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/",
    response_model=PortfolioResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new portfolio",
    response_description="The created portfolio"
)
def create_portfolio(
        portfolio: PortfolioCreate,
        db: Session = Depends(get_db)
) -> Portfolio:
    """
    Create a new portfolio for a user.

    - **name**: Display name for the portfolio
    - **currency**: Currency of all amounts (defaults to USD)
    - **user_id**: Owner of the portfolio

    Raises **404** if the user does not exist.
    """
    get_user_or_404(db, portfolio.user_id)

    db_portfolio = Portfolio(**portfolio.model_dump())
    db.add(db_portfolio)
    db.commit()
    db.refresh(db_portfolio)

    return db_portfolio


@router.get(
    "/",
    response_model=PortfolioListResponse,
    summary="List portfolios",
    response_description="List of portfolios matching the filters"
)
def list_portfolios(
        db: Session = Depends(get_db),
        user_id: int | None = Query(default=None, description="Filter by owner"),
        search: str | None = Query(
            default=None,
            max_length=100,
            description="Case-insensitive substring of the portfolio name"
        ),
        skip: int = Query(default=0, ge=0, description="Number of records to skip"),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT, description="Maximum records to return"),
) -> PortfolioListResponse:
    """
    Retrieve portfolios, newest first.

    Filters: **user_id**, **search**. Paginated with **skip** and **limit**.
    """
    query = select(Portfolio)

    if user_id is not None:
        query = query.where(Portfolio.user_id == user_id)

    if search:
        query = query.where(
            Portfolio.name.ilike(contains_pattern(search), escape=LIKE_ESCAPE_CHAR)
        )

    query = query.order_by(Portfolio.created_at.desc(), Portfolio.id.desc())

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    portfolios = db.scalars(query.offset(skip).limit(limit)).all()

    return PortfolioListResponse(
        items=list(portfolios),
        pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
    )


@router.get(
    "/{portfolio_id}",
    response_model=PortfolioResponse,
    summary="Get a portfolio by ID",
    response_description="The requested portfolio"
)
def get_portfolio(
        portfolio_id: int,
        db: Session = Depends(get_db)
) -> Portfolio:
    """Raises **404** if the portfolio does not exist."""
    return get_portfolio_or_404(db, portfolio_id)


@router.patch(
    "/{portfolio_id}",
    response_model=PortfolioResponse,
    summary="Update a portfolio",
    response_description="The updated portfolio"
)
def update_portfolio(
        portfolio_id: int,
        portfolio_update: PortfolioUpdate,
        db: Session = Depends(get_db)
) -> Portfolio:
    """
    Partial update: only the provided fields change.

    Changing **currency** relabels the portfolio; stored amounts are not
    converted.
    """
    db_portfolio = get_portfolio_or_404(db, portfolio_id)

    for field, value in portfolio_update.model_dump(exclude_unset=True).items():
        setattr(db_portfolio, field, value)

    db.commit()
    db.refresh(db_portfolio)

    return db_portfolio


@router.delete(
    "/{portfolio_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a portfolio",
)
def delete_portfolio(
        portfolio_id: int,
        db: Session = Depends(get_db)
) -> None:
    """
    Delete a portfolio and all of its transactions.

    This action cannot be undone.
    """
    db_portfolio = get_portfolio_or_404(db, portfolio_id)
    db.delete(db_portfolio)
    db.commit()
    return None
