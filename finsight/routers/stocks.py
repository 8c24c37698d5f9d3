# finsight/routers/stocks.py
"""
Stock catalog endpoints.

Read-only views over the simulated instruments: search, sector list and
movers. Quotes change every price updater run.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, func, or_, distinct
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.models import Stock
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.stocks import (
    SectorListResponse,
    SortOrder,
    StockListResponse,
    StockResponse,
    StockSortField,
)
from finsight.services.constants import DEFAULT_MOVERS_LIMIT, MAX_LIST_LIMIT, MAX_MOVERS_LIMIT
from finsight.services.exceptions import StockNotFoundError
from finsight.utils.sql import contains_pattern, LIKE_ESCAPE_CHAR

router = APIRouter(
    prefix="/stocks",
    tags=["Stocks"],
)


def _active_stocks():
    return select(Stock).where(Stock.is_active.is_(True))


def _day_change_ratio():
    """(current - previous_close) / previous_close; NULL when previous_close is unknown or 0."""
    return (Stock.current_price - Stock.previous_close) / func.nullif(Stock.previous_close, 0)


def _sort_column(sort_by: StockSortField):
    if sort_by == "change_percent":
        return _day_change_ratio()
    return getattr(Stock, sort_by)


@router.get(
    "/",
    response_model=StockListResponse,
    summary="List stocks",
)
def list_stocks(
        db: Session = Depends(get_db),
        search: str | None = Query(
            default=None,
            max_length=100,
            description="Case-insensitive match on symbol or name"
        ),
        sector: str | None = Query(default=None, description="Exact sector"),
        sort_by: StockSortField = Query(default="symbol"),
        order: SortOrder = Query(default="asc"),
        skip: int = Query(default=0, ge=0),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT),
) -> StockListResponse:
    query = _active_stocks()

    if search:
        pattern = contains_pattern(search)
        query = query.where(or_(
            Stock.symbol.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            Stock.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        ))
    if sector:
        query = query.where(Stock.sector == sector)

    column = _sort_column(sort_by)
    query = query.order_by(column.desc() if order == "desc" else column.asc(), Stock.symbol)

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    items = db.scalars(query.offset(skip).limit(limit)).all()

    return StockListResponse(
        items=list(items),
        pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
    )


@router.get(
    "/sectors",
    response_model=SectorListResponse,
    summary="List sectors",
)
def list_sectors(db: Session = Depends(get_db)) -> SectorListResponse:
    sectors = db.scalars(
        select(distinct(Stock.sector))
        .where(Stock.is_active.is_(True), Stock.sector.is_not(None))
        .order_by(Stock.sector)
    ).all()
    return SectorListResponse(sectors=list(sectors))


@router.get(
    "/trending",
    response_model=list[StockResponse],
    summary="Most traded stocks",
)
def get_trending(
        db: Session = Depends(get_db),
        limit: int = Query(default=DEFAULT_MOVERS_LIMIT, ge=1, le=MAX_MOVERS_LIMIT),
) -> list[Stock]:
    """Highest volume first."""
    query = (
        _active_stocks()
        .where(Stock.volume.is_not(None))
        .order_by(Stock.volume.desc(), Stock.symbol)
        .limit(limit)
    )
    return list(db.scalars(query))


@router.get(
    "/gainers",
    response_model=list[StockResponse],
    summary="Top gainers",
)
def get_gainers(
        db: Session = Depends(get_db),
        limit: int = Query(default=DEFAULT_MOVERS_LIMIT, ge=1, le=MAX_MOVERS_LIMIT),
) -> list[Stock]:
    """Largest percentage rise since previous close. Stocks without a previous close are left out."""
    change = _day_change_ratio()
    query = (
        _active_stocks()
        .where(change.is_not(None), change > 0)
        .order_by(change.desc(), Stock.symbol)
        .limit(limit)
    )
    return list(db.scalars(query))


@router.get(
    "/losers",
    response_model=list[StockResponse],
    summary="Top losers",
)
def get_losers(
        db: Session = Depends(get_db),
        limit: int = Query(default=DEFAULT_MOVERS_LIMIT, ge=1, le=MAX_MOVERS_LIMIT),
) -> list[Stock]:
    """Largest percentage fall since previous close."""
    change = _day_change_ratio()
    query = (
        _active_stocks()
        .where(change.is_not(None), change < 0)
        .order_by(change.asc(), Stock.symbol)
        .limit(limit)
    )
    return list(db.scalars(query))


@router.get(
    "/{symbol}",
    response_model=StockResponse,
    summary="Get a stock by symbol",
)
def get_stock(
        symbol: str,
        db: Session = Depends(get_db),
) -> Stock:
    """Raises **404** if the symbol is unknown or inactive."""
    normalized = symbol.strip().upper()
    stock = db.scalars(_active_stocks().where(Stock.symbol == normalized)).first()
    if stock is None:
        raise StockNotFoundError(normalized)
    return stock
