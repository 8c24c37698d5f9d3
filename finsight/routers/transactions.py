# finsight/routers/transactions.py
"""
Transaction endpoints.

The ledger is append-only: transactions can be recorded and read, never
edited or deleted. Replay order is creation order, so a new SELL only has
to be covered by the quantity held right now.
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.models import Portfolio, Transaction, TransactionType
from finsight.routers.portfolios import get_portfolio_or_404
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.transactions import (
    TransactionCreate,
    TransactionResponse,
    TransactionListResponse,
)
from finsight.services.constants import MAX_LIST_LIMIT, ZERO
from finsight.services.exceptions import NotFoundError, OversellError
from finsight.services.valuation import CostBasisReplayCalculator, TradeRecord

logger = logging.getLogger(__name__)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)

_replay_calculator = CostBasisReplayCalculator()


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_transaction_or_404(db: Session, transaction_id: int) -> Transaction:
    transaction = db.get(Transaction, transaction_id)
    if transaction is None:
        raise NotFoundError(
            f"Transaction {transaction_id} not found",
            resource_type="Transaction",
            resource_id=transaction_id,
        )
    return transaction


def lock_portfolio(db: Session, portfolio_id: int) -> None:
    """
    Take a row lock on the portfolio for the rest of the transaction.

    Serializes SELLs per portfolio on PostgreSQL. SQLite has no FOR UPDATE
    and serializes writers on its own.
    """
    db.scalar(
        select(Portfolio.id)
        .where(Portfolio.id == portfolio_id)
        .with_for_update()
    )


def get_current_quantity_held(db: Session, portfolio_id: int, symbol: str) -> Decimal:
    """Net quantity of a symbol in a portfolio: sum of BUYs minus sum of SELLs."""
    rows = db.execute(
        select(Transaction.transaction_type, Transaction.quantity)
        .where(
            Transaction.portfolio_id == portfolio_id,
            Transaction.symbol == symbol,
        )
    )
    held = ZERO
    for transaction_type, quantity in rows:
        if transaction_type == TransactionType.SELL:
            held -= quantity
        else:
            held += quantity
    return held


def validate_sell_quantity(db: Session, portfolio_id: int, symbol: str, quantity: Decimal) -> None:
    """
    Reject a SELL that exceeds the current holding.

    Raises:
        OversellError: Mapped to 400 by the global handler
    """
    held = get_current_quantity_held(db, portfolio_id, symbol)
    if quantity > held:
        raise OversellError(symbol, quantity, held)


def validate_symbol_ledger(db: Session, portfolio_id: int, symbol: str) -> None:
    """
    Replay a symbol's ledger, pending rows included.

    Run after flush and before commit: a SELL that raced another SELL past
    the holding check is caught here while it can still be rolled back.

    Raises:
        OversellError: If any SELL in the ledger exceeds the quantity held
    """
    rows = db.scalars(
        select(Transaction)
        .where(
            Transaction.portfolio_id == portfolio_id,
            Transaction.symbol == symbol,
        )
        .order_by(Transaction.created_at, Transaction.id)
    ).all()
    _replay_calculator.replay([TradeRecord.from_transaction(row) for row in rows])


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a transaction",
    response_description="The recorded transaction"
)
def create_transaction(
        transaction: TransactionCreate,
        db: Session = Depends(get_db),
) -> Transaction:
    """
    Record a BUY or SELL.

    - **portfolio_id**: Portfolio the trade belongs to
    - **symbol**: Ticker, stored uppercase
    - **transaction_type**: BUY or SELL
    - **quantity**: Shares traded (> 0)
    - **price**: Execution price per share (> 0)

    **Errors:**
    - 404: Portfolio not found
    - 400: SELL quantity exceeds the current holding
    """
    get_portfolio_or_404(db, transaction.portfolio_id)

    is_sell = transaction.transaction_type == TransactionType.SELL
    if is_sell:
        lock_portfolio(db, transaction.portfolio_id)
        validate_sell_quantity(
            db,
            portfolio_id=transaction.portfolio_id,
            symbol=transaction.symbol,
            quantity=transaction.quantity,
        )

    db_transaction = Transaction(**transaction.model_dump())
    db.add(db_transaction)
    db.flush()

    if is_sell:
        try:
            validate_symbol_ledger(db, transaction.portfolio_id, transaction.symbol)
        except OversellError:
            db.rollback()
            logger.warning(
                f"Rejected concurrent SELL of {transaction.symbol} "
                f"in portfolio {transaction.portfolio_id}"
            )
            raise

    db.commit()
    db.refresh(db_transaction)

    return db_transaction


@router.get(
    "/",
    response_model=TransactionListResponse,
    summary="List transactions",
    response_description="List of transactions matching the filters"
)
def list_transactions(
        db: Session = Depends(get_db),
        portfolio_id: int | None = Query(default=None, description="Filter by portfolio"),
        symbol: str | None = Query(default=None, max_length=20, description="Filter by symbol"),
        transaction_type: TransactionType | None = Query(default=None, description="BUY or SELL"),
        skip: int = Query(default=0, ge=0),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT),
) -> TransactionListResponse:
    """Transactions in ledger order (oldest first), optionally filtered."""
    query = select(Transaction)

    if portfolio_id is not None:
        query = query.where(Transaction.portfolio_id == portfolio_id)
    if symbol:
        query = query.where(Transaction.symbol == symbol.strip().upper())
    if transaction_type is not None:
        query = query.where(Transaction.transaction_type == transaction_type)

    query = query.order_by(Transaction.created_at, Transaction.id)

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    items = db.scalars(query.offset(skip).limit(limit)).all()

    return TransactionListResponse(
        items=list(items),
        pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
    )


@router.get(
    "/portfolio/{portfolio_id}",
    response_model=TransactionListResponse,
    summary="List a portfolio's transactions",
)
def get_portfolio_transactions(
        portfolio_id: int,
        db: Session = Depends(get_db),
        skip: int = Query(default=0, ge=0),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT),
) -> TransactionListResponse:
    """Raises **404** if the portfolio does not exist."""
    get_portfolio_or_404(db, portfolio_id)
    return list_transactions(db=db, portfolio_id=portfolio_id, symbol=None,
                             transaction_type=None, skip=skip, limit=limit)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get a transaction by ID",
)
def get_transaction(
        transaction_id: int,
        db: Session = Depends(get_db),
) -> Transaction:
    return get_transaction_or_404(db, transaction_id)
