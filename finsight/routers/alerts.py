# finsight/routers/alerts.py
"""
Price alert endpoints.

Alerts are created un-triggered and flip once, when a sweep sees the
snapshot price cross the target. Sweeps run after every price update;
POST /alerts/evaluate runs one on demand.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.dependencies import get_alert_service
from finsight.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from finsight.models import Alert
from finsight.schemas.alerts import (
    AlertCreate,
    AlertEvaluationResponse,
    AlertListResponse,
    AlertResponse,
)
from finsight.schemas.pagination import PaginationMeta
from finsight.services.alerts import AlertService
from finsight.services.constants import MAX_LIST_LIMIT

router = APIRouter(
    prefix="/alerts",
    tags=["Alerts"],
)


@router.post(
    "/",
    response_model=AlertResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a price alert",
)
def create_alert(
        alert: AlertCreate,
        db: Session = Depends(get_db),
        service: AlertService = Depends(get_alert_service),
) -> Alert:
    """
    - **user_id**: Owner of the alert
    - **symbol**: Ticker to watch
    - **condition**: GT (price rises above) or LT (price falls below)
    - **price**: Target price (> 0)

    Raises **404** if the user does not exist.
    """
    return service.create_alert(
        db,
        user_id=alert.user_id,
        symbol=alert.symbol,
        condition=alert.condition,
        price=alert.price,
    )


@router.get(
    "/",
    response_model=AlertListResponse,
    summary="List alerts",
)
def list_alerts(
        db: Session = Depends(get_db),
        service: AlertService = Depends(get_alert_service),
        user_id: int | None = Query(default=None, description="Filter by owner"),
        triggered: bool | None = Query(default=None, description="Filter by triggered state"),
        skip: int = Query(default=0, ge=0),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT),
) -> AlertListResponse:
    """Newest first."""
    items, total = service.list_alerts(
        db, user_id=user_id, triggered=triggered, skip=skip, limit=limit
    )
    return AlertListResponse(
        items=[AlertResponse.model_validate(a) for a in items],
        pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
    )


@router.delete(
    "/{alert_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an alert",
)
def delete_alert(
        alert_id: int,
        db: Session = Depends(get_db),
        service: AlertService = Depends(get_alert_service),
) -> None:
    service.delete_alert(db, alert_id)


@router.post(
    "/evaluate",
    response_model=AlertEvaluationResponse,
    summary="Evaluate alerts now",
)
@limiter.limit(RATE_LIMIT_WRITE)
def evaluate_alerts(
        request: Request,  # Required for rate limiting
        db: Session = Depends(get_db),
        service: AlertService = Depends(get_alert_service),
) -> AlertEvaluationResponse:
    """Compare every un-triggered alert with the current snapshot."""
    result = service.evaluate(db)
    return AlertEvaluationResponse(
        checked=result.checked,
        skipped=result.skipped,
        triggered=result.triggered,
    )
