# finsight/routers/prices.py
"""
Price snapshot endpoints.

- GET  /prices/          - Latest price for every symbol
- GET  /prices/{symbol}  - Latest price for one symbol
- POST /prices/refresh   - Run one updater pass now (rate limited)

The background job calls the same services on a timer; refresh exists for
demos and tests that cannot wait for the next tick.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.dependencies import (
    get_alert_service,
    get_price_update_service,
    get_snapshot_service,
)
from finsight.middleware.rate_limit import limiter, RATE_LIMIT_SYNC
from finsight.models import MarketPrice
from finsight.schemas.prices import (
    MarketPriceListResponse,
    MarketPriceResponse,
    PriceRefreshResponse,
)
from finsight.services.alerts import AlertService
from finsight.services.exceptions import NotFoundError
from finsight.services.market_data import PriceSnapshotService, PriceUpdateService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/prices",
    tags=["Prices"],
)


@router.get(
    "/",
    response_model=MarketPriceListResponse,
    summary="List snapshot prices",
)
def list_prices(
        db: Session = Depends(get_db),
        snapshot: PriceSnapshotService = Depends(get_snapshot_service),
) -> MarketPriceListResponse:
    """One row per symbol, alphabetical."""
    prices = snapshot.list_prices(db)
    return MarketPriceListResponse(
        items=[MarketPriceResponse.model_validate(p) for p in prices],
        count=len(prices),
    )


@router.post(
    "/refresh",
    response_model=PriceRefreshResponse,
    summary="Refresh prices now",
    response_description="Updated symbols and alerts triggered by the new prices",
)
@limiter.limit(RATE_LIMIT_SYNC)
def refresh_prices(
        request: Request,  # Required for rate limiting
        db: Session = Depends(get_db),
        update_service: PriceUpdateService = Depends(get_price_update_service),
        alert_service: AlertService = Depends(get_alert_service),
) -> PriceRefreshResponse:
    """
    Move every active stock one simulated step, then sweep alerts.

    A stock whose quote fails is reported under **failed**; the others
    are still stored.
    """
    logger.info("Manual price refresh requested")

    prices = update_service.update_prices(db)
    alerts = alert_service.evaluate(db)

    return PriceRefreshResponse(
        status=prices.status,
        updated=prices.updated,
        failed=prices.failed,
        alerts_checked=alerts.checked,
        alerts_skipped=alerts.skipped,
        alerts_triggered=alerts.triggered,
        started_at=prices.started_at,
        completed_at=prices.completed_at,
    )


@router.get(
    "/{symbol}",
    response_model=MarketPriceResponse,
    summary="Get a snapshot price",
)
def get_price(
        symbol: str,
        db: Session = Depends(get_db),
        snapshot: PriceSnapshotService = Depends(get_snapshot_service),
) -> MarketPrice:
    normalized = symbol.strip().upper()
    price = snapshot.get_price(db, normalized)
    if price is None:
        raise NotFoundError(
            f"No price for {normalized}",
            resource_type="MarketPrice",
            resource_id=normalized,
        )
    return price
