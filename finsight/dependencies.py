# finsight/dependencies.py
"""
Dependency injection module for FastAPI services.

Services are singletons shared across requests, created lazily on first
use so importing this module has no side effects.

Usage in routers:
    from finsight.dependencies import get_valuation_service

    @router.get("/{portfolio_id}/summary")
    def get_summary(
        portfolio_id: int,
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
    ):
        ...

Tests override these with app.dependency_overrides, or call
clear_service_caches() after changing settings.
"""

import logging
from functools import lru_cache

from finsight.config import settings
from finsight.database import SessionLocal
from finsight.jobs.price_updater import PriceUpdaterJob
from finsight.services.alerts import AlertService
from finsight.services.market_data import (
    PriceProvider,
    PriceSnapshotService,
    PriceUpdateService,
    SimulatedPriceProvider,
)
from finsight.services.valuation import ValuationService

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================
# Order matters: define dependencies before dependents
# 1. get_price_provider, get_snapshot_service (no deps)
# 2. get_valuation_service, get_alert_service (snapshot)
# 3. get_price_update_service (provider, snapshot)
# 4. get_price_updater_job (update service, alert service)


@lru_cache(maxsize=1)
def get_price_provider() -> PriceProvider:
    """Shared simulator, so one random stream drives all updates."""
    logger.debug("Initializing singleton SimulatedPriceProvider")
    return SimulatedPriceProvider(volatility=settings.price_volatility)


@lru_cache(maxsize=1)
def get_snapshot_service() -> PriceSnapshotService:
    return PriceSnapshotService()


@lru_cache(maxsize=1)
def get_valuation_service() -> ValuationService:
    logger.debug("Initializing singleton ValuationService")
    return ValuationService(
        snapshot_service=get_snapshot_service(),
        include_closed=settings.include_closed_positions,
    )


@lru_cache(maxsize=1)
def get_alert_service() -> AlertService:
    return AlertService(snapshot_service=get_snapshot_service())


@lru_cache(maxsize=1)
def get_price_update_service() -> PriceUpdateService:
    logger.debug("Initializing singleton PriceUpdateService")
    return PriceUpdateService(
        provider=get_price_provider(),
        snapshot_service=get_snapshot_service(),
    )


@lru_cache(maxsize=1)
def get_price_updater_job() -> PriceUpdaterJob:
    """The periodic job started by the app lifespan; opens its own sessions."""
    return PriceUpdaterJob(
        session_factory=SessionLocal,
        update_service=get_price_update_service(),
        alert_service=get_alert_service(),
        interval=settings.price_update_interval_seconds,
    )


# =============================================================================
# CACHE MANAGEMENT
# =============================================================================

def clear_service_caches() -> None:
    """Drop all singletons; the next call builds fresh instances."""
    get_price_provider.cache_clear()
    get_snapshot_service.cache_clear()
    get_valuation_service.cache_clear()
    get_alert_service.cache_clear()
    get_price_update_service.cache_clear()
    get_price_updater_job.cache_clear()
    logger.info("Cleared all service singleton caches")
