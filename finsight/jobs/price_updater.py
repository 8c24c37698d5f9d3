# finsight/jobs/price_updater.py
"""
Periodic price updater.

Each run moves every catalog price through the price provider, republishes
the price snapshot and then sweeps price alerts. The loop runs once
immediately and then every PRICE_UPDATE_INTERVAL_SECONDS.

A failed run is logged and the loop keeps going.

Usage:
    # Inside the API process (see finsight.main lifespan)
    PRICE_UPDATER_ENABLED=true uvicorn finsight.main:app

    # Standalone
    python -m finsight.jobs.price_updater
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from finsight.services.alerts import AlertService, AlertSweepResult
from finsight.services.market_data import PriceUpdateService, PriceUpdateResult

logger = logging.getLogger(__name__)


@dataclass
class PriceUpdaterRun:
    """Summary of one updater run."""

    started_at: datetime
    prices: PriceUpdateResult
    alerts: AlertSweepResult


class PriceUpdaterJob:
    """
    Runs price updates and alert sweeps on a fixed interval.

    Args:
        session_factory: Callable returning a new Session per run
        update_service: Applies quotes to the catalog and snapshot
        alert_service: Evaluates alerts against the snapshot
        interval: Seconds between runs
    """

    def __init__(
            self,
            session_factory: Callable[[], Session],
            update_service: PriceUpdateService,
            alert_service: AlertService,
            interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._session_factory = session_factory
        self._update_service = update_service
        self._alert_service = alert_service
        self._interval = interval

    @property
    def interval(self) -> float:
        return self._interval

    def run_once(self) -> PriceUpdaterRun:
        """Update prices then evaluate alerts in a fresh session."""
        started_at = datetime.now(timezone.utc)
        db = self._session_factory()
        try:
            prices = self._update_service.update_prices(db)
            alerts = self._alert_service.evaluate(db)
        finally:
            db.close()

        logger.info(
            f"Price updater run: {prices.updated_count} prices updated, "
            f"{alerts.triggered_count} alerts triggered"
        )
        return PriceUpdaterRun(started_at=started_at, prices=prices, alerts=alerts)

    async def run_forever(self, stop_event: asyncio.Event) -> None:
        """
        Run until stop_event is set.

        The first run starts immediately. Blocking database work runs in a
        worker thread so the event loop stays responsive.
        """
        logger.info(f"Price updater started (interval={self._interval}s)")
        while not stop_event.is_set():
            try:
                await asyncio.to_thread(self.run_once)
            except Exception:
                logger.exception("Price updater run failed")

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                pass
        logger.info("Price updater stopped")


def main() -> None:
    from finsight.config import settings
    from finsight.database import SessionLocal, engine
    from finsight.dependencies import get_alert_service, get_price_update_service
    from finsight.models import Base
    from finsight.utils.logging import setup_logging

    setup_logging()
    Base.metadata.create_all(bind=engine)

    update_service = get_price_update_service()
    db = SessionLocal()
    try:
        update_service.seed_stocks(db)
    finally:
        db.close()

    job = PriceUpdaterJob(
        session_factory=SessionLocal,
        update_service=update_service,
        alert_service=get_alert_service(),
        interval=settings.price_update_interval_seconds,
    )
    stop_event = asyncio.Event()
    try:
        asyncio.run(job.run_forever(stop_event))
    except KeyboardInterrupt:
        logger.info("Price updater interrupted")


if __name__ == "__main__":
    main()
