# finsight/services/alerts.py
"""
Price alert management and evaluation.

An alert watches one symbol for the snapshot price crossing a target:
- GT triggers when price > target
- LT triggers when price < target

Evaluation is a sweep over un-triggered alerts. A triggered alert is never
reset; to watch again, create a new alert.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finsight.models import Alert, AlertCondition, User
from finsight.services.exceptions import AlertNotFoundError, UserNotFoundError
from finsight.services.market_data.snapshot import PriceSnapshotService

logger = logging.getLogger(__name__)


@dataclass
class AlertSweepResult:
    """Counts from one evaluation sweep."""

    checked: int = 0
    skipped: int = 0
    triggered: list[int] = field(default_factory=list)

    @property
    def triggered_count(self) -> int:
        return len(self.triggered)


def is_condition_met(condition: AlertCondition, price: Decimal, target: Decimal) -> bool:
    """Strict comparison: a price equal to the target never triggers."""
    if condition == AlertCondition.GT:
        return price > target
    if condition == AlertCondition.LT:
        return price < target
    raise ValueError(f"Unknown alert condition: {condition}")


class AlertService:
    """CRUD and evaluation for price alerts."""

    def __init__(self, snapshot_service: PriceSnapshotService | None = None) -> None:
        self._snapshot_service = snapshot_service or PriceSnapshotService()

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_alert(
            self,
            db: Session,
            user_id: int,
            symbol: str,
            condition: AlertCondition,
            price: Decimal,
    ) -> Alert:
        if db.get(User, user_id) is None:
            raise UserNotFoundError(user_id)

        alert = Alert(
            user_id=user_id,
            symbol=symbol.upper(),
            condition=condition,
            price=price,
            triggered=False,
        )
        db.add(alert)
        db.commit()
        db.refresh(alert)

        logger.info(f"Created alert {alert.id}: {alert.symbol} {condition.value} {price}")
        return alert

    def list_alerts(
            self,
            db: Session,
            user_id: int | None = None,
            triggered: bool | None = None,
            skip: int = 0,
            limit: int = 100,
    ) -> tuple[list[Alert], int]:
        """
        List alerts with optional filters.

        Returns:
            (page of alerts, total matching count)
        """
        query = select(Alert)
        if user_id is not None:
            query = query.where(Alert.user_id == user_id)
        if triggered is not None:
            query = query.where(Alert.triggered.is_(triggered))

        total = db.scalar(select(func.count()).select_from(query.subquery())) or 0
        items = db.scalars(
            query.order_by(Alert.created_at.desc(), Alert.id.desc()).offset(skip).limit(limit)
        ).all()
        return list(items), total

    def get_alert(self, db: Session, alert_id: int) -> Alert:
        alert = db.get(Alert, alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        return alert

    def delete_alert(self, db: Session, alert_id: int) -> None:
        alert = self.get_alert(db, alert_id)
        db.delete(alert)
        db.commit()
        logger.info(f"Deleted alert {alert_id}")

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def evaluate(self, db: Session) -> AlertSweepResult:
        """
        Check every un-triggered alert against the price snapshot.

        Alerts whose symbol has no snapshot price are skipped. Met alerts
        are flagged and stamped, then the session is committed.

        Args:
            db: Database session

        Returns:
            AlertSweepResult with checked/skipped counts and triggered IDs
        """
        result = AlertSweepResult()
        pending = list(db.scalars(
            select(Alert).where(Alert.triggered.is_(False)).order_by(Alert.id)
        ))
        if not pending:
            return result

        prices = self._snapshot_service.get_snapshot(db, symbols={a.symbol for a in pending})
        now = datetime.now(timezone.utc)

        for alert in pending:
            price = prices.get(alert.symbol)
            if price is None:
                result.skipped += 1
                continue

            result.checked += 1
            if is_condition_met(alert.condition, price, alert.price):
                alert.triggered = True
                alert.triggered_at = now
                result.triggered.append(alert.id)
                logger.info(
                    f"Alert {alert.id} triggered: {alert.symbol} "
                    f"{alert.condition.value} {alert.price} (price {price})"
                )

        try:
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error storing alert sweep: {e}")
            db.rollback()
            raise

        return result
