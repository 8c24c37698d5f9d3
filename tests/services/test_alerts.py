# tests/services/test_alerts.py
"""
Tests for AlertService: CRUD and evaluation sweeps.
"""

from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from finsight.models import Alert, AlertCondition, User
from finsight.services.alerts import AlertService, is_condition_met
from finsight.services.exceptions import AlertNotFoundError, UserNotFoundError
from tests.conftest import create_alert, create_user, set_price

GT = AlertCondition.GT
LT = AlertCondition.LT


@pytest.fixture
def service() -> AlertService:
    return AlertService()


class TestIsConditionMet:

    @pytest.mark.parametrize("condition,price,target,expected", [
        (GT, "151", "150", True),
        (GT, "150", "150", False),
        (GT, "149", "150", False),
        (LT, "149", "150", True),
        (LT, "150", "150", False),
        (LT, "151", "150", False),
    ])
    def test_strict_comparison(self, condition, price, target, expected):
        assert is_condition_met(condition, Decimal(price), Decimal(target)) is expected


class TestAlertCrud:

    def test_create(self, db: Session, sample_user: User, service: AlertService):
        alert = service.create_alert(db, sample_user.id, "aapl", GT, Decimal("200"))

        assert alert.id is not None
        assert alert.symbol == "AAPL"
        assert alert.triggered is False
        assert alert.triggered_at is None

    def test_create_unknown_user(self, db: Session, service: AlertService):
        with pytest.raises(UserNotFoundError):
            service.create_alert(db, 999, "AAPL", GT, Decimal("1"))

    def test_list_filters(self, db: Session, sample_user: User, service: AlertService):
        other = create_user(db, email="other@example.com")
        create_alert(db, sample_user, symbol="AAPL")
        create_alert(db, sample_user, symbol="MSFT", triggered=True)
        create_alert(db, other, symbol="NVDA")

        items, total = service.list_alerts(db, user_id=sample_user.id)
        assert total == 2
        assert {a.symbol for a in items} == {"AAPL", "MSFT"}

        items, total = service.list_alerts(db, triggered=False)
        assert total == 2
        assert {a.symbol for a in items} == {"AAPL", "NVDA"}

    def test_list_paginates(self, db: Session, sample_user: User, service: AlertService):
        for i in range(5):
            create_alert(db, sample_user, price=str(100 + i))

        items, total = service.list_alerts(db, skip=1, limit=2)

        assert total == 5
        assert len(items) == 2

    def test_delete(self, db: Session, sample_user: User, service: AlertService):
        alert = create_alert(db, sample_user)

        service.delete_alert(db, alert.id)

        assert db.get(Alert, alert.id) is None

    def test_delete_missing(self, db: Session, service: AlertService):
        with pytest.raises(AlertNotFoundError):
            service.delete_alert(db, 42)


class TestEvaluate:

    def test_triggers_met_conditions(self, db: Session, sample_user: User, service: AlertService):
        above = create_alert(db, sample_user, symbol="AAPL", condition=GT, price="150")
        below = create_alert(db, sample_user, symbol="MSFT", condition=LT, price="300")
        quiet = create_alert(db, sample_user, symbol="AAPL", condition=LT, price="100")
        set_price(db, "AAPL", "151")
        set_price(db, "MSFT", "299.99")

        result = service.evaluate(db)

        assert result.checked == 3
        assert result.skipped == 0
        assert sorted(result.triggered) == sorted([above.id, below.id])

        db.refresh(above)
        db.refresh(quiet)
        assert above.triggered is True
        assert above.triggered_at is not None
        assert quiet.triggered is False

    def test_missing_price_skipped(self, db: Session, sample_user: User, service: AlertService):
        create_alert(db, sample_user, symbol="NEWCO")

        result = service.evaluate(db)

        assert result.skipped == 1
        assert result.checked == 0
        assert result.triggered == []

    def test_triggered_is_one_way(self, db: Session, sample_user: User, service: AlertService):
        alert = create_alert(db, sample_user, symbol="AAPL", condition=GT, price="150")
        set_price(db, "AAPL", "160")
        service.evaluate(db)

        set_price(db, "AAPL", "140")
        result = service.evaluate(db)

        db.refresh(alert)
        assert alert.triggered is True
        assert result.checked == 0
        assert result.triggered == []

    def test_no_alerts(self, db: Session, service: AlertService):
        result = service.evaluate(db)
        assert (result.checked, result.skipped, result.triggered_count) == (0, 0, 0)
