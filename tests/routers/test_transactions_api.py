# tests/routers/test_transactions_api.py
"""
Integration tests for Transaction API endpoints.

The ledger is append-only, so only create and read endpoints exist.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from finsight.database import get_db
from finsight.dependencies import clear_service_caches
from finsight.main import app
from finsight.models import Base, Portfolio, TransactionType
from finsight.routers import transactions as transactions_router
from tests.conftest import create_portfolio, create_transaction, create_user


def post_trade(client: TestClient, portfolio_id: int, transaction_type: str, quantity: str,
               price: str = "100", symbol: str = "AAPL"):
    return client.post("/transactions/", json={
        "portfolio_id": portfolio_id,
        "symbol": symbol,
        "transaction_type": transaction_type,
        "quantity": quantity,
        "price": price,
    })


class TestCreateTransaction:

    def test_buy_success(self, client: TestClient, sample_portfolio: Portfolio):
        response = post_trade(client, sample_portfolio.id, "BUY", "10", symbol="aapl")

        assert response.status_code == 201
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["transaction_type"] == "BUY"
        assert Decimal(data["quantity"]) == Decimal("10")
        assert "created_at" in data

    def test_sell_within_holding(self, client: TestClient, sample_portfolio: Portfolio):
        post_trade(client, sample_portfolio.id, "BUY", "10")

        response = post_trade(client, sample_portfolio.id, "SELL", "10", price="120")

        assert response.status_code == 201

    def test_oversell_returns_400(self, client: TestClient, sample_portfolio: Portfolio):
        post_trade(client, sample_portfolio.id, "BUY", "5")
        post_trade(client, sample_portfolio.id, "SELL", "2")

        response = post_trade(client, sample_portfolio.id, "SELL", "4")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "OversellError"
        assert data["details"]["field"] == "quantity"
        assert data["details"]["symbol"] == "AAPL"
        assert Decimal(data["details"]["requested"]) == Decimal("4")
        assert data["details"]["held"] == "3"

    def test_sell_without_holding_returns_400(self, client: TestClient, sample_portfolio: Portfolio):
        response = post_trade(client, sample_portfolio.id, "SELL", "1")
        assert response.status_code == 400

        data = response.json()
        assert data["details"]["held"] == "0"
        assert data["message"] == "Cannot sell 1 shares of AAPL. Only 0 shares available."

    def test_holdings_are_per_portfolio(
            self, client: TestClient, db: Session, sample_user, sample_portfolio: Portfolio
    ):
        other = create_portfolio(db, sample_user, name="Other")
        post_trade(client, other.id, "BUY", "10")

        response = post_trade(client, sample_portfolio.id, "SELL", "1")

        assert response.status_code == 400

    def test_unknown_portfolio_returns_404(self, client: TestClient):
        response = post_trade(client, 999, "BUY", "1")
        assert response.status_code == 404

    def test_zero_quantity_returns_422(self, client: TestClient, sample_portfolio: Portfolio):
        response = post_trade(client, sample_portfolio.id, "BUY", "0")

        assert response.status_code == 422
        fields = [d["field"] for d in response.json()["details"]]
        assert "body.quantity" in fields

    def test_unknown_type_returns_422(self, client: TestClient, sample_portfolio: Portfolio):
        response = post_trade(client, sample_portfolio.id, "SHORT", "1")
        assert response.status_code == 422

    def test_no_update_or_delete(self, client: TestClient, db: Session, sample_portfolio: Portfolio):
        txn = create_transaction(db, sample_portfolio, "AAPL", TransactionType.BUY, "1", "1")

        assert client.delete(f"/transactions/{txn.id}").status_code == 405
        assert client.patch(f"/transactions/{txn.id}", json={"quantity": "2"}).status_code == 405


class TestListTransactions:

    def test_ledger_order_and_filters(self, client: TestClient, db: Session, sample_portfolio: Portfolio):
        create_transaction(db, sample_portfolio, "AAPL", TransactionType.BUY, "10", "100")
        create_transaction(db, sample_portfolio, "MSFT", TransactionType.BUY, "1", "300")
        create_transaction(db, sample_portfolio, "AAPL", TransactionType.SELL, "5", "110")

        data = client.get("/transactions/", params={"portfolio_id": sample_portfolio.id}).json()
        assert [t["symbol"] for t in data["items"]] == ["AAPL", "MSFT", "AAPL"]
        assert data["pagination"]["total"] == 3

        data = client.get("/transactions/", params={"symbol": "aapl"}).json()
        assert data["pagination"]["total"] == 2

        data = client.get("/transactions/", params={"transaction_type": "SELL"}).json()
        assert len(data["items"]) == 1
        assert Decimal(data["items"][0]["quantity"]) == Decimal("5")

    def test_portfolio_transactions(self, client: TestClient, db: Session, sample_portfolio: Portfolio):
        create_transaction(db, sample_portfolio, "AAPL", TransactionType.BUY, "10", "100")

        response = client.get(f"/transactions/portfolio/{sample_portfolio.id}")

        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 1

    def test_portfolio_transactions_missing_portfolio(self, client: TestClient):
        assert client.get("/transactions/portfolio/999").status_code == 404

    def test_get_transaction(self, client: TestClient, db: Session, sample_portfolio: Portfolio):
        txn = create_transaction(db, sample_portfolio, "AAPL", TransactionType.BUY, "10", "100")

        response = client.get(f"/transactions/{txn.id}")

        assert response.status_code == 200
        assert response.json()["id"] == txn.id

    def test_get_missing_transaction(self, client: TestClient):
        response = client.get("/transactions/999")

        assert response.status_code == 404
        assert response.json()["details"]["resource_type"] == "Transaction"


# =============================================================================
# CONCURRENT SELLS
# =============================================================================

@pytest.fixture
def file_backed_app(tmp_path) -> Iterator[tuple[TestClient, sessionmaker]]:
    """
    TestClient over a file-backed SQLite database, one session per request.

    The shared in-memory session of the `client` fixture cannot model two
    requests writing at the same time.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    clear_service_caches()
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c, factory

    app.dependency_overrides.clear()
    clear_service_caches()
    engine.dispose()


class TestConcurrentSells:

    def test_racing_sells_leave_ledger_replayable(self, file_backed_app, monkeypatch):
        client, factory = file_backed_app
        with factory() as session:
            user = create_user(session)
            portfolio = create_portfolio(session, user)
            create_transaction(session, portfolio, "AAPL", TransactionType.BUY, "10", "100")
            portfolio_id = portfolio.id

        # Both requests pass the holding check before either one inserts
        barrier = threading.Barrier(2, timeout=5)
        quantity_held = transactions_router.get_current_quantity_held

        def quantity_held_then_wait(*args, **kwargs):
            held = quantity_held(*args, **kwargs)
            barrier.wait()
            return held

        monkeypatch.setattr(transactions_router, "get_current_quantity_held", quantity_held_then_wait)

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(post_trade, client, portfolio_id, "SELL", "10", "120")
                for _ in range(2)
            ]
            responses = [future.result() for future in futures]

        assert sorted(r.status_code for r in responses) == [201, 400]
        rejected = next(r for r in responses if r.status_code == 400)
        assert rejected.json()["error"] == "OversellError"
        assert rejected.json()["details"]["held"] == "0"

        sells = client.get(
            "/transactions/",
            params={"portfolio_id": portfolio_id, "transaction_type": "SELL"},
        ).json()
        assert sells["pagination"]["total"] == 1

        summary = client.get(f"/portfolios/{portfolio_id}/summary")
        assert summary.status_code == 200
        holding = summary.json()["holdings"][0]
        assert Decimal(holding["quantity"]) == Decimal("0")
        assert Decimal(holding["realized"]) == Decimal("200")
