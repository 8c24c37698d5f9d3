# tests/routers/test_error_handling.py
"""
Integration tests for error handling across all API endpoints.

These tests verify:
- Consistent error response format (ErrorDetail schema)
- Correct HTTP status codes for different error types
- Validation error details
- Global exception handler behavior
"""

import pytest
from fastapi.testclient import TestClient

from finsight.dependencies import get_valuation_service
from finsight.main import app
from finsight.services.exceptions import MarketDataError, ServiceError


class RaisingValuationService:
    """Stand-in service whose compute_summary raises a given exception."""

    def __init__(self, exc: Exception):
        self.exc = exc

    def compute_summary(self, *args, **kwargs):
        raise self.exc


class TestErrorResponseFormat:

    @pytest.mark.parametrize("path", [
        "/users/999",
        "/portfolios/999",
        "/transactions/999",
        "/stocks/NOPE",
        "/prices/NOPE",
    ])
    def test_not_found_shape(self, client: TestClient, path: str):
        response = client.get(path)

        assert response.status_code == 404
        data = response.json()
        assert set(data) == {"error", "message", "details"}
        assert data["error"].endswith("NotFoundError")

    def test_unknown_route(self, client: TestClient):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {
            "error": "NotFoundError",
            "message": "Not Found",
            "details": None,
        }

    def test_method_not_allowed(self, client: TestClient):
        response = client.put("/users/1", json={})

        assert response.status_code == 405
        assert response.json() == {
            "error": "MethodNotAllowedError",
            "message": "Method Not Allowed",
            "details": None,
        }
        assert "GET" in response.headers["allow"]

    def test_request_validation_shape(self, client: TestClient):
        response = client.post("/transactions/", json={"portfolio_id": "abc"})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Request validation failed"
        assert all({"field", "message", "type"} <= set(d) for d in data["details"])
        assert "body.symbol" in [d["field"] for d in data["details"]]

    def test_invalid_path_parameter(self, client: TestClient):
        response = client.get("/portfolios/abc")

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "path.portfolio_id"


class TestServiceErrorMapping:

    def _summary_with(self, client: TestClient, exc: Exception, sample_portfolio):
        app.dependency_overrides[get_valuation_service] = lambda: RaisingValuationService(exc)
        return client.get(f"/portfolios/{sample_portfolio.id}/summary")

    def test_market_data_error_returns_503(self, client: TestClient, sample_portfolio):
        response = self._summary_with(
            client, MarketDataError("feed down", provider="simulator"), sample_portfolio
        )

        assert response.status_code == 503
        assert response.json()["details"] == {"provider": "simulator"}

    def test_generic_service_error_returns_500(self, client: TestClient, sample_portfolio):
        response = self._summary_with(client, ServiceError("unexpected"), sample_portfolio)

        assert response.status_code == 500
        assert response.json() == {
            "error": "ServiceError",
            "message": "unexpected",
            "details": None,
        }


class TestHealthEndpoints:

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["checks"]["database"]["database"] == "sqlite"

    def test_liveness(self, client: TestClient):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_readiness(self, client: TestClient):
        assert client.get("/health/ready").json() == {"status": "ready"}
