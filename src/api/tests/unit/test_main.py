"""Unit tests for the main FastAPI application.

Covers the health endpoints and the uniform {"error": ...} rendering of
request validation and header errors. The database session is replaced
with a mock so no PostgreSQL instance is needed.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from iam.domain.value_objects import TenantId
from infrastructure.database.dependencies import get_read_session
from main import app
from pricing.dependencies import get_quote_service, get_rate_service


@pytest.fixture
def mock_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(mock_session: AsyncMock):
    """Test client with the database session and services stubbed out."""

    async def _session():
        yield mock_session

    app.dependency_overrides[get_read_session] = _session
    app.dependency_overrides[get_rate_service] = lambda: MagicMock()
    app.dependency_overrides[get_quote_service] = lambda: MagicMock()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def identity_headers() -> dict[str, str]:
    return {"X-Tenant-ID": TenantId.generate().value, "X-User-ID": "user-1"}


class TestHealth:
    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_db_health_reports_connected(self, client: TestClient, mock_session):
        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "connected": True}
        mock_session.execute.assert_awaited_once()

    def test_db_health_reports_unreachable(self, client: TestClient, mock_session):
        mock_session.execute.side_effect = OperationalError(
            "SELECT 1", {}, ConnectionRefusedError("refused")
        )

        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {
            "status": "error",
            "connected": False,
            "error": "Database is unreachable",
        }


class TestErrorRendering:
    def test_missing_tenant_header_returns_400(self, client: TestClient):
        response = client.post("/rates/resolve", json={}, headers={"X-User-ID": "u"})

        assert response.status_code == 400
        assert response.json() == {"error": "X-Tenant-ID header is required"}

    def test_invalid_tenant_header_returns_400(self, client: TestClient):
        response = client.post(
            "/rates/resolve",
            json={},
            headers={"X-Tenant-ID": "tenant-a", "X-User-ID": "u"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "X-Tenant-ID header must be a valid ULID"}

    def test_missing_user_header_returns_401(self, client: TestClient):
        response = client.post(
            "/price/quote",
            json={"productId": "p1"},
            headers={"X-Tenant-ID": TenantId.generate().value},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    def test_malformed_body_returns_400(self, client: TestClient, identity_headers):
        response = client.post("/price/quote", json={}, headers=identity_headers)

        assert response.status_code == 400
        body = response.json()
        assert set(body) == {"error"}
        assert body["error"].startswith("Invalid request")
        assert "productId" in body["error"]

    def test_invalid_json_returns_400(self, client: TestClient, identity_headers):
        response = client.post(
            "/rates/resolve",
            content=b"{not json",
            headers={**identity_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_unknown_route_returns_error_body(self, client: TestClient):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
