"""
TASKNEST API - Health Endpoint Tests
"""

from unittest.mock import AsyncMock, MagicMock

from tasknest.config import settings
from tasknest.database import get_database
from tasknest.main import app


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client):
        """Health endpoint should return 200 OK."""
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_ok_status(self, client):
        data = client.get("/health").json()
        assert data["success"] is True
        assert data["data"]["status"] == "ok"
        assert data["data"]["db"] == "ok"
        assert "timestamp" in data["data"]

    def test_health_includes_service_info(self, client):
        """Health endpoint should include service name and version."""
        data = client.get("/health").json()["data"]
        assert data["service"] == settings.APP_NAME
        assert data["version"] == settings.APP_VERSION

    def test_health_reports_unreachable_database(self, client):
        async def broken_database():
            mock_db = MagicMock()
            mock_db.command = AsyncMock(side_effect=ConnectionError("no route to host"))
            return mock_db

        app.dependency_overrides[get_database] = broken_database
        response = client.get("/health")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Database unreachable"}

    def test_health_needs_no_token(self, client):
        response = client.get("/health", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200


class TestRootEndpoint:
    """Tests for the root endpoint."""

    def test_root_returns_200(self, client):
        """Root endpoint should return 200 OK."""
        response = client.get("/")
        assert response.status_code == 200

    def test_root_includes_service_info(self, client):
        data = client.get("/").json()["data"]
        assert "service" in data
        assert "version" in data
