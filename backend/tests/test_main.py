"""
Tests for app/main.py - FastAPI application, health check and error handling.
"""
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import status
from fastapi.responses import JSONResponse


@pytest.fixture
def mock_request():
    """Create a mock FastAPI request object."""
    request = MagicMock()
    request.method = "GET"
    request.url = MagicMock()
    request.url.path = "/api/v1/employees"
    return request


class TestHealthEndpoint:
    """Test application health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check_healthy(self):
        """Health check should return healthy when DB is connected."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = True

            response = await health_check()

        assert response.status == "healthy"
        assert response.checks["database"] is True

    @pytest.mark.asyncio
    async def test_health_check_unhealthy_when_db_down(self):
        """Health check should return 503 when DB is down."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = False

            response = await health_check()

        assert isinstance(response, JSONResponse)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert json.loads(response.body)["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_health_over_http(self, client):
        with patch("app.main.check_db_connection", new_callable=AsyncMock, return_value=True):
            response = await client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["service"] == "employee-directory"


class TestCheckDbConnection:

    @pytest.mark.asyncio
    async def test_check_db_connection_success(self):
        """Should return True when database is reachable."""
        from app.db.session import check_db_connection

        mock_engine = MagicMock()
        mock_connection = AsyncMock()
        mock_engine.connect = MagicMock(return_value=mock_connection)
        mock_connection.__aenter__ = AsyncMock(return_value=mock_connection)
        mock_connection.__aexit__ = AsyncMock(return_value=None)
        mock_connection.execute = AsyncMock()

        with patch("app.db.session.engine", mock_engine):
            result = await check_db_connection()

        assert result is True

    @pytest.mark.asyncio
    async def test_check_db_connection_failure(self):
        """Should return False when database is unreachable."""
        from app.db.session import check_db_connection

        mock_engine = MagicMock()
        mock_engine.connect = MagicMock(side_effect=Exception("Connection refused"))

        with patch("app.db.session.engine", mock_engine):
            result = await check_db_connection()

        assert result is False


class TestGlobalExceptionHandler:
    """Test global exception handler."""

    @pytest.mark.asyncio
    async def test_development_includes_details(self, mock_request):
        from app.main import global_exception_handler

        with patch("app.main.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "development"
            response = await global_exception_handler(mock_request, ValueError("Test error message"))

        body = json.loads(response.body)
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert body["error"] == "ValueError"
        assert body["detail"] == "Test error message"
        assert body["path"] == "/api/v1/employees"

    @pytest.mark.asyncio
    async def test_production_hides_details(self, mock_request):
        from app.main import global_exception_handler

        with patch("app.main.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "production"
            response = await global_exception_handler(mock_request, ValueError("db password is hunter2"))

        body = json.loads(response.body)
        assert body["error"] == "Internal server error"
        assert "hunter2" not in body["detail"]
        assert "Reference ID" in body["detail"]


class TestAppShell:

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert "Employee Directory" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_request_id_header(self, client):
        response = await client.get("/api/v1/employees")

        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_docs_enabled_in_debug(self, client):
        response = await client.get("/openapi.json")

        assert response.status_code == status.HTTP_200_OK
        assert "/api/v1/employees/{employee_id}" in response.json()["paths"]
