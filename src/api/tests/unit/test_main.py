"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock

from fastapi import status
from fastapi.testclient import TestClient


class TestApplication:
    """Tests for the application object."""

    def test_health(self):
        """The basic health check needs no database."""
        from main import app

        client = TestClient(app)
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}

    def test_iam_routes_are_mounted(self):
        """External group routes are served under /iam."""
        from main import app

        paths = app.openapi()["paths"]

        assert "/iam/external-groups" in paths
        assert "/iam/groups/{group_id}/external-groups" in paths
        assert "/iam/groups/{group_id}/external-groups/all" in paths

    def test_health_db_reports_failure(self):
        """A failing database is reported, not raised."""
        from infrastructure.database.dependencies import get_read_session
        from main import app

        session = AsyncMock()
        session.execute.side_effect = RuntimeError("connection refused")
        app.dependency_overrides[get_read_session] = lambda: session
        try:
            response = TestClient(app).get("/health/db")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "error"
        assert response.json()["connected"] is False
