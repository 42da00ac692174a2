"""API tests for non-versioned system routes.

Validates behavior of the root and health endpoints exposed by the system
router.
"""

import pytest

from src.core.config import settings
from src.core.container import get_database
from src.main import app


class _UnreachableDatabase:
    async def check_connection(self) -> bool:
        return False


@pytest.mark.api
async def test_root_endpoint_returns_status_and_version(client) -> None:
    """Root endpoint should return operational status and app version."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == settings.app_name
    assert data["status"] == "operational"
    assert data["version"] == settings.app_version


@pytest.mark.api
async def test_health_endpoint_returns_healthy_status(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "ok"}


@pytest.mark.api
async def test_health_endpoint_reports_unreachable_database(client) -> None:
    app.dependency_overrides[get_database] = lambda: _UnreachableDatabase()

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "unavailable"}

