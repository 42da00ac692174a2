"""Fixtures for HTTP API tests.

The real FastAPI app is exercised through httpx with the lifecycle
dependencies overridden to use the per-test database. The lifespan is not
run, so no reaper is started.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.container import (
    get_database,
    get_lifecycle_manager,
    get_session_admin,
)
from src.main import app


@pytest_asyncio.fixture
async def client(database, manager, admin):
    """Async HTTP client bound to the app and the test database."""
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_lifecycle_manager] = lambda: manager
    app.dependency_overrides[get_session_admin] = lambda: admin
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
