"""Pytest configuration and shared fixtures.

Environment variables are set before anything under ``src`` is imported,
because settings are loaded once at import time.

Fixtures:
    database: Fresh in-memory SQLite database per test (tables created)
    store: Lifecycle unit of work over that database
    make_manager: Factory for LifecycleManager with overridable policy
    manager: LifecycleManager with default policy (cap 5, single-session
        replay cascade)
    admin: SessionAdminService bound to ``manager``
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-access-tokens-0123456789")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("REAPER_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import Callable  # noqa: E402
from datetime import timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.application.services import (  # noqa: E402
    LifecycleManager,
    SessionAdminService,
)
from src.infrastructure.enrichers import UserAgentDeviceFingerprinter  # noqa: E402
from src.infrastructure.logging import ConsoleAdapter  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402
from src.infrastructure.persistence.lifecycle_store import (  # noqa: E402
    SqlAlchemyLifecycleStore,
)
from src.infrastructure.security import JWTService, Sha256TokenHasher  # noqa: E402
from tests.factories import TEST_SECRET_KEY  # noqa: E402


@pytest.fixture
def logger() -> ConsoleAdapter:
    """Structured logger writing JSON to stdout (captured by pytest)."""
    return ConsoleAdapter(use_json=True, level="WARNING")


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with all lifecycle tables."""
    db = Database(database_url="sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def store(database) -> SqlAlchemyLifecycleStore:
    """Lifecycle unit of work over the test database."""
    return SqlAlchemyLifecycleStore(database, timeout_seconds=5.0)


@pytest.fixture
def token_service() -> JWTService:
    """Access token signer with a fixed test key."""
    return JWTService(secret_key=TEST_SECRET_KEY, expiration_minutes=15)


@pytest.fixture
def token_hasher() -> Sha256TokenHasher:
    return Sha256TokenHasher()


@pytest.fixture
def make_manager(
    store, token_service, token_hasher, logger
) -> Callable[..., LifecycleManager]:
    """Factory building a LifecycleManager; keyword arguments override defaults.

    Usage:
        manager = make_manager(max_sessions_per_user=2)
    """

    def _make(**overrides: Any) -> LifecycleManager:
        kwargs: dict[str, Any] = {
            "store": store,
            "token_service": token_service,
            "token_hasher": token_hasher,
            "fingerprinter": UserAgentDeviceFingerprinter(logger=logger),
            "logger": logger,
            "session_ttl": timedelta(days=30),
            "refresh_token_ttl": timedelta(days=30),
            "max_sessions_per_user": 5,
            "replay_revokes_all_sessions": False,
        }
        kwargs.update(overrides)
        return LifecycleManager(**kwargs)

    return _make


@pytest.fixture
def manager(make_manager) -> LifecycleManager:
    return make_manager()


@pytest.fixture
def admin(store, manager, logger) -> SessionAdminService:
    return SessionAdminService(store=store, lifecycle=manager, logger=logger)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: HTTP API tests through the ASGI app")
