"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL in production, SQLite in tests)
- Lifecycle store (transaction-scoped repositories)
- Token signing (JWT) and token hashing (SHA-256)
- Device fingerprinting (user-agents)
- Logging (structlog console adapter)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.enums import Environment
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        DeviceFingerprinterProtocol,
        LifecycleStoreProtocol,
        LoggerProtocol,
        TokenGenerationProtocol,
        TokenHasherProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_lifecycle_store() -> "LifecycleStoreProtocol":
    """Get lifecycle store singleton (app-scoped).

    Each ``transaction()`` opens its own database session, so one store
    instance is shared by every request.

    Returns:
        Store implementing LifecycleStoreProtocol.
    """
    from src.infrastructure.persistence.lifecycle_store import (
        SqlAlchemyLifecycleStore,
    )

    return SqlAlchemyLifecycleStore(
        get_database(),
        timeout_seconds=settings.store_timeout_seconds,
    )


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT token service singleton (app-scoped).

    Returns:
        Token generation service implementing TokenGenerationProtocol.
    """
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )


@lru_cache()
def get_token_hasher() -> "TokenHasherProtocol":
    """Get token hasher singleton (app-scoped)."""
    from src.infrastructure.security import Sha256TokenHasher

    return Sha256TokenHasher()


@lru_cache()
def get_fingerprinter() -> "DeviceFingerprinterProtocol":
    """Get device fingerprinter singleton (app-scoped)."""
    from src.infrastructure.enrichers import UserAgentDeviceFingerprinter

    return UserAgentDeviceFingerprinter(logger=get_logger())


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
