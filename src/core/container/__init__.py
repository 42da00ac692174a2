"""Container module - Centralized dependency injection.

The container is organized into modules:
- infrastructure: database, lifecycle store, JWT, hashing, fingerprinting,
  logging
- services: lifecycle manager, session admin, reaper

Usage:
    from src.core.container import get_lifecycle_manager

    manager = get_lifecycle_manager()
"""

from src.core.container.infrastructure import (
    get_database,
    get_fingerprinter,
    get_lifecycle_store,
    get_logger,
    get_token_hasher,
    get_token_service,
)
from src.core.container.services import (
    get_lifecycle_manager,
    get_reaper,
    get_session_admin,
)

__all__ = [
    "get_database",
    "get_fingerprinter",
    "get_lifecycle_manager",
    "get_lifecycle_store",
    "get_logger",
    "get_reaper",
    "get_session_admin",
    "get_token_hasher",
    "get_token_service",
]
