"""Application service factories.

Application-scoped singletons wiring the lifecycle manager, the session
admin service and the reaper to their infrastructure dependencies.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.infrastructure import (
    get_fingerprinter,
    get_lifecycle_store,
    get_logger,
    get_token_hasher,
    get_token_service,
)

if TYPE_CHECKING:
    from src.application.services import LifecycleManager, SessionAdminService
    from src.infrastructure.jobs import Reaper


@lru_cache()
def get_lifecycle_manager() -> "LifecycleManager":
    """Get lifecycle manager singleton (app-scoped).

    Returns:
        LifecycleManager configured from settings.
    """
    from src.application.services import LifecycleManager

    return LifecycleManager(
        store=get_lifecycle_store(),
        token_service=get_token_service(),
        token_hasher=get_token_hasher(),
        fingerprinter=get_fingerprinter(),
        logger=get_logger(),
        session_ttl=settings.session_ttl,
        refresh_token_ttl=settings.refresh_token_ttl,
        max_sessions_per_user=settings.max_sessions_per_user,
        replay_revokes_all_sessions=settings.replay_revokes_all_sessions,
    )


@lru_cache()
def get_session_admin() -> "SessionAdminService":
    """Get session admin service singleton (app-scoped)."""
    from src.application.services import SessionAdminService

    return SessionAdminService(
        store=get_lifecycle_store(),
        lifecycle=get_lifecycle_manager(),
        logger=get_logger(),
    )


@lru_cache()
def get_reaper() -> "Reaper":
    """Get reaper singleton (app-scoped).

    The lifespan starts it when ``reaper_enabled`` is set.
    """
    from src.infrastructure.jobs import Reaper

    return Reaper(
        store=get_lifecycle_store(),
        logger=get_logger(),
        interval_seconds=settings.reaper_interval_seconds,
    )
