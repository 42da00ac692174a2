"""Application services.

- LifecycleManager: issue, refresh, revoke, validate
- SessionAdminService: owner-facing session management
"""

from src.application.services.lifecycle_manager import LifecycleManager
from src.application.services.session_admin import SessionAdminService

__all__ = [
    "LifecycleManager",
    "SessionAdminService",
]
