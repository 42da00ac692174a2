"""Repository implementations (adapters) for domain repository protocols.

Usage:
    from src.infrastructure.persistence.repositories import SessionRepository
"""

from src.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.token_blacklist_repository import (
    TokenBlacklistRepository,
)

__all__ = [
    "RefreshTokenRepository",
    "SessionRepository",
    "TokenBlacklistRepository",
]
