"""Domain entities.

Usage:
    from src.domain.entities import Session, RefreshToken, BlacklistEntry
"""

from src.domain.entities.blacklist_entry import BlacklistEntry
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.session import Session

__all__ = [
    "BlacklistEntry",
    "RefreshToken",
    "Session",
]
