"""Kinds of credentials that can be placed on the revocation blacklist.

Usage:
    from src.domain.enums import TokenKind

    await blacklist_repo.add(token_hash=digest, token_kind=TokenKind.ACCESS, ...)
"""

from enum import Enum


class TokenKind(str, Enum):
    """Credential kind guarded by a blacklist entry.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are lowercase for consistency.
    """

    ACCESS = "access"
    REFRESH = "refresh"
