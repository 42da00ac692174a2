"""Domain enums package.

Usage:
    from src.domain.enums import RevocationReason, TokenKind
"""

from src.domain.enums.revocation_reason import RevocationReason
from src.domain.enums.token_kind import TokenKind

__all__ = [
    "RevocationReason",
    "TokenKind",
]
