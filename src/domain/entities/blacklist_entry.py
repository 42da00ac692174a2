"""Revocation blacklist entry.

Guards a token that is still valid by expiry but must be rejected now
(typically an access token presented at logout). The entry expires
together with the token it guards.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import TokenKind


@dataclass(slots=True, kw_only=True)
class BlacklistEntry:
    """Blacklisted token digest.

    Attributes:
        id: Record identifier.
        token_hash: Digest of the blacklisted token (unique).
        token_kind: Access or refresh token.
        expires_at: Expiry copied from the guarded token.
        reason: Why the token was blacklisted.
        created_at: When the entry was created.
    """

    id: UUID
    token_hash: str
    token_kind: TokenKind
    expires_at: datetime
    reason: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the guarded token would have expired anyway."""
        return (now or datetime.now(UTC)) > self.expires_at
