"""Refresh token domain entity.

Only the SHA-256 digest of the opaque secret is represented here; the raw
secret leaves the system exactly once, in the Issue/Refresh response.

Rotation forms a chain through ``rotated_from``: every refresh retires the
presented record and creates a successor pointing at its hash.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class RefreshToken:
    """Persisted refresh token record.

    Business Rules:
        - At most one live (not revoked, not expired) token per session
        - A revoked token presented again is a replay

    Attributes:
        id: Record identifier.
        token_hash: Digest of the raw secret (unique).
        user_id: Owning user.
        session_id: Owning session.
        device_fingerprint: Fingerprint snapshot at issuance.
        issued_at: When the token was issued.
        last_used_at: When the token was last presented successfully.
        expires_at: Token expiry.
        rotated_from: Hash of the predecessor in the rotation chain.
        is_revoked: Whether the token was rotated or revoked.
        revoked_at: When the token was revoked.
        revoked_reason: Why the token was revoked.
    """

    id: UUID
    token_hash: str
    user_id: UUID
    session_id: str
    device_fingerprint: str | None = None
    issued_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_used_at: datetime | None = None
    expires_at: datetime
    rotated_from: str | None = None
    is_revoked: bool = False
    revoked_at: datetime | None = None
    revoked_reason: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the token passed its expiry.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if expired, False otherwise.
        """
        return (now or datetime.now(UTC)) > self.expires_at

    def is_live(self, now: datetime | None = None) -> bool:
        """Check if token is neither revoked nor expired."""
        return not self.is_revoked and not self.is_expired(now)
