"""Session domain entity for multi-device session management.

Pure business logic, no framework dependencies.

A session is one logical device/login instance spanning many access token
renewals. Sessions are deactivated (never deleted) on logout, eviction or
replay detection; only the reaper removes them once expired.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity.

    Business Rules:
        - Session is live if active and not expired
        - At most ``max_sessions_per_user`` live sessions per user
        - Deactivation is immediate and permanent

    Attributes:
        id: Opaque high-entropy session identifier.
        user_id: User who owns this session.
        device_fingerprint: Coarse device digest captured at creation.
        device_label: Display-safe device description ("Chrome on Mac OS X").
        ip_origin: Coarse network origin ("203.0.113.0/24").
        created_at: When session was created.
        last_activity_at: Last successful issue or refresh.
        expires_at: Hard session expiry.
        is_active: False once revoked or evicted.
        revoked_at: When session was deactivated.
        revoked_reason: Why session was deactivated.

    Example:
        >>> session = Session(
        ...     id="kq3...",
        ...     user_id=uuid7(),
        ...     expires_at=datetime.now(UTC) + timedelta(days=30),
        ... )
        >>> session.is_live()
        True
    """

    id: str
    user_id: UUID
    device_fingerprint: str | None = None
    device_label: str | None = None
    ip_origin: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime
    is_active: bool = True
    revoked_at: datetime | None = None
    revoked_reason: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the session passed its expiry.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if expired, False otherwise.
        """
        return (now or datetime.now(UTC)) > self.expires_at

    def is_live(self, now: datetime | None = None) -> bool:
        """Check if session is active and not expired.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if session can still be refreshed, False otherwise.
        """
        return self.is_active and not self.is_expired(now)

    def belongs_to(self, user_id: UUID) -> bool:
        """Check session ownership."""
        return self.user_id == user_id
