"""Session admin DTOs.

Owner-facing views of sessions. Raw device fingerprints are never exposed;
only the display label and coarse network origin.
"""

from dataclasses import dataclass
from datetime import datetime

from src.domain.entities import Session


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionSummary:
    """Display-safe session view.

    Attributes:
        session_id: Session identifier.
        device_label: "Chrome on Mac OS X" style label.
        ip_origin: Coarse network origin.
        created_at: When session was created.
        last_activity_at: Last issue/refresh.
        expires_at: Hard expiry.
        is_current: True if this is the caller's own session.
    """

    session_id: str
    device_label: str | None
    ip_origin: str | None
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    is_current: bool = False

    @classmethod
    def from_session(
        cls, session: Session, *, current_session_id: str | None = None
    ) -> "SessionSummary":
        """Build a summary from a session entity."""
        return cls(
            session_id=session.id,
            device_label=session.device_label,
            ip_origin=session.ip_origin,
            created_at=session.created_at,
            last_activity_at=session.last_activity_at,
            expires_at=session.expires_at,
            is_current=session.id == current_session_id,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionStats:
    """Per-user session counters.

    Attributes:
        total: Stored sessions (any state).
        active: Active and unexpired.
        expired: Past expires_at (awaiting reaping).
        inactive: Deactivated but not yet expired.
    """

    total: int
    active: int
    expired: int
    inactive: int
