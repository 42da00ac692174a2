"""SessionRepository protocol (port) for domain layer.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)

Implementations never commit. The caller owns the transaction boundary so
that eviction, insertion and token revocation land atomically.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities import Session


class SessionRepository(Protocol):
    """Session persistence interface."""

    async def add(self, session: Session) -> Session:
        """Persist a new session.

        Args:
            session: Session entity to insert.

        Returns:
            The persisted session.
        """
        ...

    async def get(self, session_id: str) -> Session | None:
        """Find session by id (regardless of state).

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def lock_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """Lock and return the user's live sessions, eviction order first.

        Rows are selected FOR UPDATE so concurrent issuance for the same
        user serializes on the cap check.

        Args:
            user_id: Owning user.
            now: Reference time for expiry.

        Returns:
            Live sessions ordered by last_activity_at, then created_at
            (oldest first).
        """
        ...

    async def list_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """List the user's live sessions, most recently active first."""
        ...

    async def list_for_user(self, user_id: UUID) -> list[Session]:
        """List every stored session of the user (any state)."""
        ...

    async def deactivate(
        self, session_id: str, *, reason: str, now: datetime
    ) -> bool:
        """Deactivate one session if it is still active.

        Args:
            session_id: Session to deactivate.
            reason: Stored in revoked_reason.
            now: Stored in revoked_at.

        Returns:
            True if a row changed, False if already inactive or missing.
        """
        ...

    async def deactivate_all_for_user(
        self,
        user_id: UUID,
        *,
        reason: str,
        now: datetime,
        except_session_id: str | None = None,
    ) -> list[str]:
        """Deactivate every active session of the user.

        Args:
            user_id: Owning user.
            reason: Stored in revoked_reason.
            now: Stored in revoked_at.
            except_session_id: Session left untouched.

        Returns:
            Ids of the sessions that were deactivated.
        """
        ...

    async def touch(self, session_id: str, now: datetime) -> None:
        """Bump last_activity_at."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions with expires_at < now.

        Returns:
            Number of rows deleted.
        """
        ...

    async def count_expired(self, now: datetime) -> int:
        """Count sessions with expires_at < now."""
        ...
