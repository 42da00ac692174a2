"""RefreshTokenRepository protocol (port) for domain layer.

Implementations never commit; the lifecycle manager owns the transaction.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities import RefreshToken


class RefreshTokenRepository(Protocol):
    """Refresh token persistence interface."""

    async def add(self, token: RefreshToken) -> RefreshToken:
        """Persist a new refresh token record."""
        ...

    async def find_by_hash(self, token_hash: str) -> RefreshToken | None:
        """Find a token by digest, including revoked and expired records.

        Args:
            token_hash: Digest of the raw secret.

        Returns:
            RefreshToken if found, None otherwise.
        """
        ...

    async def list_for_session(self, session_id: str) -> list[RefreshToken]:
        """List every token record of a session, oldest first."""
        ...

    async def revoke_if_live(
        self, token_id: UUID, *, reason: str, now: datetime
    ) -> bool:
        """Conditionally revoke a token (``WHERE is_revoked = false``).

        Also stamps last_used_at. This is the row-level arbiter between
        concurrent refreshes of the same token: exactly one caller gets True.

        Args:
            token_id: Token record to retire.
            reason: Stored in revoked_reason.
            now: Stored in revoked_at and last_used_at.

        Returns:
            True if this call revoked the token, False if it already was.
        """
        ...

    async def revoke_for_sessions(
        self, session_ids: list[str], *, reason: str, now: datetime
    ) -> int:
        """Revoke every unrevoked token of the given sessions.

        Returns:
            Number of tokens revoked.
        """
        ...

    async def revoke_for_user(
        self, user_id: UUID, *, reason: str, now: datetime
    ) -> int:
        """Revoke every unrevoked token of the user.

        Returns:
            Number of tokens revoked.
        """
        ...

    async def delete(self, token_id: UUID) -> None:
        """Delete one token record (expired tokens found on refresh)."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens with expires_at < now; returns rows deleted."""
        ...

    async def count_expired(self, now: datetime) -> int:
        """Count tokens with expires_at < now."""
        ...
