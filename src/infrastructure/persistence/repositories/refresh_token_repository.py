"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Lookups return revoked and expired records too: the lifecycle manager needs
them to tell expiry and replay apart from unknown tokens.
"""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import RefreshToken
from src.infrastructure.persistence.models.refresh_token import (
    RefreshToken as RefreshTokenModel,
)


def _to_entity(model: RefreshTokenModel) -> RefreshToken:
    """Convert database model to domain entity."""
    return RefreshToken(
        id=model.id,
        token_hash=model.token_hash,
        user_id=model.user_id,
        session_id=model.session_id,
        device_fingerprint=model.device_fingerprint,
        issued_at=model.issued_at,
        last_used_at=model.last_used_at,
        expires_at=model.expires_at,
        rotated_from=model.rotated_from,
        is_revoked=model.is_revoked,
        revoked_at=model.revoked_at,
        revoked_reason=model.revoked_reason,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation for refresh token persistence.

    Manages refresh tokens with support for:
    - Token creation and hash lookup
    - Conditional retirement during rotation
    - Session and user wide revocation
    - Expired row reaping

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.transaction() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     token = await repo.find_by_hash(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def add(self, token: RefreshToken) -> RefreshToken:
        """Create new refresh token record.

        Args:
            token: Token entity carrying the digest (never the raw secret).

        Returns:
            Persisted token.
        """
        model = RefreshTokenModel(
            id=token.id,
            token_hash=token.token_hash,
            user_id=token.user_id,
            session_id=token.session_id,
            device_fingerprint=token.device_fingerprint,
            issued_at=token.issued_at,
            last_used_at=token.last_used_at,
            expires_at=token.expires_at,
            rotated_from=token.rotated_from,
            is_revoked=token.is_revoked,
            revoked_at=token.revoked_at,
            revoked_reason=token.revoked_reason,
        )
        self.session.add(model)
        await self.session.flush()
        return _to_entity(model)

    async def find_by_hash(self, token_hash: str) -> RefreshToken | None:
        """Find refresh token by digest.

        Args:
            token_hash: SHA-256 digest of the raw secret.

        Returns:
            RefreshToken if found (any state), None otherwise.
        """
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_for_session(self, session_id: str) -> list[RefreshToken]:
        """List every token record of a session, oldest first.

        Args:
            session_id: Owning session.

        Returns:
            Token records in issue order.
        """
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.session_id == session_id)
            .order_by(RefreshTokenModel.issued_at.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_to_entity(m) for m in result.scalars().all()]

    async def revoke_if_live(
        self, token_id: UUID, *, reason: str, now: datetime
    ) -> bool:
        """Retire a token only if nobody else retired it first.

        Args:
            token_id: Token's unique identifier.
            reason: Revocation reason.
            now: Revocation and last-use timestamp.

        Returns:
            True if this call flipped is_revoked, False otherwise.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id == token_id,
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(
                is_revoked=True,
                revoked_at=now,
                revoked_reason=reason,
                last_used_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (cast(Any, result).rowcount or 0) == 1

    async def revoke_for_sessions(
        self, session_ids: list[str], *, reason: str, now: datetime
    ) -> int:
        """Revoke all unrevoked refresh tokens of the given sessions.

        Args:
            session_ids: Sessions whose tokens are revoked.
            reason: Revocation reason.
            now: Revocation timestamp.

        Returns:
            Number of tokens revoked.
        """
        if not session_ids:
            return 0
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.session_id.in_(session_ids),
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_revoked=True, revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def revoke_for_user(
        self, user_id: UUID, *, reason: str, now: datetime
    ) -> int:
        """Revoke all unrevoked refresh tokens of a user.

        Args:
            user_id: User's unique identifier.
            reason: Revocation reason.
            now: Revocation timestamp.

        Returns:
            Number of tokens revoked.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_revoked=True, revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def delete(self, token_id: UUID) -> None:
        """Delete one refresh token record.

        Args:
            token_id: Token's unique identifier.
        """
        stmt = delete(RefreshTokenModel).where(RefreshTokenModel.id == token_id)
        await self.session.execute(stmt)

    async def delete_expired(self, now: datetime) -> int:
        """Delete refresh tokens whose expires_at is strictly before now.

        Args:
            now: Reference time.

        Returns:
            Number of tokens deleted.
        """
        stmt = delete(RefreshTokenModel).where(RefreshTokenModel.expires_at < now)
        result = await self.session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def count_expired(self, now: datetime) -> int:
        """Count refresh tokens awaiting reaping."""
        stmt = select(func.count(RefreshTokenModel.id)).where(
            RefreshTokenModel.expires_at < now
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
