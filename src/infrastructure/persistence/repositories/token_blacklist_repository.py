"""TokenBlacklistRepository - SQLAlchemy implementation of the revocation blacklist."""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import BlacklistEntry
from src.infrastructure.persistence.models.token_blacklist import TokenBlacklist


class TokenBlacklistRepository:
    """SQLAlchemy implementation of TokenBlacklistRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def add(self, entry: BlacklistEntry) -> bool:
        """Blacklist a token digest unless it is already present.

        Args:
            entry: Entry to insert.

        Returns:
            True if inserted, False if the digest was already blacklisted.
        """
        # Concurrent logouts with the same token race on the unique index;
        # the loser inserts nothing instead of failing the transaction.
        dialect = self.session.get_bind().dialect.name
        insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
        stmt = (
            insert(TokenBlacklist)
            .values(
                id=entry.id,
                token_hash=entry.token_hash,
                token_kind=entry.token_kind.value,
                expires_at=entry.expires_at,
                reason=entry.reason,
                created_at=entry.created_at,
            )
            .on_conflict_do_nothing(index_elements=["token_hash"])
        )
        result = await self.session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def contains(self, token_hash: str, now: datetime) -> bool:
        """Check for an unexpired entry (single indexed lookup).

        Args:
            token_hash: Digest of the presented token.
            now: Reference time.

        Returns:
            True if the token is blacklisted.
        """
        stmt = select(TokenBlacklist.id).where(
            TokenBlacklist.token_hash == token_hash,
            TokenBlacklist.expires_at >= now,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def delete_expired(self, now: datetime) -> int:
        """Delete entries whose expires_at is strictly before now.

        Returns:
            Number of entries deleted.
        """
        stmt = delete(TokenBlacklist).where(TokenBlacklist.expires_at < now)
        result = await self.session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def count_expired(self, now: datetime) -> int:
        """Count entries awaiting reaping."""
        stmt = select(func.count(TokenBlacklist.id)).where(
            TokenBlacklist.expires_at < now
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
