"""SQLAlchemy lifecycle store (unit of work adapter).

Implements LifecycleStoreProtocol: one database transaction per
``transaction()`` block, with the three repositories bound to it, bounded
by the configured store timeout.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import StoreUnavailableError
from src.infrastructure.errors import DatabaseError
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    SessionRepository,
    TokenBlacklistRepository,
)


@dataclass(frozen=True, slots=True)
class SqlAlchemyStoreTransaction:
    """Repositories sharing one AsyncSession."""

    sessions: SessionRepository
    refresh_tokens: RefreshTokenRepository
    blacklist: TokenBlacklistRepository


class SqlAlchemyLifecycleStore:
    """Transaction factory over the sessions, refresh_tokens and
    token_blacklist tables.

    Example:
        >>> store = SqlAlchemyLifecycleStore(database, timeout_seconds=5.0)
        >>> async with store.transaction(operation="issue") as tx:
        ...     await tx.sessions.add(session)
    """

    def __init__(self, database: Database, *, timeout_seconds: float) -> None:
        """Initialize store.

        Args:
            database: Database manager.
            timeout_seconds: Upper bound for one transaction.
        """
        self._database = database
        self._timeout_seconds = timeout_seconds

    @asynccontextmanager
    async def transaction(
        self, *, operation: str
    ) -> AsyncIterator[SqlAlchemyStoreTransaction]:
        """Open a timed transaction.

        Args:
            operation: Calling operation, recorded in error details.

        Yields:
            SqlAlchemyStoreTransaction bound to the open transaction.

        Raises:
            StoreUnavailableError: On timeout or storage failure. The
                transaction is rolled back.
        """
        try:
            async with asyncio.timeout(self._timeout_seconds):
                async with self._database.transaction() as session:
                    yield SqlAlchemyStoreTransaction(
                        sessions=SessionRepository(session),
                        refresh_tokens=RefreshTokenRepository(session),
                        blacklist=TokenBlacklistRepository(session),
                    )
        except (TimeoutError, OSError, SQLAlchemyError) as e:
            raise StoreUnavailableError(
                DatabaseError.from_exception(e, operation=operation)
            ) from e
