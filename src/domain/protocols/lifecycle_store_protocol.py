"""Lifecycle store protocol (unit of work).

Groups the three repositories behind a single transaction boundary. Every
write the lifecycle performs (eviction + new session, rotation, replay
cascade) happens inside one ``transaction()`` block and commits or rolls
back as a whole.

Implementations bound each transaction with the configured store timeout
and raise ``StoreUnavailableError`` on timeout or storage failure.
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from src.domain.protocols.refresh_token_repository import RefreshTokenRepository
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.token_blacklist_repository import (
    TokenBlacklistRepository,
)


class StoreTransaction(Protocol):
    """Repositories bound to one open transaction."""

    @property
    def sessions(self) -> SessionRepository: ...

    @property
    def refresh_tokens(self) -> RefreshTokenRepository: ...

    @property
    def blacklist(self) -> TokenBlacklistRepository: ...


class LifecycleStoreProtocol(Protocol):
    """Transaction factory for the lifecycle tables.

    Usage:
        async with store.transaction(operation="refresh") as tx:
            token = await tx.refresh_tokens.find_by_hash(token_hash)
            ...
        # committed here; an exception inside the block rolls back
    """

    def transaction(
        self, *, operation: str
    ) -> AbstractAsyncContextManager[StoreTransaction]:
        """Open a transaction.

        Args:
            operation: Name of the calling operation (for error details).

        Returns:
            Async context manager yielding a StoreTransaction.

        Raises:
            StoreUnavailableError: On timeout or storage failure.
        """
        ...
