"""TokenBlacklistRepository protocol (port) for domain layer.

The blacklist lookup runs on every authenticated request, so ``contains``
must be a single indexed lookup on token_hash.
"""

from datetime import datetime
from typing import Protocol

from src.domain.entities import BlacklistEntry


class TokenBlacklistRepository(Protocol):
    """Revocation blacklist persistence interface."""

    async def add(self, entry: BlacklistEntry) -> bool:
        """Insert an entry unless the digest is already blacklisted.

        Returns:
            True if inserted, False if already present.
        """
        ...

    async def contains(self, token_hash: str, now: datetime) -> bool:
        """Check whether an unexpired entry exists for the digest."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete entries with expires_at < now; returns rows deleted."""
        ...

    async def count_expired(self, now: datetime) -> int:
        """Count entries with expires_at < now."""
        ...
