"""Expired row reaper.

Periodically deletes rows whose ``expires_at`` lies strictly in the past
from the refresh_tokens, token_blacklist and sessions tables. Each table is
swept in its own transaction, so a failure in one sweep does not hold back
the others; failed sweeps are logged and simply retried on the next tick.
An unexpected error in a tick is logged and the loop carries on.

Safety with live traffic:
- Deletes are ``expires_at < now`` evaluated at deletion time, so rows
  that are still valid are never touched
- Readers check expiry themselves, so deleting an expired row is
  indistinguishable from it being ignored
- Running twice in a row is a no-op the second time

Architecture:
- Runs as an asyncio task inside the API process (started by the lifespan)
- Returns a ReapReport instead of raising
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.domain.errors import StoreUnavailableError
from src.domain.protocols import LifecycleStoreProtocol, LoggerProtocol

_TABLES = ("refresh_tokens", "token_blacklist", "sessions")


@dataclass(frozen=True, kw_only=True)
class ReapReport:
    """Outcome of one reaper run.

    Attributes:
        refresh_tokens: Refresh token rows deleted.
        blacklist_entries: Blacklist rows deleted.
        sessions: Session rows deleted.
        failed: Tables whose sweep failed.
        skipped: True if the run was skipped because another was in progress.
    """

    refresh_tokens: int = 0
    blacklist_entries: int = 0
    sessions: int = 0
    failed: tuple[str, ...] = field(default_factory=tuple)
    skipped: bool = False

    @property
    def total(self) -> int:
        """Rows deleted across all tables."""
        return self.refresh_tokens + self.blacklist_entries + self.sessions

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "refresh_tokens": self.refresh_tokens,
            "blacklist_entries": self.blacklist_entries,
            "sessions": self.sessions,
            "failed": list(self.failed),
            "skipped": self.skipped,
        }


@dataclass(frozen=True, kw_only=True)
class PendingCounts:
    """Rows currently eligible for reaping."""

    refresh_tokens: int
    blacklist_entries: int
    sessions: int


class Reaper:
    """Periodic sweep of expired lifecycle rows.

    Attributes:
        _store: Unit of work over the lifecycle tables.
        _logger: Structured logger.
        _interval_seconds: Seconds between sweeps.

    Example:
        >>> reaper = Reaper(store=store, logger=logger, interval_seconds=3600)
        >>> report = await reaper.run_once()
        >>> reaper.start()  # background loop
        >>> await reaper.stop()
    """

    def __init__(
        self,
        *,
        store: LifecycleStoreProtocol,
        logger: LoggerProtocol,
        interval_seconds: float,
    ) -> None:
        """Initialize reaper.

        Args:
            store: Unit of work over the lifecycle tables.
            logger: Structured logger.
            interval_seconds: Seconds between sweeps.

        Raises:
            ValueError: If interval_seconds is not positive.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self._store = store
        self._logger = logger.bind(job="reaper")
        self._interval_seconds = interval_seconds
        self._running = False
        self._task: asyncio.Task[None] | None = None

    @property
    def is_started(self) -> bool:
        """Whether the background loop is running."""
        return self._task is not None and not self._task.done()

    async def run_once(self) -> ReapReport:
        """Sweep every table once.

        Returns:
            ReapReport with per-table deletion counts and failed tables.
        """
        if self._running:
            self._logger.warning("reaper_tick_skipped", reason="sweep_in_progress")
            return ReapReport(skipped=True)

        self._running = True
        try:
            counts: dict[str, int] = {}
            failed: list[str] = []
            for table in _TABLES:
                deleted = await self._sweep(table)
                if deleted is None:
                    failed.append(table)
                else:
                    counts[table] = deleted
        finally:
            self._running = False

        report = ReapReport(
            refresh_tokens=counts.get("refresh_tokens", 0),
            blacklist_entries=counts.get("token_blacklist", 0),
            sessions=counts.get("sessions", 0),
            failed=tuple(failed),
        )
        self._logger.info("reaper_run_completed", **report.to_dict())
        return report

    async def pending(self) -> PendingCounts | None:
        """Count rows currently awaiting reaping.

        Returns:
            PendingCounts, or None if the store is unavailable.
        """
        now = datetime.now(UTC)
        try:
            async with self._store.transaction(operation="reaper_pending") as tx:
                return PendingCounts(
                    refresh_tokens=await tx.refresh_tokens.count_expired(now),
                    blacklist_entries=await tx.blacklist.count_expired(now),
                    sessions=await tx.sessions.count_expired(now),
                )
        except StoreUnavailableError as e:
            self._logger.error("reaper_pending_failed", error=e)
            return None

    def start(self) -> None:
        """Start the background loop (no-op if already started)."""
        if self.is_started:
            return
        self._task = asyncio.create_task(self._loop(), name="lifecycle-reaper")
        self._logger.info("reaper_started", interval_seconds=self._interval_seconds)

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.info("reaper_stopped")

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                self._logger.error("reaper_tick_failed", error=e)
            await asyncio.sleep(self._interval_seconds)

    async def _sweep(self, table: str) -> int | None:
        """Delete expired rows from one table in its own transaction.

        Returns:
            Rows deleted, or None if the sweep failed.
        """
        try:
            async with self._store.transaction(operation=f"reap_{table}") as tx:
                now = datetime.now(UTC)
                if table == "refresh_tokens":
                    return await tx.refresh_tokens.delete_expired(now)
                if table == "token_blacklist":
                    return await tx.blacklist.delete_expired(now)
                return await tx.sessions.delete_expired(now)
        except StoreUnavailableError as e:
            self._logger.error("reaper_sweep_failed", error=e, table=table)
            return None
