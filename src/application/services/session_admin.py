"""Session administration service.

Read and revoke operations exposed to the authenticated owner of the
sessions. Ownership is verified here before anything is delegated to the
lifecycle manager; the manager itself does not know who is calling.

This service never creates sessions or tokens. It only deactivates
sessions (through LifecycleManager) and reads them.

Usage:
    admin = get_session_admin()

    result = await admin.list_sessions(user_id, current_session_id=sid)
    result = await admin.revoke_one(user_id, target_session_id)
    result = await admin.revoke_all_but_current(user_id, sid)
"""

from datetime import UTC, datetime
from uuid import UUID

from src.application.dtos import SessionStats, SessionSummary
from src.application.services.lifecycle_manager import LifecycleManager
from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError, DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import Session
from src.domain.enums import RevocationReason
from src.domain.errors import AuthenticationErrorMessage, StoreUnavailableError
from src.domain.protocols import LifecycleStoreProtocol, LoggerProtocol


class SessionAdminService:
    """Owner-facing session management.

    Attributes:
        _store: Unit of work for reads.
        _lifecycle: Lifecycle manager performing revocations.
        _logger: Structured logger.
    """

    def __init__(
        self,
        *,
        store: LifecycleStoreProtocol,
        lifecycle: LifecycleManager,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._lifecycle = lifecycle
        self._logger = logger

    async def list_sessions(
        self, user_id: UUID, *, current_session_id: str | None = None
    ) -> Result[list[SessionSummary], DomainError]:
        """List the user's active sessions, most recently active first.

        Args:
            user_id: Authenticated owner.
            current_session_id: Caller's own session (flagged is_current).

        Returns:
            Success(list of SessionSummary) or Failure(STORE_UNAVAILABLE).
        """
        try:
            async with self._store.transaction(operation="list_sessions") as tx:
                sessions = await tx.sessions.list_active_for_user(
                    user_id, datetime.now(UTC)
                )
        except StoreUnavailableError as e:
            self._logger.error("session_list_failed", error=e, user_id=str(user_id))
            return Failure(error=e.error)

        return Success(
            value=[
                SessionSummary.from_session(s, current_session_id=current_session_id)
                for s in sessions
            ]
        )

    async def get_session(
        self,
        user_id: UUID,
        session_id: str,
        *,
        current_session_id: str | None = None,
    ) -> Result[SessionSummary, DomainError]:
        """Get one of the user's sessions.

        Args:
            user_id: Authenticated owner.
            session_id: Target session.
            current_session_id: Caller's own session.

        Returns:
            Success(SessionSummary), Failure(SESSION_NOT_FOUND),
            Failure(RESOURCE_NOT_OWNED) or Failure(STORE_UNAVAILABLE).
        """
        match await self._load_owned(user_id, session_id, operation="get_session"):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=session):
                return Success(
                    value=SessionSummary.from_session(
                        session, current_session_id=current_session_id
                    )
                )

    async def revoke_one(
        self, user_id: UUID, session_id: str
    ) -> Result[bool, DomainError]:
        """Revoke one of the user's sessions.

        Args:
            user_id: Authenticated owner.
            session_id: Session to revoke.

        Returns:
            Success(True) if revoked, Success(False) if it was already
            inactive, Failure(SESSION_NOT_FOUND), Failure(RESOURCE_NOT_OWNED)
            or Failure(STORE_UNAVAILABLE).
        """
        match await self._load_owned(user_id, session_id, operation="revoke_one"):
            case Failure(error=error):
                return Failure(error=error)
            case Success():
                pass

        return await self._lifecycle.revoke(
            session_id, reason=RevocationReason.USER_REVOKED.value
        )

    async def revoke_all_but_current(
        self, user_id: UUID, current_session_id: str
    ) -> Result[int, DomainError]:
        """Revoke every session of the user except the caller's own.

        Args:
            user_id: Authenticated owner.
            current_session_id: Session to keep.

        Returns:
            Success(number of sessions revoked) or Failure(STORE_UNAVAILABLE).
        """
        return await self._lifecycle.revoke_all(
            user_id,
            except_session_id=current_session_id,
            reason=RevocationReason.REVOKE_OTHERS.value,
        )

    async def session_stats(self, user_id: UUID) -> Result[SessionStats, DomainError]:
        """Count the user's stored sessions by state.

        Args:
            user_id: Authenticated owner.

        Returns:
            Success(SessionStats) or Failure(STORE_UNAVAILABLE).
        """
        try:
            async with self._store.transaction(operation="session_stats") as tx:
                sessions = await tx.sessions.list_for_user(user_id)
        except StoreUnavailableError as e:
            self._logger.error("session_stats_failed", error=e, user_id=str(user_id))
            return Failure(error=e.error)

        now = datetime.now(UTC)
        expired = sum(1 for s in sessions if s.is_expired(now))
        active = sum(1 for s in sessions if s.is_live(now))
        return Success(
            value=SessionStats(
                total=len(sessions),
                active=active,
                expired=expired,
                inactive=len(sessions) - active - expired,
            )
        )

    async def _load_owned(
        self, user_id: UUID, session_id: str, *, operation: str
    ) -> Result[Session, DomainError]:
        """Load a session and verify it belongs to the user."""
        try:
            async with self._store.transaction(operation=operation) as tx:
                session = await tx.sessions.get(session_id)
        except StoreUnavailableError as e:
            self._logger.error(f"{operation}_failed", error=e, user_id=str(user_id))
            return Failure(error=e.error)

        if session is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.SESSION_NOT_FOUND,
                    message=AuthenticationErrorMessage.SESSION_NOT_FOUND,
                    resource_type="Session",
                    resource_id=session_id,
                )
            )
        if not session.belongs_to(user_id):
            self._logger.warning(
                "session_ownership_denied",
                user_id=str(user_id),
                session_id=session_id,
                operation=operation,
            )
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.RESOURCE_NOT_OWNED,
                    message=AuthenticationErrorMessage.SESSION_NOT_OWNED,
                    resource_type="Session",
                )
            )
        return Success(value=session)
