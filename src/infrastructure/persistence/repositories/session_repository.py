"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture. Maps between domain Session entities
and database Session models.

Repositories never commit. Callers open ``Database.transaction()`` and
build repositories on that session, so multi-step writes are atomic.
"""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Session
from src.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from SessionRepository protocol
    (Protocol uses structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.transaction() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     session = await repo.get(session_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def add(self, session: Session) -> Session:
        """Persist a new session.

        Args:
            session: Session entity to insert.

        Returns:
            The persisted session.
        """
        model = self._to_model(session)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get(self, session_id: str) -> Session | None:
        """Find session by ID.

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def lock_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """Lock the user's live sessions in eviction order.

        Args:
            user_id: Owning user.
            now: Reference time for expiry.

        Returns:
            Live sessions, least recently active first (ties: oldest first).
        """
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.user_id == user_id,
                SessionModel.is_active.is_(True),
                SessionModel.expires_at >= now,
            )
            .order_by(
                SessionModel.last_activity_at.asc(),
                SessionModel.created_at.asc(),
            )
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def list_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """List the user's live sessions, most recently active first.

        Args:
            user_id: Owning user.
            now: Reference time for expiry.

        Returns:
            Live sessions.
        """
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.user_id == user_id,
                SessionModel.is_active.is_(True),
                SessionModel.expires_at >= now,
            )
            .order_by(
                SessionModel.last_activity_at.desc(),
                SessionModel.created_at.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def list_for_user(self, user_id: UUID) -> list[Session]:
        """List all stored sessions of the user (any state), newest first."""
        stmt = (
            select(SessionModel)
            .where(SessionModel.user_id == user_id)
            .order_by(SessionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def deactivate(
        self, session_id: str, *, reason: str, now: datetime
    ) -> bool:
        """Deactivate one session if still active.

        Args:
            session_id: Session to deactivate.
            reason: Revocation reason.
            now: Revocation time.

        Returns:
            True if the session was active and is now deactivated.
        """
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.is_active.is_(True),
            )
            .values(is_active=False, revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

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
            reason: Revocation reason.
            now: Revocation time.
            except_session_id: Session to keep active.

        Returns:
            IDs of sessions that were deactivated.
        """
        conditions = [
            SessionModel.user_id == user_id,
            SessionModel.is_active.is_(True),
        ]
        if except_session_id is not None:
            conditions.append(SessionModel.id != except_session_id)

        id_stmt = select(SessionModel.id).where(*conditions).with_for_update()
        session_ids = list((await self._session.execute(id_stmt)).scalars().all())
        if not session_ids:
            return []

        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id.in_(session_ids),
                SessionModel.is_active.is_(True),
            )
            .values(is_active=False, revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
        return session_ids

    async def touch(self, session_id: str, now: datetime) -> None:
        """Bump last_activity_at.

        Args:
            session_id: Session identifier.
            now: New activity timestamp.
        """
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id)
            .values(last_activity_at=now)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions whose expires_at is strictly before now.

        Args:
            now: Reference time.

        Returns:
            Number of sessions deleted.
        """
        stmt = delete(SessionModel).where(SessionModel.expires_at < now)
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def count_expired(self, now: datetime) -> int:
        """Count sessions awaiting reaping."""
        stmt = select(func.count(SessionModel.id)).where(SessionModel.expires_at < now)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    # =========================================================================
    # Mapping helpers
    # =========================================================================

    def _to_entity(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            device_fingerprint=model.device_fingerprint,
            device_label=model.device_label,
            ip_origin=model.ip_origin,
            created_at=model.created_at,
            last_activity_at=model.last_activity_at,
            expires_at=model.expires_at,
            is_active=model.is_active,
            revoked_at=model.revoked_at,
            revoked_reason=model.revoked_reason,
        )

    def _to_model(self, entity: Session) -> SessionModel:
        return SessionModel(
            id=entity.id,
            user_id=entity.user_id,
            device_fingerprint=entity.device_fingerprint,
            device_label=entity.device_label,
            ip_origin=entity.ip_origin,
            created_at=entity.created_at,
            last_activity_at=entity.last_activity_at,
            expires_at=entity.expires_at,
            is_active=entity.is_active,
            revoked_at=entity.revoked_at,
            revoked_reason=entity.revoked_reason,
        )
