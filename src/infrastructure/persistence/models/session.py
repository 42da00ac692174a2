"""Session database model.

One row per device/login instance. Rows are deactivated on logout,
eviction and replay detection; the reaper deletes them once expired.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, TZDateTime, utc_now


class Session(BaseModel):
    """Session model.

    Fields:
        id: Opaque session identifier (``secrets.token_urlsafe(32)``)
        created_at: When session was created (from BaseModel)
        user_id: Owning user
        device_fingerprint: Coarse device digest
        device_label: Display-safe device description
        ip_origin: Coarse network origin
        last_activity_at: Last issue/refresh
        expires_at: Hard expiry
        is_active: False once revoked or evicted
        revoked_at / revoked_reason: Deactivation audit

    Indexes:
        - ix_sessions_user_id: (user_id)
        - ix_sessions_expires_at: (expires_at) for reaping
        - idx_sessions_user_active: (user_id, is_active) for cap checks
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(  # type: ignore[assignment]
        String(64),
        primary_key=True,
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="User who owns this session",
    )

    device_fingerprint: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="SHA-256 of browser/os/device class/network origin",
    )

    device_label: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Display label, e.g. 'Chrome on Mac OS X'",
    )

    ip_origin: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="Coarse network origin (IPv4 /24, IPv6 /48)",
    )

    last_activity_at: Mapped[datetime] = mapped_column(
        TZDateTime,
        nullable=False,
        default=utc_now,
    )

    expires_at: Mapped[datetime] = mapped_column(
        TZDateTime,
        nullable=False,
        index=True,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        TZDateTime,
        nullable=True,
    )

    revoked_reason: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    __table_args__ = (Index("idx_sessions_user_active", "user_id", "is_active"),)

    def __repr__(self) -> str:
        return (
            f"<Session(id={self.id[:8]}..., user_id={self.user_id}, "
            f"is_active={self.is_active})>"
        )
