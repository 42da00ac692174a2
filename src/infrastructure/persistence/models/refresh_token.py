"""Refresh token database model.

Stores only the SHA-256 digest of each refresh secret. Rotation inserts a
successor row whose ``rotated_from`` points at the predecessor's hash and
flips the predecessor's ``is_revoked``.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, TZDateTime, utc_now


class RefreshToken(BaseModel):
    """Refresh token model.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Row creation time (from BaseModel)
        token_hash: Digest of the raw secret (unique)
        user_id: Owning user
        session_id: Owning session (cascade delete)
        device_fingerprint: Fingerprint snapshot at issuance
        issued_at / last_used_at / expires_at: Lifetime tracking
        rotated_from: Predecessor hash in the rotation chain
        is_revoked / revoked_at / revoked_reason: Revocation state
    """

    __tablename__ = "refresh_tokens"

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    device_fingerprint: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    issued_at: Mapped[datetime] = mapped_column(
        TZDateTime,
        nullable=False,
        default=utc_now,
    )

    last_used_at: Mapped[datetime | None] = mapped_column(
        TZDateTime,
        nullable=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        TZDateTime,
        nullable=False,
        index=True,
    )

    rotated_from: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    is_revoked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        TZDateTime,
        nullable=True,
    )

    revoked_reason: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshToken(id={self.id}, session_id={self.session_id[:8]}..., "
            f"is_revoked={self.is_revoked})>"
        )
