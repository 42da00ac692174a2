"""Revocation blacklist database model.

Short-lived set of token digests rejected before their natural expiry.
"""

from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, TZDateTime


class TokenBlacklist(BaseModel):
    """Blacklisted token digest.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: When the entry was created (from BaseModel)
        token_hash: Digest of the blacklisted token (unique, indexed)
        token_kind: "access" or "refresh"
        expires_at: Expiry of the guarded token (indexed for reaping)
        reason: Why the token was blacklisted
    """

    __tablename__ = "token_blacklist"

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    token_kind: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        TZDateTime,
        nullable=False,
        index=True,
    )

    reason: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )
