"""Database models for persistence layer.

Models Organization:
    - session.py: Session model
    - refresh_token.py: Refresh token model
    - token_blacklist.py: Revocation blacklist model

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped by the repository layer.
"""

from src.infrastructure.persistence.models.refresh_token import RefreshToken
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.token_blacklist import TokenBlacklist

__all__ = [
    "RefreshToken",
    "Session",
    "TokenBlacklist",
]
