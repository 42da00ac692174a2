"""Core errors package.

Usage:
    from src.core.errors import DomainError, AuthenticationError
"""

from src.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
)
from src.core.errors.domain_error import DomainError

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DomainError",
    "NotFoundError",
]
