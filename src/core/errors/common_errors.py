"""Common error classes used across layers.

Error Types:
- NotFoundError: Resource not found
- AuthenticationError: Credential failures (invalid, expired, replayed)
- AuthorizationError: Caller does not own the resource

Usage:
    from src.core.errors import AuthenticationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=AuthenticationError(
        code=ErrorCode.TOKEN_EXPIRED,
        message="Refresh token expired",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Session, RefreshToken, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Credential failure (unknown, expired, revoked or replayed token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Caller is authenticated but does not own the target resource.

    Attributes:
        resource_type: Type of resource the caller tried to act on.
    """

    resource_type: str | None = None
