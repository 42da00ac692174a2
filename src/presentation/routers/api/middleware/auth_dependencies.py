"""Bearer access token authentication dependencies.

FastAPI dependencies that validate the access token on every protected
request through LifecycleManager.validate_access (signature, expiry and
blacklist lookup).

Usage:
    @router.get("/protected")
    async def protected_route(
        current: CurrentSession = Depends(get_current_session),
    ):
        return {"user_id": str(current.user_id)}
"""

from dataclasses import dataclass, field
from typing import Annotated
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.services import LifecycleManager
from src.core.container import get_lifecycle_manager
from src.core.result import Failure, Success
from src.domain.errors import public_kind
from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
    ProblemHTTPException,
)

# auto_error=False so a missing header goes through the same 401 path as
# a bad token instead of FastAPI's default response
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentSession:
    """Authenticated caller extracted from a validated access token.

    Attributes:
        user_id: Token subject.
        session_id: Session the token was issued for.
        token_id: JWT ``jti``.
        access_token: Raw bearer token (needed to blacklist it on logout).
    """

    user_id: UUID
    session_id: str
    token_id: str
    access_token: str = field(repr=False)


async def get_current_session(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    lifecycle: Annotated[LifecycleManager, Depends(get_lifecycle_manager)],
) -> CurrentSession:
    """Get the authenticated caller from the bearer access token.

    Args:
        credentials: Bearer token from Authorization header.
        lifecycle: Lifecycle manager (injected).

    Returns:
        CurrentSession for a valid, non-blacklisted token.

    Raises:
        ProblemHTTPException 401: Token missing, invalid, expired or revoked.
        ProblemHTTPException 503: Blacklist lookup failed.
    """
    if credentials is None:
        raise ProblemHTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Authentication Required",
            slug="authentication-required",
            detail="Authentication required.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    match await lifecycle.validate_access(credentials.credentials):
        case Success(value=claims):
            return CurrentSession(
                user_id=claims.user_id,
                session_id=claims.session_id,
                token_id=claims.token_id,
                access_token=credentials.credentials,
            )
        case Failure(error=error):
            raise ErrorResponseBuilder.credential_exception(public_kind(error))
