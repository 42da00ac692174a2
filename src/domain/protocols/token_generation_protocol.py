"""Token generation protocol for domain layer.

Defines the interface for signing and validating access tokens.

Token Strategy:
    - Access tokens: short-lived signed JWT with a fixed claim set
    - Refresh tokens: opaque high-entropy secrets (hashed at rest)
    - Access token validation is stateless; the blacklist check is done
      by the lifecycle manager
"""

from datetime import timedelta
from typing import Protocol
from uuid import UUID

from src.core.errors import AuthenticationError
from src.core.result import Result
from src.domain.value_objects import AccessTokenClaims


class TokenGenerationProtocol(Protocol):
    """Access token signing and validation interface.

    Implementations:
        - JWTService: HMAC-SHA256 via PyJWT

    Usage:
        token = token_service.generate_access_token(
            user_id=user_id,
            session_id=session_id,
        )
        match token_service.validate_access_token(token):
            case Success(value=claims):
                ...
            case Failure(error=error):
                ...
    """

    @property
    def access_token_ttl(self) -> timedelta:
        """Lifetime of generated access tokens."""
        ...

    def generate_access_token(self, *, user_id: UUID, session_id: str) -> str:
        """Sign a new access token for the user/session pair.

        Args:
            user_id: Subject (``sub`` claim).
            session_id: Owning session (``session_id`` claim).

        Returns:
            Encoded JWT string.
        """
        ...

    def validate_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, AuthenticationError]:
        """Verify signature, expiry and claim schema.

        Args:
            token: Encoded JWT string.

        Returns:
            Success(AccessTokenClaims) or Failure with TOKEN_EXPIRED or
            TOKEN_INVALID.
        """
        ...
