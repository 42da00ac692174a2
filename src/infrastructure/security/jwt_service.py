"""JWT token service (adapter).

This service implements the TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenGenerationProtocol (no inheritance required)
    - Injected via dependency container

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - Fixed claim set: sub, session_id, iat, exp, jti (all required)
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationErrorMessage
from src.domain.value_objects import AccessTokenClaims

_REQUIRED_CLAIMS = ["sub", "session_id", "iat", "exp", "jti"]


class JWTService:
    """JWT access token generation and validation service.

    Usage:
        from src.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_access_token(
            user_id=user_id,
            session_id=session_id,
        )
        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing.
                MUST be at least 256 bits (32 bytes) for security.
            expiration_minutes: Token expiration in minutes (default: 15).
            algorithm: Signing algorithm (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration = timedelta(minutes=expiration_minutes)
        self._algorithm = algorithm

    @property
    def access_token_ttl(self) -> timedelta:
        """Lifetime of generated access tokens."""
        return self._expiration

    def generate_access_token(self, *, user_id: UUID, session_id: str) -> str:
        """Generate JWT access token.

        Args:
            user_id: User's unique identifier.
            session_id: Session the token is bound to.

        Returns:
            JWT access token string.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_access_token(
            ...     user_id=uuid7(), session_id="abc"
            ... )
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        expires_at = now + self._expiration

        payload = {
            "sub": str(user_id),
            "session_id": session_id,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, AuthenticationError]:
        """Validate JWT access token and extract its claims.

        Args:
            token: JWT access token string to validate.

        Returns:
            Success(AccessTokenClaims), or Failure with TOKEN_EXPIRED for an
            expired token and TOKEN_INVALID for anything else.

        Note:
            - Validates signature, expiration and presence of every claim
            - Stateless (no database lookup); the blacklist is checked by
              the lifecycle manager
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AuthenticationErrorMessage.ACCESS_TOKEN_EXPIRED,
                )
            )
        except InvalidTokenError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationErrorMessage.ACCESS_TOKEN_INVALID,
                )
            )

        try:
            claims = AccessTokenClaims(
                user_id=UUID(str(payload["sub"])),
                session_id=str(payload["session_id"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
                token_id=str(payload["jti"]),
            )
        except (TypeError, ValueError):
            # Signed by us but not our claim schema
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationErrorMessage.ACCESS_TOKEN_INVALID,
                )
            )

        return Success(value=claims)
