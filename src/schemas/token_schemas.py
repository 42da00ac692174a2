"""Token request/response schemas.

RESTful Endpoints:
    POST /api/v1/tokens - Rotate a refresh token
"""

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos import IssuedTokens


class TokenCreateRequest(BaseModel):
    """Request schema for token creation (refresh).

    POST /api/v1/tokens
    Returns: 201 Created
    """

    refresh_token: str = Field(
        ...,
        min_length=1,
        max_length=512,
        description="Current refresh token",
    )
    session_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Session the refresh token was issued for",
    )


class TokenCreateResponse(BaseModel):
    """Response schema for token creation (201 Created).

    The presented refresh token is retired; only the returned one is valid.
    """

    access_token: str = Field(..., description="New JWT access token")
    access_token_expires_in: int = Field(
        ..., description="Access token lifetime in seconds"
    )
    refresh_token: str = Field(..., description="New refresh token (rotated)")
    refresh_token_expires_in: int = Field(
        ..., description="Refresh token lifetime in seconds"
    )
    session_id: str = Field(..., description="Session the tokens are bound to")
    token_type: str = Field(default="bearer", description="Token type")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "access_token_expires_in": 900,
                "refresh_token": "Zk3s9Qp...",
                "refresh_token_expires_in": 2591999,
                "session_id": "k3QZ7xq1bC8yT0mN4rS6uV9wX2aD5eF7gH0jK3lM6nP",
                "token_type": "bearer",
            }
        }
    )

    @classmethod
    def from_issued(cls, tokens: IssuedTokens) -> "TokenCreateResponse":
        """Build response from freshly issued tokens."""
        return cls(
            access_token=tokens.access_token,
            access_token_expires_in=tokens.access_token_expires_in,
            refresh_token=tokens.refresh_token,
            refresh_token_expires_in=tokens.refresh_token_expires_in,
            session_id=tokens.session_id,
            token_type=tokens.token_type,
        )
