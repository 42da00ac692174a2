"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import TokenCreateRequest, SessionListResponse
"""

from src.schemas.session_schemas import (
    SessionListResponse,
    SessionLogoutRequest,
    SessionResponse,
    SessionRevokeAllResponse,
    SessionStatsResponse,
)
from src.schemas.token_schemas import TokenCreateRequest, TokenCreateResponse

__all__ = [
    # Sessions
    "SessionListResponse",
    "SessionLogoutRequest",
    "SessionResponse",
    "SessionRevokeAllResponse",
    "SessionStatsResponse",
    # Tokens
    "TokenCreateRequest",
    "TokenCreateResponse",
]
