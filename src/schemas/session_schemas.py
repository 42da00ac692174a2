"""Session management request/response schemas.

Pydantic models for session API request validation and response serialization.
Kept separate from application DTOs - these are HTTP-layer concerns.

RESTful Endpoints:
    DELETE /api/v1/sessions/current   - Log out (current session or all)
    GET    /api/v1/sessions           - List active sessions
    GET    /api/v1/sessions/stats     - Session counters
    GET    /api/v1/sessions/{id}      - Get session details
    DELETE /api/v1/sessions/{id}      - Revoke specific session
    DELETE /api/v1/sessions           - Revoke all sessions (except current)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos import SessionStats, SessionSummary


# =============================================================================
# Session Response (shared)
# =============================================================================


class SessionResponse(BaseModel):
    """Response schema for a single session.

    Used in both GET /sessions/{id} and as list item. The raw device
    fingerprint is never part of the response.
    """

    id: str = Field(..., description="Session identifier")
    device_label: str | None = Field(
        None,
        description="Parsed device label (e.g., 'Chrome on Mac OS X')",
    )
    ip_origin: str | None = Field(
        None,
        description="Coarse network origin at session creation",
    )
    created_at: datetime = Field(..., description="When session was created")
    last_activity_at: datetime = Field(
        ...,
        description="Last issue or refresh on this session",
    )
    expires_at: datetime = Field(..., description="When session expires")
    is_current: bool = Field(
        default=False,
        description="Whether this is the session making the request",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "k3QZ7xq1bC8yT0mN4rS6uV9wX2aD5eF7gH0jK3lM6nP",
                "device_label": "Chrome on Mac OS X",
                "ip_origin": "192.168.1.0/24",
                "created_at": "2024-01-15T10:30:00Z",
                "last_activity_at": "2024-01-15T14:45:00Z",
                "expires_at": "2024-02-14T10:30:00Z",
                "is_current": True,
            }
        }
    )

    @classmethod
    def from_summary(cls, summary: SessionSummary) -> "SessionResponse":
        """Build response from an application SessionSummary."""
        return cls(
            id=summary.session_id,
            device_label=summary.device_label,
            ip_origin=summary.ip_origin,
            created_at=summary.created_at,
            last_activity_at=summary.last_activity_at,
            expires_at=summary.expires_at,
            is_current=summary.is_current,
        )


# =============================================================================
# List Sessions
# =============================================================================


class SessionListResponse(BaseModel):
    """Response schema for session list.

    GET /api/v1/sessions
    Returns: 200 OK
    """

    sessions: list[SessionResponse] = Field(
        ...,
        description="Active sessions, most recently active first",
    )
    total_count: int = Field(
        ...,
        description="Number of sessions returned",
    )


# =============================================================================
# Session Stats
# =============================================================================


class SessionStatsResponse(BaseModel):
    """Response schema for session counters.

    GET /api/v1/sessions/stats
    Returns: 200 OK
    """

    total: int = Field(..., description="Stored sessions in any state")
    active: int = Field(..., description="Active and unexpired sessions")
    expired: int = Field(..., description="Expired sessions awaiting cleanup")
    inactive: int = Field(..., description="Revoked sessions not yet expired")

    @classmethod
    def from_stats(cls, stats: SessionStats) -> "SessionStatsResponse":
        """Build response from application SessionStats."""
        return cls(
            total=stats.total,
            active=stats.active,
            expired=stats.expired,
            inactive=stats.inactive,
        )


# =============================================================================
# Logout
# =============================================================================


class SessionLogoutRequest(BaseModel):
    """Request schema for logout.

    DELETE /api/v1/sessions/current
    Returns: 204 No Content

    The session defaults to the one bound to the bearer access token.
    """

    session_id: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Session to log out (defaults to the caller's session)",
    )
    logout_all: bool = Field(
        default=False,
        description="Revoke every session of the user",
    )


# =============================================================================
# Revoke All Sessions
# =============================================================================


class SessionRevokeAllResponse(BaseModel):
    """Response schema for bulk session revocation.

    DELETE /api/v1/sessions
    Returns: 200 OK
    """

    revoked_count: int = Field(
        ...,
        description="Number of sessions revoked",
    )
    message: str = Field(
        default="Sessions revoked successfully",
        description="Success message",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "revoked_count": 3,
                "message": "Sessions revoked successfully",
            }
        }
    )
