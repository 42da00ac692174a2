"""Sessions resource router.

Owner-facing session management. Every endpoint requires a valid bearer
access token; a session that belongs to another user is reported as not
found.

Endpoints:
    DELETE /api/v1/sessions/current     - Log out (204)
    GET    /api/v1/sessions             - List active sessions
    GET    /api/v1/sessions/stats       - Session counters
    GET    /api/v1/sessions/{id}        - Get session details
    DELETE /api/v1/sessions/{id}        - Revoke specific session (204)
    DELETE /api/v1/sessions             - Revoke all except current
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.services import LifecycleManager, SessionAdminService
from src.core.container import get_lifecycle_manager, get_session_admin
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentSession,
    get_current_session,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.session_schemas import (
    SessionListResponse,
    SessionLogoutRequest,
    SessionResponse,
    SessionRevokeAllResponse,
    SessionStatsResponse,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

_AUTH_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"description": "Not authenticated", "model": ProblemDetails},
    503: {"description": "Session store unavailable", "model": ProblemDetails},
}
_NOT_FOUND_RESPONSE: dict[int | str, dict[str, object]] = {
    404: {"description": "Session not found", "model": ProblemDetails},
}


# =============================================================================
# Logout
# =============================================================================


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_AUTH_RESPONSES, **_NOT_FOUND_RESPONSE},
    summary="Log out",
    description="Revoke the current session (or every session with "
    "logout_all) and blacklist the presented access token. Logging out "
    "another of the caller's sessions leaves the presented token valid.",
)
async def delete_current_session(
    request: Request,
    data: SessionLogoutRequest | None = None,
    current: CurrentSession = Depends(get_current_session),
    lifecycle: LifecycleManager = Depends(get_lifecycle_manager),
) -> Response:
    """Log out.

    DELETE /api/v1/sessions/current → 204 No Content

    Args:
        request: FastAPI request object.
        data: Optional target session and logout_all flag.
        current: Authenticated caller (injected).
        lifecycle: Lifecycle manager (injected).

    Returns:
        204 on success, problem details on failure.
    """
    payload = data or SessionLogoutRequest()
    target = payload.session_id or current.session_id
    # The bearer token only dies with its own session
    ends_current = payload.logout_all or target == current.session_id
    result = await lifecycle.logout(
        target,
        user_id=current.user_id,
        logout_all=payload.logout_all,
        access_token=current.access_token if ends_current else None,
    )

    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )


# =============================================================================
# List / stats / get
# =============================================================================


@router.get(
    "",
    response_model=SessionListResponse,
    responses=_AUTH_RESPONSES,
    summary="List sessions",
    description="List the caller's active sessions, most recently active first.",
)
async def list_sessions(
    request: Request,
    current: CurrentSession = Depends(get_current_session),
    admin: SessionAdminService = Depends(get_session_admin),
) -> SessionListResponse | JSONResponse:
    """List active sessions.

    GET /api/v1/sessions → 200 OK
    """
    result = await admin.list_sessions(
        current.user_id, current_session_id=current.session_id
    )

    match result:
        case Success(value=summaries):
            return SessionListResponse(
                sessions=[SessionResponse.from_summary(s) for s in summaries],
                total_count=len(summaries),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )


@router.get(
    "/stats",
    response_model=SessionStatsResponse,
    responses=_AUTH_RESPONSES,
    summary="Session statistics",
    description="Count the caller's stored sessions by state.",
)
async def get_session_stats(
    request: Request,
    current: CurrentSession = Depends(get_current_session),
    admin: SessionAdminService = Depends(get_session_admin),
) -> SessionStatsResponse | JSONResponse:
    """Session counters.

    GET /api/v1/sessions/stats → 200 OK
    """
    match await admin.session_stats(current.user_id):
        case Success(value=stats):
            return SessionStatsResponse.from_stats(stats)
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    responses={**_AUTH_RESPONSES, **_NOT_FOUND_RESPONSE},
    summary="Get session",
    description="Get one of the caller's sessions.",
)
async def get_session(
    request: Request,
    session_id: str,
    current: CurrentSession = Depends(get_current_session),
    admin: SessionAdminService = Depends(get_session_admin),
) -> SessionResponse | JSONResponse:
    """Get session details.

    GET /api/v1/sessions/{session_id} → 200 OK
    """
    result = await admin.get_session(
        current.user_id, session_id, current_session_id=current.session_id
    )

    match result:
        case Success(value=summary):
            return SessionResponse.from_summary(summary)
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )


# =============================================================================
# Revocation
# =============================================================================


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_AUTH_RESPONSES, **_NOT_FOUND_RESPONSE},
    summary="Revoke session",
    description="Revoke one of the caller's sessions. Revoking an already "
    "revoked session succeeds.",
)
async def delete_session(
    request: Request,
    session_id: str,
    current: CurrentSession = Depends(get_current_session),
    admin: SessionAdminService = Depends(get_session_admin),
) -> Response:
    """Revoke a specific session.

    DELETE /api/v1/sessions/{session_id} → 204 No Content
    """
    match await admin.revoke_one(current.user_id, session_id):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )


@router.delete(
    "",
    response_model=SessionRevokeAllResponse,
    responses=_AUTH_RESPONSES,
    summary="Revoke all other sessions",
    description="Revoke every session of the caller except the current one.",
)
async def delete_sessions(
    request: Request,
    current: CurrentSession = Depends(get_current_session),
    admin: SessionAdminService = Depends(get_session_admin),
) -> SessionRevokeAllResponse | JSONResponse:
    """Revoke all sessions except current.

    DELETE /api/v1/sessions → 200 OK
    """
    match await admin.revoke_all_but_current(current.user_id, current.session_id):
        case Success(value=count):
            return SessionRevokeAllResponse(revoked_count=count)
        case Failure(error=error):
            return ErrorResponseBuilder.from_session_error(
                error, request, get_trace_id()
            )
