"""Tokens resource router.

RESTful endpoints for token management.

Endpoints:
    POST /api/v1/tokens - Create new tokens (refresh with rotation)
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.services import LifecycleManager
from src.core.container import get_lifecycle_manager
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.token_schemas import TokenCreateRequest, TokenCreateResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenCreateResponse,
    responses={
        201: {
            "description": "Tokens created successfully",
            "model": TokenCreateResponse,
        },
        401: {
            "description": "Refresh token invalid or expired",
            "model": ProblemDetails,
        },
        503: {"description": "Session store unavailable", "model": ProblemDetails},
    },
    summary="Create tokens",
    description="Exchange a refresh token for a new access/refresh pair. "
    "The presented refresh token is single-use; presenting it again revokes "
    "its session.",
)
async def create_tokens(
    request: Request,
    data: TokenCreateRequest,
    lifecycle: LifecycleManager = Depends(get_lifecycle_manager),
) -> TokenCreateResponse | JSONResponse:
    """Create new tokens (refresh).

    POST /api/v1/tokens → 201 Created

    Args:
        request: FastAPI request object.
        data: Refresh token and the session it belongs to.
        lifecycle: Lifecycle manager (injected).

    Returns:
        TokenCreateResponse on success (201 Created).
        JSONResponse with problem details on failure (401/503).
    """
    result = await lifecycle.refresh(data.refresh_token, data.session_id)

    match result:
        case Success(value=tokens):
            return TokenCreateResponse.from_issued(tokens)
        case Failure(error=error):
            return ErrorResponseBuilder.from_credential_error(
                error, request, get_trace_id()
            )
