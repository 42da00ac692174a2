"""Error response builder for RFC 9457 Problem Details.

Turns lifecycle failures into problem detail responses. Internal error
codes are collapsed before they reach the wire:

    credential routes   public_kind(error) -> 401 / 401 / 503
    session routes      SESSION_NOT_FOUND, RESOURCE_NOT_OWNED -> 404,
                        everything else as a credential error

A session owned by someone else is reported exactly like one that does
not exist.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.domain.errors import CredentialErrorKind, public_kind
from src.presentation.routers.api.v1.errors.problem_details import ProblemDetails

# kind -> (status, title, slug, detail)
_CREDENTIAL_PROBLEMS: dict[CredentialErrorKind, tuple[int, str, str, str]] = {
    CredentialErrorKind.INVALID_CREDENTIAL: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
        "invalid-credential",
        "Invalid credential.",
    ),
    CredentialErrorKind.EXPIRED: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
        "expired-credential",
        "Credential has expired.",
    ),
    CredentialErrorKind.TRANSIENT_STORE_FAILURE: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service Unavailable",
        "store-unavailable",
        "Session store temporarily unavailable. Please retry.",
    ),
}

_SESSION_NOT_FOUND_CODES = frozenset(
    {ErrorCode.SESSION_NOT_FOUND, ErrorCode.RESOURCE_NOT_OWNED}
)


class ProblemHTTPException(HTTPException):
    """HTTPException rendered with an explicit problem title and type slug.

    Raised from dependencies, where no response can be returned directly.

    Attributes:
        title: Problem title.
        slug: Last path segment of the problem type URI.
    """

    def __init__(
        self,
        *,
        status_code: int,
        title: str,
        slug: str,
        detail: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.title = title
        self.slug = slug


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_credential_error(
        ...             error, request, get_trace_id()
        ...         )
    """

    @staticmethod
    def credential_exception(kind: CredentialErrorKind) -> ProblemHTTPException:
        """Build the exception a dependency raises for a credential failure.

        Args:
            kind: Collapsed error kind.

        Returns:
            ProblemHTTPException with the same status, type and headers as
            from_credential_error would produce.
        """
        status_code, title, slug, detail = _CREDENTIAL_PROBLEMS[kind]
        return ProblemHTTPException(
            status_code=status_code,
            title=title,
            slug=slug,
            detail=detail,
            headers=_credential_headers(status_code),
        )

    @staticmethod
    def from_credential_error(
        error: DomainError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert a refresh/validation failure to a problem response.

        Args:
            error: Error returned by the lifecycle manager.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with 401 or 503 problem details.
        """
        kind = public_kind(error)
        status_code, title, slug, detail = _CREDENTIAL_PROBLEMS[kind]

        return ErrorResponseBuilder._respond(
            status_code=status_code,
            title=title,
            slug=slug,
            detail=detail,
            request=request,
            trace_id=trace_id,
            headers=_credential_headers(status_code),
        )

    @staticmethod
    def from_session_error(
        error: DomainError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert a session admin failure to a problem response.

        Args:
            error: Error returned by the session admin service.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with 404, 401 or 503 problem details.
        """
        if error.code in _SESSION_NOT_FOUND_CODES:
            return ErrorResponseBuilder._respond(
                status_code=status.HTTP_404_NOT_FOUND,
                title="Resource Not Found",
                slug="session-not-found",
                detail="Session not found.",
                request=request,
                trace_id=trace_id,
            )
        return ErrorResponseBuilder.from_credential_error(error, request, trace_id)

    @staticmethod
    def _respond(
        *,
        status_code: int,
        title: str,
        slug: str,
        detail: str,
        request: Request,
        trace_id: str | None,
        headers: dict[str, str] | None = None,
    ) -> JSONResponse:
        problem = ProblemDetails(
            type=f"{settings.problem_type_base_url}/{slug}",
            title=title,
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            trace_id=trace_id,
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )


def _credential_headers(status_code: int) -> dict[str, str]:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return {"WWW-Authenticate": "Bearer"}
    return {"Retry-After": "1"}
