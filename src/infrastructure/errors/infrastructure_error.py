"""Infrastructure layer error types.

Infrastructure catches SQLAlchemy and timeout exceptions and maps them to
these DomainError subclasses, which then flow through Result types.
"""

from dataclasses import dataclass

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Storage timeout or unavailability.

    Always carries ``ErrorCode.STORE_UNAVAILABLE`` so callers surface it as
    a transient failure and retry, never as a credential error.
    """

    @classmethod
    def from_exception(cls, exc: BaseException, *, operation: str) -> "DatabaseError":
        """Map a storage exception to a DatabaseError.

        Args:
            exc: TimeoutError, OSError or SQLAlchemyError raised by the store.
            operation: Lifecycle operation that was running.

        Returns:
            DatabaseError with the matching infrastructure code.
        """
        if isinstance(exc, TimeoutError):
            infra_code = InfrastructureErrorCode.DATABASE_TIMEOUT
            message = "Storage operation timed out"
        elif isinstance(exc, OSError) or (
            isinstance(exc, DBAPIError) and exc.connection_invalidated
        ):
            infra_code = InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
            message = "Storage connection lost"
        elif isinstance(exc, SQLAlchemyError):
            infra_code = InfrastructureErrorCode.DATABASE_ERROR
            message = "Storage operation failed"
        else:
            raise TypeError(f"Not a storage failure: {type(exc).__name__}")
        return cls(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=message,
            infrastructure_code=infra_code,
            details={"operation": operation, "error_type": type(exc).__name__},
        )
