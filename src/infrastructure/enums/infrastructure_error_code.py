"""Infrastructure-specific error codes.

Internal codes for tracking storage failures. They travel in
``DatabaseError.infrastructure_code`` next to the domain
``ErrorCode.STORE_UNAVAILABLE``.
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    DATABASE_TIMEOUT = "database_timeout"
    DATABASE_CONNECTION_FAILED = "database_connection_failed"
    DATABASE_ERROR = "database_error"
