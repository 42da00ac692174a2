"""Core shared kernel.

Result types, the base error hierarchy, error codes and settings shared by
every layer. Nothing in here imports from domain, application,
infrastructure or presentation.
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
]
