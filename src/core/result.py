"""Result types for railway-oriented programming.

Lifecycle operations can fail for expected reasons (expired token, replay,
storage timeout). Those outcomes are returned as values instead of raised,
so every caller has to handle them explicitly.

Usage:
    result = await manager.refresh(raw_token, session_id)
    match result:
        case Success(value=tokens):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
