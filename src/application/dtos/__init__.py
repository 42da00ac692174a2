"""Data Transfer Objects (DTOs) for application layer.

DTOs are result dataclasses returned by application services to the
presentation layer. They are NOT API schemas (Pydantic models live in
src/schemas).

Usage:
    from src.application.dtos import IssuedTokens, SessionSummary
"""

from src.application.dtos.session_dtos import SessionStats, SessionSummary
from src.application.dtos.token_dtos import IssuedTokens

__all__ = [
    "IssuedTokens",
    "SessionStats",
    "SessionSummary",
]
