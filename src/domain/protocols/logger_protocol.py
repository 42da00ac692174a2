"""LoggerProtocol definition for structured logging.

Backend-agnostic port for structured (message + key/value context) logging.

Security:
    - NEVER log raw access or refresh tokens
    - Token digests may be logged truncated to 8 characters

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("session_issued", user_id=str(user_id), session_id=sid)

    scoped = logger.bind(user_id=str(user_id))
    scoped.warning("refresh_token_replay_detected", session_id=sid)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Supports DEBUG, INFO, WARNING, ERROR, CRITICAL and context binding.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception; adapters add error_type/error_message.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...
