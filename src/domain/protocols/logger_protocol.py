"""LoggerProtocol definition for structured logging.

Implementations MUST keep logs structured (message + key-value context) and
safe: refresh secrets, verification/reset secrets, token digests and
password digests are never logged.

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events (token issued, trial assigned)
    - WARNING: Security-relevant denials (reuse detected, rate limited)
    - ERROR: Operation failed, system continues (email or audit failure)
    - CRITICAL: System-wide failure

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("Trial assigned", user_id=str(user_id), plan="professional")

    scoped = logger.bind(component="credential_tokens")
    scoped.warning("Refresh token reuse detected", user_id=str(user_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
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
            message: Human-readable message.
            error: Optional exception instance; implementations include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for catastrophic failures."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with ``context`` included in every entry.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
