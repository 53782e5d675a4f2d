"""Rate limit error type.

Returned when the verification/reset email limiter denies an action for a
key (fixed cap per fixed window).

Usage:
    from src.domain.errors import RateLimitError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=RateLimitError(
        code=ErrorCode.RATE_LIMIT_EXCEEDED,
        message=AuthMessage.RATE_LIMITED,
        retry_after_seconds=decision.retry_after_seconds,
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Throttled action.

    A limiter *decision* is not an error (it returns allowed=False); this
    error is what caller-facing handlers return when a denial must be
    reported to the client.

    Attributes:
        retry_after_seconds: Seconds until the current window elapses.
    """

    retry_after_seconds: int = 0
