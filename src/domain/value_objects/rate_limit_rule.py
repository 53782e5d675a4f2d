"""Rate limit rule value object.

Immutable configuration for a fixed-window limiter: at most ``max_attempts``
allowed actions per key inside a window of ``window`` length, the window
starting at the first allowed attempt.

Usage:
    from datetime import timedelta
    from src.domain.value_objects import RateLimitRule

    rule = RateLimitRule(max_attempts=3, window=timedelta(hours=1))
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Fixed-window rate limit rule (value object).

    Fixed Window Algorithm:
        - First attempt for a key opens a window (counter = 1)
        - Attempts inside the window increment the counter up to the cap
        - At the cap, attempts are denied without mutating the record
        - The first attempt after the window elapses resets the counter

    Attributes:
        max_attempts: Allowed attempts per window (3 for verification email).
        window: Window length (1 hour for verification email).

    Raises:
        ValueError: If max_attempts <= 0 or window is not positive.
    """

    max_attempts: int
    window: timedelta

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization.

        Raises:
            ValueError: If any field is invalid.
        """
        if self.max_attempts <= 0:
            raise ValueError(
                f"max_attempts must be positive, got {self.max_attempts}"
            )
        if self.window <= timedelta(0):
            raise ValueError(f"window must be positive, got {self.window}")

    def window_elapsed(self, window_started_at: datetime, now: datetime) -> bool:
        """Check whether a window opened at ``window_started_at`` is over.

        The window is closed exactly when the elapsed time exceeds its length.
        """
        return now - window_started_at > self.window

    def retry_after_seconds(self, window_started_at: datetime, now: datetime) -> int:
        """Seconds until the window opened at ``window_started_at`` elapses."""
        remaining = window_started_at + self.window - now
        return max(0, math.ceil(remaining.total_seconds()))


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitDecision:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the action is allowed.
        attempts: Attempt count in the current window after this check.
        retry_after_seconds: Seconds until retry allowed (0 if allowed).
    """

    allowed: bool
    attempts: int
    retry_after_seconds: int = 0
