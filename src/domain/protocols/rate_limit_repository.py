"""RateLimitRepository protocol (port) for the fixed-window limiter.

One record per key. Every mutation is a single conditional statement that
names the state it expects, so two workers racing on the same key cannot
both take the last slot of a window:

    create_if_absent        INSERT ... ON CONFLICT DO NOTHING
    reset_window            UPDATE ... WHERE first_attempt_at = :expected
    increment_within_window UPDATE ... WHERE first_attempt_at = :expected
                                       AND attempt_count < :cap
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass
class RateLimitRecordData:
    """Snapshot of a rate limit record."""

    key: str
    attempt_count: int
    first_attempt_at: datetime
    last_attempt_at: datetime


class RateLimitRepository(Protocol):
    """Protocol for rate limit record persistence."""

    async def find(self, key: str) -> RateLimitRecordData | None:
        """Read the record for a key."""
        ...

    async def create_if_absent(self, key: str, now: datetime) -> bool:
        """Create a record with counter=1 and window start ``now``.

        Returns:
            bool: True if this call created the record.
        """
        ...

    async def reset_window(
        self,
        key: str,
        expected_first_attempt_at: datetime,
        now: datetime,
    ) -> bool:
        """Start a new window (counter=1, first_attempt_at=now).

        Returns:
            bool: True if the record still had the expected window start.
        """
        ...

    async def increment_within_window(
        self,
        key: str,
        expected_first_attempt_at: datetime,
        max_attempts: int,
        now: datetime,
    ) -> bool:
        """Increment the counter if the window is unchanged and below cap.

        Returns:
            bool: True if the counter was incremented.
        """
        ...
