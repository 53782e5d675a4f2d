"""System clock adapter.

Implements ClockProtocol with the process wall clock. Tests inject a
FakeClock instead so windows, expirations and month keys can be moved.
"""

from datetime import UTC, datetime


class SystemClock:
    """Wall-clock time source (always timezone-aware UTC)."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(UTC)
