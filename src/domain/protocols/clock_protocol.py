"""Time source protocol.

All windows and expirations (token expiry, rate-limit windows, trial end,
usage month) are computed from an injected clock so tests can move time.
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Wall-clock time source."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...
