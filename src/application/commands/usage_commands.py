"""Usage tracking commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class TrackApiRequest:
    """Count one API request, only when the response succeeded.

    Attributes:
        user_id: Caller.
        status_code: HTTP status code of the response (counted when 2xx).
    """

    user_id: UUID
    status_code: int


@dataclass(frozen=True, kw_only=True)
class TrackSmsAlert:
    """Count sent SMS alerts.

    Attributes:
        user_id: Alert owner.
        count: Number of SMS alerts sent (positive).
    """

    user_id: UUID
    count: int = 1


@dataclass(frozen=True, kw_only=True)
class ResetUsage:
    """Zero a month's usage counters.

    Attributes:
        user_id: User whose counters are reset.
        month_year: Month key (``YYYY-MM``); current month when None.
    """

    user_id: UUID
    month_year: str | None = None


@dataclass(frozen=True, kw_only=True)
class CleanupOldUsage:
    """Delete usage records older than ``months_to_keep`` months."""

    months_to_keep: int = 12
