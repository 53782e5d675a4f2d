"""UsageRepository protocol (port) for monthly usage counters.

At most one record per (user, month). Increments are a single
``INSERT ... ON CONFLICT DO UPDATE SET counter = counter + :delta``
statement, never a read-modify-write from the caller.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.usage_record import UsageRecord


class UsageRepository(Protocol):
    """Protocol for usage record persistence."""

    async def find(self, user_id: UUID, month_year: str) -> UsageRecord | None:
        """Find the record of a user for a month (``YYYY-MM``)."""
        ...

    async def ensure_exists(self, user_id: UUID, month_year: str, now: datetime) -> UsageRecord:
        """Return the month's record, creating a zeroed one if missing."""
        ...

    async def increment(
        self,
        user_id: UUID,
        month_year: str,
        *,
        api_requests: int = 0,
        sms_alerts: int = 0,
        now: datetime,
    ) -> UsageRecord:
        """Atomically add to the month's counters (creating the record).

        Returns:
            UsageRecord: The record as read after the increment.
        """
        ...

    async def list_recent(self, user_id: UUID, limit: int) -> list[UsageRecord]:
        """List a user's records, newest month first."""
        ...

    async def reset(self, user_id: UUID, month_year: str, now: datetime) -> bool:
        """Zero a month's counters.

        Returns:
            bool: Whether a record existed.
        """
        ...

    async def delete_before(self, month_year: str) -> int:
        """Delete records of months strictly before ``month_year``.

        Returns:
            int: Number of records deleted.
        """
        ...
