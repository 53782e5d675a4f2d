"""Monthly usage counters."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class UsageRecord:
    """Usage of one user for one calendar month.

    Counters only increase within a month (atomic adds). A month without a
    record has implicit zero usage.

    Attributes:
        id: Record identifier.
        user_id: Owning user.
        month_year: Month key, ``YYYY-MM`` (UTC).
        api_requests: API requests counted this month.
        sms_alerts_sent: SMS alerts counted this month.
        created_at: Row creation time.
        updated_at: Last increment time.
    """

    id: UUID
    user_id: UUID
    month_year: str
    api_requests: int
    sms_alerts_sent: int
    created_at: datetime
    updated_at: datetime
