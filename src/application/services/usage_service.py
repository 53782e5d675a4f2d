"""Monthly usage tracking.

Usage is counted per user per calendar month (``YYYY-MM`` in UTC). A month
without a record has zero usage. Increments are a single
``INSERT ... ON CONFLICT DO UPDATE SET counter = counter + n`` so parallel
requests never lose updates.
"""

from datetime import datetime
from uuid import UUID

from src.core.constants import (
    MONTH_KEY_FORMAT,
    USAGE_HISTORY_MONTHS_DEFAULT,
    USAGE_RETENTION_MONTHS_DEFAULT,
)
from src.domain.entities import UsageRecord
from src.domain.enums import AuditAction
from src.domain.protocols import (
    AuditProtocol,
    ClockProtocol,
    LoggerProtocol,
    UsageRepository,
)


def month_key(moment: datetime) -> str:
    """Format the usage month key of ``moment`` (``YYYY-MM``)."""
    return moment.strftime(MONTH_KEY_FORMAT)


def months_before(moment: datetime, months: int) -> str:
    """Month key ``months`` calendar months before ``moment``.

    Example:
        >>> months_before(datetime(2026, 3, 15), 12)
        '2025-03'
    """
    index = moment.year * 12 + (moment.month - 1) - months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


class UsageService:
    """Reads and atomic increments of monthly usage counters."""

    def __init__(
        self,
        *,
        usage_repo: UsageRepository,
        clock: ClockProtocol,
        audit: AuditProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._repo = usage_repo
        self._clock = clock
        self._audit = audit
        self._logger = logger

    def current_month(self) -> str:
        """Month key of the engine clock's current time."""
        return month_key(self._clock.now())

    async def get_current_usage(self, user_id: UUID) -> UsageRecord | None:
        """Return this month's record, or None when nothing was counted yet."""
        return await self._repo.find(user_id, self.current_month())

    async def get_or_create_current_usage(self, user_id: UUID) -> UsageRecord:
        """Return this month's record, creating a zeroed one if absent."""
        return await self._repo.ensure_exists(
            user_id, self.current_month(), self._clock.now()
        )

    async def get_api_request_count(self, user_id: UUID) -> int:
        """API requests counted this month (0 without a record)."""
        record = await self.get_current_usage(user_id)
        return record.api_requests if record else 0

    async def get_sms_alert_count(self, user_id: UUID) -> int:
        """SMS alerts counted this month (0 without a record)."""
        record = await self.get_current_usage(user_id)
        return record.sms_alerts_sent if record else 0

    async def increment_api_requests(self, user_id: UUID, count: int = 1) -> UsageRecord:
        """Atomically add ``count`` API requests to this month.

        Raises:
            ValueError: If count is not positive.
        """
        self._require_positive(count)
        now = self._clock.now()
        return await self._repo.increment(
            user_id, month_key(now), api_requests=count, now=now
        )

    async def increment_sms_alerts(self, user_id: UUID, count: int = 1) -> UsageRecord:
        """Atomically add ``count`` SMS alerts to this month.

        Raises:
            ValueError: If count is not positive.
        """
        self._require_positive(count)
        now = self._clock.now()
        return await self._repo.increment(
            user_id, month_key(now), sms_alerts=count, now=now
        )

    async def get_usage_history(
        self, user_id: UUID, months: int = USAGE_HISTORY_MONTHS_DEFAULT
    ) -> list[UsageRecord]:
        """Return up to ``months`` records, newest month first."""
        return await self._repo.list_recent(user_id, months)

    async def reset_usage(self, user_id: UUID, month: str | None = None) -> bool:
        """Zero the counters of ``month`` (default: current month).

        Returns:
            bool: Whether a record existed for that month.
        """
        month_year = month or self.current_month()
        reset = await self._repo.reset(user_id, month_year, self._clock.now())
        if reset:
            await self._audit.record(
                action=AuditAction.USAGE_RESET,
                message=f"Usage reset for {month_year}",
                user_id=user_id,
                metadata={"month_year": month_year},
            )
        return reset

    async def cleanup_old_usage(
        self, months_to_keep: int = USAGE_RETENTION_MONTHS_DEFAULT
    ) -> int:
        """Delete records older than ``months_to_keep`` months.

        Returns:
            int: Number of records deleted.
        """
        cutoff = months_before(self._clock.now(), months_to_keep)
        deleted = await self._repo.delete_before(cutoff)
        self._logger.info("usage_records_cleaned", cutoff=cutoff, deleted=deleted)
        return deleted

    @staticmethod
    def _require_positive(count: int) -> None:
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
