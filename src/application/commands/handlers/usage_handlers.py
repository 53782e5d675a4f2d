"""Usage tracking command handlers.

Counting is fire-and-forget from the caller's point of view: the handlers
never check quotas, they only record consumption. Quota decisions live in
the entitlement queries.
"""

from src.application.commands.usage_commands import (
    CleanupOldUsage,
    ResetUsage,
    TrackApiRequest,
    TrackSmsAlert,
)
from src.application.services import UsageService
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import UsageRecord


def _is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


class TrackApiRequestHandler:
    """Count an API request when its response succeeded."""

    def __init__(self, usage_service: UsageService) -> None:
        self._usage = usage_service

    async def handle(self, cmd: TrackApiRequest) -> Result[bool, None]:
        """Handle API request tracking.

        Returns:
            Success(True) when the request was counted, Success(False) for
            non-2xx responses.
        """
        if not _is_success_status(cmd.status_code):
            return Success(value=False)
        await self._usage.increment_api_requests(cmd.user_id)
        return Success(value=True)


class TrackSmsAlertHandler:
    """Count sent SMS alerts."""

    def __init__(self, usage_service: UsageService) -> None:
        self._usage = usage_service

    async def handle(self, cmd: TrackSmsAlert) -> Result[UsageRecord, ValidationError]:
        """Handle SMS tracking.

        Returns:
            Success(UsageRecord) after the increment.
            Failure(ValidationError) when count is not positive.
        """
        if cmd.count <= 0:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="count must be positive",
                    field="count",
                )
            )
        return Success(value=await self._usage.increment_sms_alerts(cmd.user_id, cmd.count))


class ResetUsageHandler:
    """Zero a month's usage counters (support/admin operation)."""

    def __init__(self, usage_service: UsageService) -> None:
        self._usage = usage_service

    async def handle(self, cmd: ResetUsage) -> Result[bool, None]:
        """Handle usage reset.

        Returns:
            Success(bool): whether a record existed for that month.
        """
        return Success(value=await self._usage.reset_usage(cmd.user_id, cmd.month_year))


class CleanupOldUsageHandler:
    """Delete usage records past the retention period."""

    def __init__(self, usage_service: UsageService) -> None:
        self._usage = usage_service

    async def handle(self, cmd: CleanupOldUsage) -> Result[int, None]:
        """Handle usage cleanup.

        Returns:
            Success(count) with the number of records deleted.
        """
        return Success(value=await self._usage.cleanup_old_usage(cmd.months_to_keep))
