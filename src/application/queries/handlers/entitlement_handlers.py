"""Entitlement query handlers.

Each limit check delegates to QuotaService and returns Success(None) when
the action is allowed or Failure(PlanLimitError) with a user-facing message,
the plan name and the upgrade URL.
"""

from src.application.queries.entitlement_queries import (
    CheckApiLimit,
    CheckDomainLimit,
    CheckSlackAccess,
    CheckSmsLimit,
    CheckTeamLimit,
    GetUsageHistory,
    GetUsageLimits,
)
from src.application.services import QuotaService, UsageService
from src.core.result import Result, Success
from src.domain.entities import UsageRecord
from src.domain.errors import PlanLimitError
from src.domain.value_objects import UsageLimits


class CheckDomainLimitHandler:
    """Handler for domain limit checks."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: CheckDomainLimit) -> Result[None, PlanLimitError]:
        """Fail with DOMAIN_LIMIT_REACHED when no domain can be added."""
        return await self._quota.check_domain_limit(query.user_id, query.current_count)


class CheckTeamLimitHandler:
    """Handler for team member limit checks."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: CheckTeamLimit) -> Result[None, PlanLimitError]:
        """Fail with TEAM_LIMIT_REACHED when no member can be added."""
        return await self._quota.check_team_limit(query.user_id, query.current_count)


class CheckSmsLimitHandler:
    """Handler for SMS limit checks."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: CheckSmsLimit) -> Result[None, PlanLimitError]:
        """Fail with FEATURE_NOT_AVAILABLE or SMS_LIMIT_REACHED."""
        return await self._quota.check_sms_limit(query.user_id)


class CheckApiLimitHandler:
    """Handler for API limit checks."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: CheckApiLimit) -> Result[None, PlanLimitError]:
        """Fail with FEATURE_NOT_AVAILABLE or API_LIMIT_REACHED."""
        return await self._quota.check_api_limit(query.user_id)


class CheckSlackAccessHandler:
    """Handler for Slack feature checks."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: CheckSlackAccess) -> Result[None, PlanLimitError]:
        """Fail with FEATURE_NOT_AVAILABLE when Slack is not in the plan."""
        return await self._quota.check_slack_access(query.user_id)


class GetUsageLimitsHandler:
    """Handler for the usage/limits report."""

    def __init__(self, quota_service: QuotaService) -> None:
        self._quota = quota_service

    async def handle(self, query: GetUsageLimits) -> Result[UsageLimits, None]:
        """Handle usage limits query.

        Returns:
            Success(UsageLimits) for the effective plan and this month.
        """
        limits = await self._quota.get_usage_limits(
            query.user_id,
            current_domain_count=query.current_domain_count,
            current_team_count=query.current_team_count,
        )
        return Success(value=limits)


class GetUsageHistoryHandler:
    """Handler for monthly usage history."""

    def __init__(self, usage_service: UsageService) -> None:
        self._usage = usage_service

    async def handle(self, query: GetUsageHistory) -> Result[list[UsageRecord], None]:
        return Success(
            value=await self._usage.get_usage_history(query.user_id, query.months)
        )
