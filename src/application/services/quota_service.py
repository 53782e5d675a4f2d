"""Quota enforcement engine.

Evaluates current usage against the effective plan for four dimensions:
domains and team members (counts supplied by the caller), SMS alerts and
API requests (this month's usage record).

Rules:
    - Unlimited tier: every dimension allowed, Slack allowed
    - Domains / team members: ``current_count < limit``
    - SMS / API: a None or 0 monthly limit means the feature is not part of
      the plan; otherwise ``used < limit``
    - Slack: plan flag (or unlimited tier)
    - Trial override: domain and SMS limits are the trial caps, feature
      flags stay those of the trial plan

Every decision starts from ``SubscriptionService.resolve_effective_plan``,
which applies trial expiry first.
"""

from uuid import UUID

from src.application.services.subscription_service import SubscriptionService
from src.application.services.usage_service import UsageService
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import UsageRecord
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import PlanLimitError
from src.domain.protocols import AuditProtocol, LoggerProtocol
from src.domain.value_objects import (
    DimensionUsage,
    EffectivePlan,
    FeatureFlags,
    UsageLimits,
)


def _monthly_allowed(plan: EffectivePlan, limit: int | None, used: int) -> bool:
    if plan.is_unlimited:
        return True
    if not limit:
        return False
    return used < limit


class QuotaService:
    """Entitlement checks and usage reports.

    ``can_*`` methods answer with a bool. ``check_*`` methods return
    Success(None) or Failure(PlanLimitError) with a user-facing message and
    record a LIMIT_DENIED audit entry on denial.
    """

    def __init__(
        self,
        *,
        subscription_service: SubscriptionService,
        usage_service: UsageService,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        upgrade_url: str = "/pricing",
    ) -> None:
        self._subscriptions = subscription_service
        self._usage = usage_service
        self._audit = audit
        self._logger = logger
        self.upgrade_url = upgrade_url

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    async def get_usage_limits(
        self,
        user_id: UUID,
        current_domain_count: int = 0,
        current_team_count: int = 0,
    ) -> UsageLimits:
        """Compose the effective plan with this month's usage.

        Args:
            user_id: User to report on.
            current_domain_count: Domains the caller currently owns.
            current_team_count: Team members the caller currently has.

        Returns:
            UsageLimits: Per-dimension used/limit/unlimited plus flags.
        """
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        record = await self._usage.get_current_usage(user_id)
        unlimited = plan.is_unlimited

        return UsageLimits(
            plan_name=plan.plan_name,
            source=plan.source,
            domains=DimensionUsage(
                used=current_domain_count,
                limit=None if unlimited else plan.max_domains,
                unlimited=unlimited,
            ),
            team_members=DimensionUsage(
                used=current_team_count,
                limit=None if unlimited else plan.max_team_members,
                unlimited=unlimited,
            ),
            api_requests=DimensionUsage(
                used=record.api_requests if record else 0,
                limit=None if unlimited else plan.api_requests_per_month,
                unlimited=unlimited,
            ),
            sms_alerts=DimensionUsage(
                used=record.sms_alerts_sent if record else 0,
                limit=None if unlimited else plan.sms_alerts_per_month,
                unlimited=unlimited,
            ),
            features=FeatureFlags(
                email_alerts=plan.email_alerts,
                sms_alerts=plan.sms_alerts,
                slack_alerts=plan.slack_alerts or unlimited,
            ),
            check_interval_hours=plan.check_interval_hours,
        )

    # ------------------------------------------------------------------
    # Boolean checks
    # ------------------------------------------------------------------

    async def can_add_domain(self, user_id: UUID, current_count: int) -> bool:
        """Whether one more domain fits the effective plan."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        return plan.is_unlimited or current_count < plan.max_domains

    async def can_add_team_member(self, user_id: UUID, current_count: int) -> bool:
        """Whether one more team member fits the effective plan."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        return plan.is_unlimited or current_count < plan.max_team_members

    async def can_send_sms(self, user_id: UUID) -> bool:
        """Whether one more SMS alert fits this month's limit."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        used = await self._usage.get_sms_alert_count(user_id)
        return _monthly_allowed(plan, plan.sms_alerts_per_month, used)

    async def can_make_api_request(self, user_id: UUID) -> bool:
        """Whether one more API request fits this month's limit."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        used = await self._usage.get_api_request_count(user_id)
        return _monthly_allowed(plan, plan.api_requests_per_month, used)

    async def can_use_slack_alerts(self, user_id: UUID) -> bool:
        """Whether the effective plan includes Slack alerts."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        return plan.slack_alerts or plan.is_unlimited

    # ------------------------------------------------------------------
    # Checks with user-facing failures
    # ------------------------------------------------------------------

    async def check_domain_limit(
        self, user_id: UUID, current_count: int
    ) -> Result[None, PlanLimitError]:
        """Fail with DOMAIN_LIMIT_REACHED when no domain can be added."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        if plan.is_unlimited or current_count < plan.max_domains:
            return Success(value=None)
        return await self._deny(
            user_id,
            plan,
            code=ErrorCode.DOMAIN_LIMIT_REACHED,
            message=(
                f"You have reached the maximum of {plan.max_domains} domains "
                f"for your {plan.display_name} plan."
            ),
            current=current_count,
            limit=plan.max_domains,
        )

    async def check_team_limit(
        self, user_id: UUID, current_count: int
    ) -> Result[None, PlanLimitError]:
        """Fail with TEAM_LIMIT_REACHED when no team member can be added."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        if plan.is_unlimited or current_count < plan.max_team_members:
            return Success(value=None)
        return await self._deny(
            user_id,
            plan,
            code=ErrorCode.TEAM_LIMIT_REACHED,
            message=(
                f"You have reached the maximum of {plan.max_team_members} team "
                f"members for your {plan.display_name} plan."
            ),
            current=current_count,
            limit=plan.max_team_members,
        )

    async def check_sms_limit(self, user_id: UUID) -> Result[None, PlanLimitError]:
        """Fail when SMS is not part of the plan or this month is used up."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        used = await self._usage.get_sms_alert_count(user_id)
        limit = plan.sms_alerts_per_month
        if _monthly_allowed(plan, limit, used):
            return Success(value=None)
        if not limit:
            return await self._deny(
                user_id,
                plan,
                code=ErrorCode.FEATURE_NOT_AVAILABLE,
                message=f"SMS alerts are not available on your {plan.display_name} plan.",
                current=used,
                limit=limit,
            )
        return await self._deny(
            user_id,
            plan,
            code=ErrorCode.SMS_LIMIT_REACHED,
            message=f"You have used all {limit} SMS alerts for this month.",
            current=used,
            limit=limit,
        )

    async def check_api_limit(self, user_id: UUID) -> Result[None, PlanLimitError]:
        """Fail when API access is not part of the plan or the month is used up."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        used = await self._usage.get_api_request_count(user_id)
        limit = plan.api_requests_per_month
        if _monthly_allowed(plan, limit, used):
            return Success(value=None)
        if not limit:
            return await self._deny(
                user_id,
                plan,
                code=ErrorCode.FEATURE_NOT_AVAILABLE,
                message=f"API access is not available on your {plan.display_name} plan.",
                current=used,
                limit=limit,
            )
        return await self._deny(
            user_id,
            plan,
            code=ErrorCode.API_LIMIT_REACHED,
            message=f"You have reached the monthly API limit of {limit} requests.",
            current=used,
            limit=limit,
        )

    async def check_slack_access(self, user_id: UUID) -> Result[None, PlanLimitError]:
        """Fail with FEATURE_NOT_AVAILABLE when Slack is not in the plan."""
        plan = await self._subscriptions.resolve_effective_plan(user_id)
        if plan.slack_alerts or plan.is_unlimited:
            return Success(value=None)
        return await self._deny(
            user_id,
            plan,
            code=ErrorCode.FEATURE_NOT_AVAILABLE,
            message=f"Slack alerts are not available on your {plan.display_name} plan.",
        )

    # ------------------------------------------------------------------
    # Usage tracking
    # ------------------------------------------------------------------

    async def increment_api_requests(self, user_id: UUID, count: int = 1) -> UsageRecord:
        """Atomically add ``count`` API requests to this month's usage."""
        return await self._usage.increment_api_requests(user_id, count)

    async def increment_sms_alerts(self, user_id: UUID, count: int = 1) -> UsageRecord:
        """Atomically add ``count`` SMS alerts to this month's usage."""
        return await self._usage.increment_sms_alerts(user_id, count)

    async def _deny(
        self,
        user_id: UUID,
        plan: EffectivePlan,
        *,
        code: ErrorCode,
        message: str,
        current: int | None = None,
        limit: int | None = None,
    ) -> Result[None, PlanLimitError]:
        self._logger.info(
            "plan_limit_denied",
            user_id=str(user_id),
            code=code.value,
            plan=plan.plan_name,
            source=plan.source.value,
        )
        await self._audit.record(
            action=AuditAction.LIMIT_DENIED,
            message=message,
            level=LogLevel.WARN,
            user_id=user_id,
            error_code=code.value,
            metadata={
                "plan": plan.plan_name,
                "source": plan.source.value,
                "current": current,
                "limit": limit,
            },
        )
        return Failure(
            error=PlanLimitError(
                code=code,
                message=message,
                plan_name=plan.plan_name,
                upgrade_url=self.upgrade_url,
                current=current,
                limit=limit,
            )
        )
