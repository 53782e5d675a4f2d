"""Effective plan value object.

The limits that actually apply to a user at a point in time, after trial
expiry and trial override resolution. Every entitlement decision reads an
EffectivePlan built by ``SubscriptionService.resolve_effective_plan``; no
caller re-derives defaults on its own.

Sources:
    BASE: the subscribed plan (or default plan) limits, unchanged.
    TRIAL_OVERRIDE: the trial plan's features and limits, with domain and
        SMS quantities replaced by the trial caps.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from src.domain.entities.subscription_plan import SubscriptionPlan
from src.domain.enums import PlanSource


@dataclass(frozen=True, slots=True, kw_only=True)
class EffectivePlan:
    """Resolved plan limits for one user.

    Attributes:
        plan_name: Name of the underlying plan.
        display_name: Human-readable plan name.
        source: Whether limits are the plan's own or trial-overridden.
        is_unlimited: True for the unlimited tier (every dimension unlimited).
        max_domains: Domain limit.
        max_team_members: Team member limit.
        check_interval_hours: Monitoring interval.
        api_requests_per_month: Monthly API limit (None or 0: not entitled
            unless unlimited tier).
        sms_alerts_per_month: Monthly SMS limit (None or 0: not entitled
            unless unlimited tier).
        email_alerts: Email alerts flag.
        sms_alerts: SMS alerts flag.
        slack_alerts: Slack alerts flag.
        trial_ends_at: End of the trial for TRIAL_OVERRIDE plans.
    """

    plan_name: str
    display_name: str
    source: PlanSource
    is_unlimited: bool
    max_domains: int
    max_team_members: int
    check_interval_hours: int
    api_requests_per_month: int | None
    sms_alerts_per_month: int | None
    email_alerts: bool
    sms_alerts: bool
    slack_alerts: bool
    trial_ends_at: datetime | None = None

    @classmethod
    def from_plan(cls, plan: SubscriptionPlan, *, is_unlimited: bool) -> "EffectivePlan":
        """Build a BASE effective plan from a plan's own limits."""
        return cls(
            plan_name=plan.name,
            display_name=plan.display_name,
            source=PlanSource.BASE,
            is_unlimited=is_unlimited,
            max_domains=plan.max_domains,
            max_team_members=plan.max_team_members,
            check_interval_hours=plan.check_interval_hours,
            api_requests_per_month=plan.api_requests_per_month,
            sms_alerts_per_month=plan.sms_alerts_per_month,
            email_alerts=plan.email_alerts,
            sms_alerts=plan.sms_alerts,
            slack_alerts=plan.slack_alerts,
        )

    def with_trial_override(
        self,
        *,
        max_domains: int,
        max_sms_alerts: int,
        trial_ends_at: datetime | None,
    ) -> "EffectivePlan":
        """Apply trial caps: quantities reduced, feature flags untouched.

        Args:
            max_domains: Trial domain cap.
            max_sms_alerts: Trial monthly SMS cap.
            trial_ends_at: End of the trial.

        Returns:
            EffectivePlan: Copy tagged TRIAL_OVERRIDE.
        """
        return replace(
            self,
            source=PlanSource.TRIAL_OVERRIDE,
            is_unlimited=False,
            max_domains=max_domains,
            sms_alerts_per_month=max_sms_alerts,
            trial_ends_at=trial_ends_at,
        )

    @property
    def is_trial_override(self) -> bool:
        """Whether trial caps are in effect."""
        return self.source is PlanSource.TRIAL_OVERRIDE
