"""Usage limits report value objects."""

from dataclasses import dataclass

from src.domain.enums import PlanSource


@dataclass(frozen=True, slots=True, kw_only=True)
class DimensionUsage:
    """Usage of one quota dimension.

    Attributes:
        used: Current count (this month for monthly dimensions).
        limit: Effective limit (None when not entitled or unlimited).
        unlimited: Whether the dimension is unlimited.
    """

    used: int
    limit: int | None
    unlimited: bool

    @property
    def remaining(self) -> int | None:
        """Remaining quantity, None when unlimited."""
        if self.unlimited:
            return None
        if self.limit is None:
            return 0
        return max(0, self.limit - self.used)


@dataclass(frozen=True, slots=True, kw_only=True)
class FeatureFlags:
    """Alert channels available on the effective plan."""

    email_alerts: bool
    sms_alerts: bool
    slack_alerts: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class UsageLimits:
    """Full usage and limits report for a user.

    Attributes:
        plan_name: Name of the effective plan.
        source: BASE or TRIAL_OVERRIDE.
        domains: Domain usage (count supplied by the caller).
        team_members: Team usage (count supplied by the caller).
        api_requests: API requests this month.
        sms_alerts: SMS alerts this month.
        features: Alert channel flags.
        check_interval_hours: Monitoring interval.
    """

    plan_name: str
    source: PlanSource
    domains: DimensionUsage
    team_members: DimensionUsage
    api_requests: DimensionUsage
    sms_alerts: DimensionUsage
    features: FeatureFlags
    check_interval_hours: int
