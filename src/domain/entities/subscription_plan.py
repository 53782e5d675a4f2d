"""Subscription plan reference data.

Plans are seeded once and treated as immutable. For monthly limits, ``None``
on the unlimited tier means unlimited; on any other tier it means the
feature is not part of the plan (see QuotaService).
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class SubscriptionPlan:
    """Named plan tier with quota limits and feature flags.

    Attributes:
        id: Plan identifier.
        name: Unique plan name (starter, professional, enterprise).
        display_name: Human-readable name.
        price_monthly: Monthly price (informational, no billing integration).
        price_annual: Annual price (informational).
        max_domains: Maximum monitored domains.
        max_team_members: Maximum team members.
        check_interval_hours: Monitoring interval in hours.
        api_requests_per_month: Monthly API request limit (None: see module doc).
        sms_alerts_per_month: Monthly SMS alert limit (None: see module doc).
        email_alerts: Email alerts feature flag.
        sms_alerts: SMS alerts feature flag.
        slack_alerts: Slack alerts feature flag.
    """

    id: UUID
    name: str
    display_name: str
    price_monthly: Decimal
    price_annual: Decimal
    max_domains: int
    max_team_members: int
    check_interval_hours: int
    api_requests_per_month: int | None
    sms_alerts_per_month: int | None
    email_alerts: bool
    sms_alerts: bool
    slack_alerts: bool
