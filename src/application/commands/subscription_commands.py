"""Subscription commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import BillingCycle


@dataclass(frozen=True, kw_only=True)
class ChangePlan:
    """Move a user to another plan (status active, trial cleared).

    Attributes:
        user_id: Subscriber.
        plan_name: Target plan name (starter, professional, enterprise).
        billing_cycle: Optional billing cycle for paid plans.
    """

    user_id: UUID
    plan_name: str
    billing_cycle: BillingCycle | None = None


@dataclass(frozen=True, kw_only=True)
class CancelSubscription:
    """Cancel an active subscription.

    Attributes:
        user_id: Subscriber.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class ExpireOverdueTrials:
    """Downgrade every trial whose end has passed (maintenance sweep)."""
