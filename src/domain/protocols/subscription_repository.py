"""SubscriptionRepository protocol (port) for plans and user subscriptions.

Uniqueness:
    ``user_subscriptions.user_id`` is unique. Plan assignment is an upsert
    (INSERT ... ON CONFLICT (user_id) DO UPDATE) that rewrites every mutable
    column, so assigning a second plan updates the existing row.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.subscription_plan import SubscriptionPlan
from src.domain.entities.user_subscription import UserSubscription
from src.domain.enums import BillingCycle, SubscriptionStatus


class SubscriptionRepository(Protocol):
    """Protocol for subscription persistence."""

    async def list_plans(self) -> list[SubscriptionPlan]:
        """List all plans, cheapest first."""
        ...

    async def find_plan_by_name(self, name: str) -> SubscriptionPlan | None:
        """Find a plan by its unique name."""
        ...

    async def find_current_by_user(self, user_id: UUID) -> UserSubscription | None:
        """Find the user's subscription when its status is active or trial."""
        ...

    async def find_by_user(self, user_id: UUID) -> UserSubscription | None:
        """Find the user's subscription regardless of status."""
        ...

    async def upsert(
        self,
        *,
        user_id: UUID,
        plan_id: UUID,
        status: SubscriptionStatus,
        is_trial: bool,
        trial_ends_at: datetime | None,
        billing_cycle: BillingCycle | None,
        now: datetime,
    ) -> UserSubscription:
        """Insert or fully rewrite the user's subscription row.

        The external billing reference and paid-period expiry are cleared;
        ``started_at`` becomes ``now``.

        Returns:
            UserSubscription: The row as stored after the write.
        """
        ...

    async def downgrade_expired_trial(
        self,
        *,
        user_id: UUID,
        expected_trial_ends_at: datetime,
        plan_id: UUID,
        now: datetime,
    ) -> bool:
        """Rewrite an expired trial row to the base plan.

        Full-row replace (plan, status=active, is_trial=false, trial fields
        and billing fields cleared) conditional on the row still being the
        same trial (``is_trial`` and ``trial_ends_at`` unchanged), so a
        concurrent plan change wins over the downgrade.

        Returns:
            bool: True if this call downgraded the row.
        """
        ...

    async def cancel_active(self, user_id: UUID, now: datetime) -> bool:
        """Move an ``active`` row to ``cancelled``.

        Returns:
            bool: True if a row was cancelled.
        """
        ...

    async def find_user_ids_with_expired_trials(self, now: datetime) -> list[UUID]:
        """List users whose trial end has passed but are still on trial."""
        ...
