"""User subscription entity and trial information.

At most one subscription row exists per user (unique user_id). Assigning a
plan always rewrites that row instead of adding another.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from src.domain.enums import BillingCycle, SubscriptionStatus


@dataclass(frozen=True, kw_only=True)
class TrialInfo:
    """Trial state of a user at a point in time.

    Attributes:
        is_on_trial: Whether the subscription row is a trial.
        trial_ends_at: End of the trial (None when not on trial).
        days_remaining: Ceiling of remaining days, 0 once expired.
        is_expired: Whether the trial end has passed.
    """

    is_on_trial: bool
    trial_ends_at: datetime | None
    days_remaining: int
    is_expired: bool

    @classmethod
    def none(cls) -> "TrialInfo":
        """Trial info for a user that is not on a trial."""
        return cls(
            is_on_trial=False,
            trial_ends_at=None,
            days_remaining=0,
            is_expired=False,
        )


@dataclass(frozen=True, kw_only=True)
class UserSubscription:
    """A user's subscription to a plan.

    Attributes:
        id: Subscription identifier.
        user_id: Owning user (unique).
        plan_id: Subscribed plan.
        plan_name: Name of the subscribed plan (joined for convenience).
        status: Lifecycle status.
        is_trial: Whether this row is a trial.
        trial_ends_at: End of the trial window.
        billing_cycle: Billing cycle for paid plans.
        billing_reference: External billing reference (opaque).
        started_at: When the current plan assignment started.
        expires_at: Optional end of a paid period.
        created_at: Row creation time.
        updated_at: Last modification time.
    """

    id: UUID
    user_id: UUID
    plan_id: UUID
    plan_name: str
    status: SubscriptionStatus
    is_trial: bool
    trial_ends_at: datetime | None
    billing_cycle: BillingCycle | None
    billing_reference: str | None
    started_at: datetime
    expires_at: datetime | None
    created_at: datetime
    updated_at: datetime

    def is_trial_expired(self, now: datetime) -> bool:
        """Check whether a trial has run past its end.

        Args:
            now: Current time from the engine clock.

        Returns:
            bool: True only for trials whose end is strictly in the past.
        """
        if not self.is_trial or self.trial_ends_at is None:
            return False
        return now > self.trial_ends_at

    def is_trial_active(self, now: datetime) -> bool:
        """Check whether the trial override currently applies."""
        return (
            self.is_trial
            and self.trial_ends_at is not None
            and not self.is_trial_expired(now)
        )

    def trial_info(self, now: datetime) -> TrialInfo:
        """Compute trial information at ``now``.

        ``days_remaining`` is the ceiling of the remaining time in days, so a
        trial ending in 36 hours reports 2 days.

        Args:
            now: Current time from the engine clock.

        Returns:
            TrialInfo: Trial state (``TrialInfo.none()`` when not a trial).
        """
        if not self.is_trial or self.trial_ends_at is None:
            return TrialInfo.none()

        remaining = self.trial_ends_at - now
        is_expired = remaining < timedelta(0)
        days_remaining = (
            0 if is_expired else math.ceil(remaining / timedelta(days=1))
        )
        return TrialInfo(
            is_on_trial=True,
            trial_ends_at=self.trial_ends_at,
            days_remaining=days_remaining,
            is_expired=is_expired,
        )
