"""Subscription lifecycle status.

Transitions:
    none -> TRIAL -> ACTIVE (downgraded to base plan on trial expiry)
    none -> ACTIVE (default plan)
    ACTIVE <-> CANCELLED
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Status of a user's subscription row."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    TRIAL = "trial"

    @classmethod
    def current_statuses(cls) -> tuple["SubscriptionStatus", ...]:
        """Statuses that grant a plan's entitlements."""
        return (cls.ACTIVE, cls.TRIAL)
