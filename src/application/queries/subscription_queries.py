"""Subscription queries (CQRS read operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListPlans:
    """List all subscription plans, cheapest first."""


@dataclass(frozen=True, kw_only=True)
class GetUserSubscription:
    """Get the user's active or trial subscription.

    Attributes:
        user_id: User identifier.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class GetTrialInfo:
    """Get trial state and remaining days for a user.

    Attributes:
        user_id: User identifier.
    """

    user_id: UUID
