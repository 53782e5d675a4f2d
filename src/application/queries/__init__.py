"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetTrialInfo, ListPlans).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state (apart from lazy trial expiry).
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
from src.application.queries.subscription_queries import (
    GetTrialInfo,
    GetUserSubscription,
    ListPlans,
)

__all__ = [
    # Entitlement queries
    "CheckApiLimit",
    "CheckDomainLimit",
    "CheckSlackAccess",
    "CheckSmsLimit",
    "CheckTeamLimit",
    "GetUsageHistory",
    "GetUsageLimits",
    # Subscription queries
    "GetTrialInfo",
    "GetUserSubscription",
    "ListPlans",
]
