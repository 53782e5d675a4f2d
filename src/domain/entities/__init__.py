"""Domain entities.

Entities carry identity and the business rules that only depend on their
own state (token expiry, trial math). Cross-entity rules live in the
application services.
"""

from src.domain.entities.subscription_plan import SubscriptionPlan
from src.domain.entities.usage_record import UsageRecord
from src.domain.entities.user import User
from src.domain.entities.user_subscription import TrialInfo, UserSubscription

__all__ = [
    "SubscriptionPlan",
    "TrialInfo",
    "UsageRecord",
    "User",
    "UserSubscription",
]
