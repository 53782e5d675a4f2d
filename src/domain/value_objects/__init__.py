"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.effective_plan import EffectivePlan
from src.domain.value_objects.email import Email, normalize_email
from src.domain.value_objects.rate_limit_rule import RateLimitDecision, RateLimitRule
from src.domain.value_objects.usage_limits import (
    DimensionUsage,
    FeatureFlags,
    UsageLimits,
)

__all__ = [
    "DimensionUsage",
    "EffectivePlan",
    "Email",
    "FeatureFlags",
    "RateLimitDecision",
    "RateLimitRule",
    "UsageLimits",
    "normalize_email",
]
