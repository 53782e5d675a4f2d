"""Domain enums for business logic.

Enums are centralized here for discoverability and maintainability.

Available Enums:
    - AuditAction: Audit trail action types
    - LogLevel: Audit entry severity
    - SubscriptionStatus: Subscription lifecycle status
    - BillingCycle: Monthly or annual billing
    - PlanSource: Base plan limits or trial override
"""

from src.domain.enums.audit_action import AuditAction
from src.domain.enums.billing_cycle import BillingCycle
from src.domain.enums.log_level import LogLevel
from src.domain.enums.plan_source import PlanSource
from src.domain.enums.subscription_status import SubscriptionStatus

__all__ = [
    "AuditAction",
    "BillingCycle",
    "LogLevel",
    "PlanSource",
    "SubscriptionStatus",
]
