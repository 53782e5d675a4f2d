"""Database models for persistence layer.

SQLAlchemy models that map to database tables. These are infrastructure
concerns and should not be imported by the domain or application layers.

Models Organization:
    - user.py: Identity with pending verification/reset digests
    - refresh_token.py: Refresh token records
    - email_verification_attempt.py: Fixed-window rate limit records
    - subscription_plan.py: Plan reference data
    - user_subscription.py: One subscription row per user
    - usage_record.py: Monthly usage counters
    - audit_log.py: Audit trail (append-only)

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    They are separate and mapped via the repository layer.
"""

from src.infrastructure.persistence.models.audit_log import AuditLog
from src.infrastructure.persistence.models.email_verification_attempt import (
    EmailVerificationAttempt,
)
from src.infrastructure.persistence.models.refresh_token import RefreshToken
from src.infrastructure.persistence.models.subscription_plan import SubscriptionPlan
from src.infrastructure.persistence.models.usage_record import UsageRecord
from src.infrastructure.persistence.models.user import User
from src.infrastructure.persistence.models.user_subscription import UserSubscription

__all__ = [
    "AuditLog",
    "EmailVerificationAttempt",
    "RefreshToken",
    "SubscriptionPlan",
    "UsageRecord",
    "User",
    "UserSubscription",
]
