"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import AuditError, PlanLimitError, RateLimitError
"""

from src.domain.errors.audit_error import AuditError
from src.domain.errors.authentication_error import AuthMessage
from src.domain.errors.plan_limit_error import PlanLimitError
from src.domain.errors.rate_limit_error import RateLimitError

__all__ = [
    "AuditError",
    "AuthMessage",
    "PlanLimitError",
    "RateLimitError",
]
