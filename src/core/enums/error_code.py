"""Domain-level error codes (machine-readable).

Values are the stable, caller-facing codes returned to client applications
(the HTTP layer passes them through unchanged), so they are upper snake case.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_*)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, EMAIL_NOT_VERIFIED)
- Throttling errors (RATE_LIMIT_*)
- Entitlement errors (FEATURE_NOT_AVAILABLE, *_LIMIT_REACHED)
- Infrastructure errors (AUDIT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # Resource errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    SUBSCRIPTION_NOT_FOUND = "SUBSCRIPTION_NOT_FOUND"

    # Conflict errors
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    EMAIL_ALREADY_VERIFIED = "EMAIL_ALREADY_VERIFIED"

    # Authentication errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_REUSE_DETECTED = "TOKEN_REUSE_DETECTED"

    # Throttling errors
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Entitlement errors
    FEATURE_NOT_AVAILABLE = "FEATURE_NOT_AVAILABLE"
    DOMAIN_LIMIT_REACHED = "DOMAIN_LIMIT_REACHED"
    TEAM_LIMIT_REACHED = "TEAM_LIMIT_REACHED"
    SMS_LIMIT_REACHED = "SMS_LIMIT_REACHED"
    API_LIMIT_REACHED = "API_LIMIT_REACHED"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "AUDIT_RECORD_FAILED"
