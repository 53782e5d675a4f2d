"""Audit action types for the credential and entitlement trail.

Every significant transition of the engine is recorded with one of these
actions (issue, rotate, reuse detected, limit denied, trial assigned, trial
expired, ...). Action-specific context is stored in the JSON metadata field,
so new actions need no schema change.

Categories:
    - Registration and verification: USER_REGISTERED, EMAIL_*
    - Login: USER_LOGIN_*
    - Session tokens: REFRESH_TOKEN_*
    - Password reset: PASSWORD_RESET_*
    - Subscriptions: TRIAL_*, PLAN_*, SUBSCRIPTION_*
    - Quotas: LIMIT_DENIED, USAGE_RESET

Usage:
    from src.domain.enums import AuditAction

    await audit.record(
        action=AuditAction.REFRESH_TOKEN_REUSE_DETECTED,
        message="Refresh token reuse detected",
        user_id=user_id,
        level=LogLevel.WARN,
    )
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action types.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are snake_case strings for consistency.
    """

    # Registration and verification
    USER_REGISTERED = "user_registered"
    USER_REGISTRATION_FAILED = "user_registration_failed"
    EMAIL_VERIFIED = "email_verified"
    EMAIL_VERIFICATION_FAILED = "email_verification_failed"
    VERIFICATION_EMAIL_SENT = "verification_email_sent"
    VERIFICATION_RATE_LIMITED = "verification_rate_limited"

    # Login
    USER_LOGIN_SUCCESS = "user_login_success"
    USER_LOGIN_FAILED = "user_login_failed"
    USER_LOGIN_BLOCKED = "user_login_blocked"

    # Session tokens
    REFRESH_TOKEN_ISSUED = "refresh_token_issued"
    REFRESH_TOKEN_ROTATED = "refresh_token_rotated"
    REFRESH_TOKEN_REJECTED = "refresh_token_rejected"
    REFRESH_TOKEN_REUSE_DETECTED = "refresh_token_reuse_detected"
    REFRESH_TOKEN_REVOKED = "refresh_token_revoked"
    ALL_SESSIONS_REVOKED = "all_sessions_revoked"

    # Password reset
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET_COMPLETED = "password_reset_completed"
    PASSWORD_RESET_FAILED = "password_reset_failed"

    # Subscriptions
    TRIAL_ASSIGNED = "trial_assigned"
    TRIAL_ASSIGNMENT_FAILED = "trial_assignment_failed"
    TRIAL_EXPIRED = "trial_expired"
    PLAN_ASSIGNED = "plan_assigned"
    PLAN_CHANGED = "plan_changed"
    SUBSCRIPTION_CANCELLED = "subscription_cancelled"

    # Quotas
    LIMIT_DENIED = "limit_denied"
    USAGE_RESET = "usage_reset"
