"""Engine service factories.

Session-scoped service instances wired from settings and the
app-scoped infrastructure singletons. Services built for one unit of work
share the caller's session through their repositories.
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services import (
    AccountTokenService,
    CredentialTokenService,
    EmailRateLimiter,
    QuotaService,
    SubscriptionService,
    UsageService,
)
from src.core.config import get_settings
from src.core.constants import (
    PASSWORD_RESET_RATE_LIMIT_SCOPE,
    VERIFICATION_RATE_LIMIT_SCOPE,
)
from src.core.container.infrastructure import (
    get_audit,
    get_clock,
    get_email_service,
    get_logger,
    get_opaque_token_service,
    get_password_service,
    get_token_service,
)
from src.core.container.repositories import (
    get_rate_limit_repository,
    get_refresh_token_repository,
    get_subscription_repository,
    get_usage_repository,
    get_user_repository,
)
from src.domain.value_objects import RateLimitRule


def _email_rate_limit_rule() -> RateLimitRule:
    settings = get_settings()
    return RateLimitRule(
        max_attempts=settings.verification_rate_limit_max_attempts,
        window=timedelta(minutes=settings.verification_rate_limit_window_minutes),
    )


def get_verification_rate_limiter(session: AsyncSession) -> EmailRateLimiter:
    """Get the verification email limiter (``verification:`` keys)."""
    return EmailRateLimiter(
        rate_limit_repo=get_rate_limit_repository(session),
        rule=_email_rate_limit_rule(),
        scope=VERIFICATION_RATE_LIMIT_SCOPE,
        clock=get_clock(),
        logger=get_logger(),
    )


def get_password_reset_rate_limiter(session: AsyncSession) -> EmailRateLimiter:
    """Get the password reset email limiter (``password_reset:`` keys)."""
    return EmailRateLimiter(
        rate_limit_repo=get_rate_limit_repository(session),
        rule=_email_rate_limit_rule(),
        scope=PASSWORD_RESET_RATE_LIMIT_SCOPE,
        clock=get_clock(),
        logger=get_logger(),
    )


def get_subscription_service(session: AsyncSession) -> SubscriptionService:
    """Get the subscription and trial state machine."""
    settings = get_settings()
    return SubscriptionService(
        subscription_repo=get_subscription_repository(session),
        clock=get_clock(),
        audit=get_audit(),
        logger=get_logger(),
        default_plan_name=settings.default_plan_name,
        trial_plan_name=settings.trial_plan_name,
        unlimited_plan_name=settings.unlimited_plan_name,
        trial_duration=timedelta(days=settings.trial_duration_days),
        trial_max_domains=settings.trial_max_domains,
        trial_max_sms_alerts=settings.trial_max_sms_alerts,
    )


def get_usage_service(session: AsyncSession) -> UsageService:
    """Get the monthly usage tracker."""
    return UsageService(
        usage_repo=get_usage_repository(session),
        clock=get_clock(),
        audit=get_audit(),
        logger=get_logger(),
    )


def get_quota_service(session: AsyncSession) -> QuotaService:
    """Get the quota enforcement engine."""
    return QuotaService(
        subscription_service=get_subscription_service(session),
        usage_service=get_usage_service(session),
        audit=get_audit(),
        logger=get_logger(),
        upgrade_url=get_settings().upgrade_url,
    )


def get_credential_token_service(session: AsyncSession) -> CredentialTokenService:
    """Get the refresh-token family manager."""
    return CredentialTokenService(
        refresh_token_repo=get_refresh_token_repository(session),
        user_repo=get_user_repository(session),
        token_service=get_token_service(),
        opaque_token_service=get_opaque_token_service(),
        clock=get_clock(),
        audit=get_audit(),
        logger=get_logger(),
        refresh_token_ttl=timedelta(days=get_settings().refresh_token_expire_days),
    )


def get_account_token_service(session: AsyncSession) -> AccountTokenService:
    """Get the verification and password reset secret manager."""
    settings = get_settings()
    return AccountTokenService(
        user_repo=get_user_repository(session),
        opaque_token_service=get_opaque_token_service(),
        password_service=get_password_service(),
        email_service=get_email_service(),
        credential_tokens=get_credential_token_service(session),
        subscription_service=get_subscription_service(session),
        clock=get_clock(),
        audit=get_audit(),
        logger=get_logger(),
        verification_ttl=timedelta(hours=settings.verification_token_expire_hours),
        reset_ttl=timedelta(hours=settings.password_reset_token_expire_hours),
    )
