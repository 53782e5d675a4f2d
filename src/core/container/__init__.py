"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_database, get_login_user_handler

The container is organized into modules by lifetime and domain:
- infrastructure: App-scoped singletons (db, logging, security, email, audit)
- repositories: Session-scoped repository factories
- services: Session-scoped engine services
- auth_handlers: Credential lifecycle handler factories
- entitlement_handlers: Subscription/usage/quota handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    clear_container_cache,
    get_audit,
    get_clock,
    get_database,
    get_email_service,
    get_logger,
    get_opaque_token_service,
    get_password_service,
    get_token_service,
)

# Repositories
from src.core.container.repositories import (
    get_rate_limit_repository,
    get_refresh_token_repository,
    get_subscription_repository,
    get_usage_repository,
    get_user_repository,
)

# Services
from src.core.container.services import (
    get_account_token_service,
    get_credential_token_service,
    get_password_reset_rate_limiter,
    get_quota_service,
    get_subscription_service,
    get_usage_service,
    get_verification_rate_limiter,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_confirm_password_reset_handler,
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_user_handler,
    get_refresh_token_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_resend_verification_handler,
    get_verify_email_handler,
)

# Entitlement handlers
from src.core.container.entitlement_handlers import (
    get_cancel_subscription_handler,
    get_change_plan_handler,
    get_check_api_limit_handler,
    get_check_domain_limit_handler,
    get_check_slack_access_handler,
    get_check_sms_limit_handler,
    get_check_team_limit_handler,
    get_cleanup_old_usage_handler,
    get_expire_overdue_trials_handler,
    get_list_plans_handler,
    get_reset_usage_handler,
    get_track_api_request_handler,
    get_track_sms_alert_handler,
    get_trial_info_handler,
    get_usage_history_handler,
    get_usage_limits_handler,
    get_user_subscription_handler,
)

__all__ = [
    # Infrastructure
    "clear_container_cache",
    "get_audit",
    "get_clock",
    "get_database",
    "get_email_service",
    "get_logger",
    "get_opaque_token_service",
    "get_password_service",
    "get_token_service",
    # Repositories
    "get_rate_limit_repository",
    "get_refresh_token_repository",
    "get_subscription_repository",
    "get_usage_repository",
    "get_user_repository",
    # Services
    "get_account_token_service",
    "get_credential_token_service",
    "get_password_reset_rate_limiter",
    "get_quota_service",
    "get_subscription_service",
    "get_usage_service",
    "get_verification_rate_limiter",
    # Auth handlers
    "get_confirm_password_reset_handler",
    "get_login_user_handler",
    "get_logout_all_sessions_handler",
    "get_logout_user_handler",
    "get_refresh_token_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    "get_resend_verification_handler",
    "get_verify_email_handler",
    # Entitlement handlers
    "get_cancel_subscription_handler",
    "get_change_plan_handler",
    "get_check_api_limit_handler",
    "get_check_domain_limit_handler",
    "get_check_slack_access_handler",
    "get_check_sms_limit_handler",
    "get_check_team_limit_handler",
    "get_cleanup_old_usage_handler",
    "get_expire_overdue_trials_handler",
    "get_list_plans_handler",
    "get_reset_usage_handler",
    "get_track_api_request_handler",
    "get_track_sms_alert_handler",
    "get_trial_info_handler",
    "get_usage_history_handler",
    "get_usage_limits_handler",
    "get_user_subscription_handler",
]
