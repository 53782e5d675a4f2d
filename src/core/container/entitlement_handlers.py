"""Subscription, usage and entitlement handler factories.

Session-scoped handler instances for the entitlement side of the engine:
- Plan changes, cancellation, trial expiry sweep
- Usage tracking and maintenance
- Quota checks, usage report, trial info, plan listing
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.handlers.subscription_handlers import (
    CancelSubscriptionHandler,
    ChangePlanHandler,
    ExpireOverdueTrialsHandler,
)
from src.application.commands.handlers.usage_handlers import (
    CleanupOldUsageHandler,
    ResetUsageHandler,
    TrackApiRequestHandler,
    TrackSmsAlertHandler,
)
from src.application.queries.handlers.entitlement_handlers import (
    CheckApiLimitHandler,
    CheckDomainLimitHandler,
    CheckSlackAccessHandler,
    CheckSmsLimitHandler,
    CheckTeamLimitHandler,
    GetUsageHistoryHandler,
    GetUsageLimitsHandler,
)
from src.application.queries.handlers.subscription_handlers import (
    GetTrialInfoHandler,
    GetUserSubscriptionHandler,
    ListPlansHandler,
)
from src.core.container.services import (
    get_quota_service,
    get_subscription_service,
    get_usage_service,
)


# ============================================================================
# Subscription Commands
# ============================================================================


def get_change_plan_handler(session: AsyncSession) -> ChangePlanHandler:
    return ChangePlanHandler(subscription_service=get_subscription_service(session))


def get_cancel_subscription_handler(session: AsyncSession) -> CancelSubscriptionHandler:
    return CancelSubscriptionHandler(
        subscription_service=get_subscription_service(session)
    )


def get_expire_overdue_trials_handler(
    session: AsyncSession,
) -> ExpireOverdueTrialsHandler:
    return ExpireOverdueTrialsHandler(
        subscription_service=get_subscription_service(session)
    )


# ============================================================================
# Usage Commands
# ============================================================================


def get_track_api_request_handler(session: AsyncSession) -> TrackApiRequestHandler:
    return TrackApiRequestHandler(usage_service=get_usage_service(session))


def get_track_sms_alert_handler(session: AsyncSession) -> TrackSmsAlertHandler:
    return TrackSmsAlertHandler(usage_service=get_usage_service(session))


def get_reset_usage_handler(session: AsyncSession) -> ResetUsageHandler:
    return ResetUsageHandler(usage_service=get_usage_service(session))


def get_cleanup_old_usage_handler(session: AsyncSession) -> CleanupOldUsageHandler:
    return CleanupOldUsageHandler(usage_service=get_usage_service(session))


# ============================================================================
# Entitlement Queries
# ============================================================================


def get_check_domain_limit_handler(session: AsyncSession) -> CheckDomainLimitHandler:
    return CheckDomainLimitHandler(quota_service=get_quota_service(session))


def get_check_team_limit_handler(session: AsyncSession) -> CheckTeamLimitHandler:
    return CheckTeamLimitHandler(quota_service=get_quota_service(session))


def get_check_sms_limit_handler(session: AsyncSession) -> CheckSmsLimitHandler:
    return CheckSmsLimitHandler(quota_service=get_quota_service(session))


def get_check_api_limit_handler(session: AsyncSession) -> CheckApiLimitHandler:
    return CheckApiLimitHandler(quota_service=get_quota_service(session))


def get_check_slack_access_handler(session: AsyncSession) -> CheckSlackAccessHandler:
    return CheckSlackAccessHandler(quota_service=get_quota_service(session))


def get_usage_limits_handler(session: AsyncSession) -> GetUsageLimitsHandler:
    return GetUsageLimitsHandler(quota_service=get_quota_service(session))


def get_usage_history_handler(session: AsyncSession) -> GetUsageHistoryHandler:
    return GetUsageHistoryHandler(usage_service=get_usage_service(session))


# ============================================================================
# Subscription Queries
# ============================================================================


def get_trial_info_handler(session: AsyncSession) -> GetTrialInfoHandler:
    return GetTrialInfoHandler(subscription_service=get_subscription_service(session))


def get_user_subscription_handler(session: AsyncSession) -> GetUserSubscriptionHandler:
    return GetUserSubscriptionHandler(
        subscription_service=get_subscription_service(session)
    )


def get_list_plans_handler(session: AsyncSession) -> ListPlansHandler:
    return ListPlansHandler(subscription_service=get_subscription_service(session))
