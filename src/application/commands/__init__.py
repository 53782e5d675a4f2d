"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (RegisterUser, ChangePlan).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.auth_commands import (
    ConfirmPasswordReset,
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshAccessToken,
    RegisterUser,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
)
from src.application.commands.subscription_commands import (
    CancelSubscription,
    ChangePlan,
    ExpireOverdueTrials,
)
from src.application.commands.usage_commands import (
    CleanupOldUsage,
    ResetUsage,
    TrackApiRequest,
    TrackSmsAlert,
)

__all__ = [
    # Auth commands
    "ConfirmPasswordReset",
    "LoginUser",
    "LogoutAllSessions",
    "LogoutUser",
    "RefreshAccessToken",
    "RegisterUser",
    "RequestPasswordReset",
    "ResendVerification",
    "VerifyEmail",
    # Subscription commands
    "CancelSubscription",
    "ChangePlan",
    "ExpireOverdueTrials",
    # Usage commands
    "CleanupOldUsage",
    "ResetUsage",
    "TrackApiRequest",
    "TrackSmsAlert",
]
