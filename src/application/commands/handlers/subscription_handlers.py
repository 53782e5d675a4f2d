"""Subscription command handlers.

Thin handlers over SubscriptionService: each maps one command to one
state-machine transition and wraps the outcome in a Result.
"""

from src.application.commands.subscription_commands import (
    CancelSubscription,
    ChangePlan,
    ExpireOverdueTrials,
)
from src.application.services import SubscriptionService
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import UserSubscription


class ChangePlanHandler:
    """Handler for plan changes (upgrade, downgrade, trial conversion)."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(self, cmd: ChangePlan) -> Result[UserSubscription, NotFoundError]:
        """Handle change plan command.

        Returns:
            Success(UserSubscription) with status active and no trial.
            Failure(NotFoundError) PLAN_NOT_FOUND for an unknown plan.
        """
        return await self._subscriptions.change_plan(
            cmd.user_id, cmd.plan_name, cmd.billing_cycle
        )


class CancelSubscriptionHandler:
    """Handler for subscription cancellation."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(self, cmd: CancelSubscription) -> Result[None, NotFoundError]:
        """Handle cancel command.

        Returns:
            Success(None) when an active subscription was cancelled.
            Failure(NotFoundError) when the user has no active subscription
            (trials and already cancelled rows are left untouched).
        """
        if await self._subscriptions.cancel(cmd.user_id):
            return Success(value=None)
        return Failure(
            error=NotFoundError(
                code=ErrorCode.SUBSCRIPTION_NOT_FOUND,
                message="No active subscription to cancel",
                resource_type="UserSubscription",
                resource_id=str(cmd.user_id),
            )
        )


class ExpireOverdueTrialsHandler:
    """Handler for the trial expiry sweep."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(self, cmd: ExpireOverdueTrials) -> Result[int, None]:
        """Downgrade every overdue trial.

        Returns:
            Success(count) with the number of subscriptions downgraded.
        """
        return Success(value=await self._subscriptions.expire_overdue_trials())
