"""Subscription query handlers."""

from src.application.queries.subscription_queries import (
    GetTrialInfo,
    GetUserSubscription,
    ListPlans,
)
from src.application.services import SubscriptionService
from src.core.result import Result, Success
from src.domain.entities import SubscriptionPlan, TrialInfo, UserSubscription


class ListPlansHandler:
    """Handler for listing subscription plans."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(self, query: ListPlans) -> Result[list[SubscriptionPlan], None]:
        return Success(value=await self._subscriptions.list_plans())


class GetUserSubscriptionHandler:
    """Handler for fetching the user's current subscription."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(
        self, query: GetUserSubscription
    ) -> Result[UserSubscription | None, None]:
        """Handle get subscription query.

        Returns:
            Success(UserSubscription) for an active or trial row,
            Success(None) when the user has none (or it was cancelled).
        """
        return Success(
            value=await self._subscriptions.get_user_subscription(query.user_id)
        )


class GetTrialInfoHandler:
    """Handler for trial information.

    Reports the trial as stored (an ended trial reads ``is_expired=True``,
    ``days_remaining=0``), then applies the due downgrade to the base plan.
    """

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._subscriptions = subscription_service

    async def handle(self, query: GetTrialInfo) -> Result[TrialInfo, None]:
        """Handle trial info query.

        Returns:
            Success(TrialInfo) with ``is_on_trial``, ``trial_ends_at`` and
            ``days_remaining`` (ceiling of remaining days), read before the
            expiry transition.
        """
        info = await self._subscriptions.get_trial_info(query.user_id)
        await self._subscriptions.check_and_handle_expiration(query.user_id)
        return Success(value=info)
