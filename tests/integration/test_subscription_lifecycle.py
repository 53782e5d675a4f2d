"""Integration tests for the subscription and trial state machine.

Tests cover:
- Plan catalogue seeding
- Trial assignment at verification, default assignment
- Lazy trial expiry (boundary: strictly after trial end)
- Overdue trial sweep
- One subscription row per user across reassignments
- Plan change clears the trial, cancellation
- Effective plan fallbacks
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from src.application.commands.handlers.subscription_handlers import (
    CancelSubscriptionHandler,
    ChangePlanHandler,
)
from src.application.commands.subscription_commands import (
    CancelSubscription,
    ChangePlan,
)
from src.application.queries import GetTrialInfo
from src.application.queries.handlers.subscription_handlers import GetTrialInfoHandler
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AuditAction, BillingCycle, PlanSource, SubscriptionStatus
from src.infrastructure.persistence.models import UserSubscription as UserSubscriptionModel
from src.infrastructure.persistence.seeds import seed_subscription_plans
from tests.utils.fakes import DEFAULT_NOW
from tests.utils.flows import register, register_verified


@pytest.mark.integration
class TestPlanCatalogue:
    """Test seeded reference data."""

    async def test_three_plans_cheapest_first(self, engine):
        plans = await engine.subscriptions.list_plans()

        assert [plan.name for plan in plans] == ["starter", "professional", "enterprise"]

    async def test_seeding_is_idempotent(self, engine, session):
        await seed_subscription_plans(session)

        assert len(await engine.subscriptions.list_plans()) == 3


@pytest.mark.integration
class TestAssignment:
    """Test trial and default assignment."""

    async def test_unverified_user_has_no_subscription(self, engine):
        user = await register(engine)

        assert await engine.subscriptions.get_user_subscription(user.id) is None
        plan = await engine.subscriptions.resolve_effective_plan(user.id)
        assert plan.plan_name == "starter"
        assert plan.source == PlanSource.BASE

    async def test_assign_default(self, engine):
        user = await register(engine)

        result = await engine.subscriptions.assign_default(user.id)

        assert isinstance(result, Success)
        assert result.value.plan_name == "starter"
        assert result.value.status == SubscriptionStatus.ACTIVE
        assert result.value.is_trial is False

    async def test_trial_info_during_trial(self, engine, doubles):
        user = await register_verified(engine, doubles)

        doubles.clock.advance(days=3, hours=12)
        info = await engine.subscriptions.get_trial_info(user.id)

        assert info.is_on_trial is True
        assert info.trial_ends_at == DEFAULT_NOW + timedelta(days=14)
        assert info.days_remaining == 11
        assert info.is_expired is False

    async def test_one_subscription_row_per_user(self, engine, session, doubles):
        # Arrange
        user = await register(engine)
        first = await engine.subscriptions.assign_trial(user.id)

        # Act
        await engine.subscriptions.change_plan(user.id, "professional", BillingCycle.MONTHLY)
        last = await engine.subscriptions.assign_default(user.id)

        # Assert
        count = await session.scalar(
            select(func.count())
            .select_from(UserSubscriptionModel)
            .where(UserSubscriptionModel.user_id == user.id)
        )
        assert count == 1
        assert last.value.id == first.value.id
        assert last.value.plan_name == "starter"
        assert last.value.is_trial is False


@pytest.mark.integration
class TestTrialExpiry:
    """Test lazy and swept trial expiry."""

    async def test_trial_still_active_at_exact_end(self, engine, doubles):
        user = await register_verified(engine, doubles)

        doubles.clock.advance(days=14)

        assert await engine.subscriptions.check_and_handle_expiration(user.id) is False
        plan = await engine.subscriptions.resolve_effective_plan(user.id)
        assert plan.source == PlanSource.TRIAL_OVERRIDE

    async def test_expired_trial_downgrades_lazily(self, engine, doubles):
        # Arrange
        user = await register_verified(engine, doubles)
        doubles.clock.advance(days=14, seconds=1)

        # Act
        plan = await engine.subscriptions.resolve_effective_plan(user.id)

        # Assert
        assert plan.plan_name == "starter"
        assert plan.source == PlanSource.BASE
        subscription = await engine.subscriptions.get_user_subscription(user.id)
        assert subscription.is_trial is False
        assert subscription.trial_ends_at is None
        assert subscription.status == SubscriptionStatus.ACTIVE
        entry = doubles.audit.last(AuditAction.TRIAL_EXPIRED)
        assert entry.metadata["to_plan"] == "starter"

    async def test_expiry_transition_happens_once(self, engine, doubles):
        user = await register_verified(engine, doubles)
        doubles.clock.advance(days=15)

        first = await engine.subscriptions.check_and_handle_expiration(user.id)
        second = await engine.subscriptions.check_and_handle_expiration(user.id)

        assert (first, second) == (True, False)
        assert doubles.audit.actions().count(AuditAction.TRIAL_EXPIRED) == 1

    async def test_trial_info_query_reports_expired_trial(self, engine, doubles):
        # Arrange
        user = await register_verified(engine, doubles)
        doubles.clock.advance(days=15)
        handler = GetTrialInfoHandler(subscription_service=engine.subscriptions)

        # Act
        result = await handler.handle(GetTrialInfo(user_id=user.id))

        # Assert
        assert isinstance(result, Success)
        assert result.value.is_on_trial is True
        assert result.value.is_expired is True
        assert result.value.days_remaining == 0
        subscription = await engine.subscriptions.get_user_subscription(user.id)
        assert subscription.plan_name == "starter"
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.is_trial is False
        assert doubles.audit.actions().count(AuditAction.TRIAL_EXPIRED) == 1

    async def test_sweep_downgrades_every_overdue_trial(self, engine, doubles):
        early = await register_verified(engine, doubles, "early@example.com")
        doubles.clock.advance(days=10)
        late = await register_verified(engine, doubles, "late@example.com")
        doubles.clock.advance(days=5)

        downgraded = await engine.subscriptions.expire_overdue_trials()

        assert downgraded == 1
        assert (await engine.subscriptions.get_user_subscription(early.id)).is_trial is False
        assert (await engine.subscriptions.get_user_subscription(late.id)).is_trial is True


@pytest.mark.integration
class TestPlanChanges:
    """Test plan changes and cancellation."""

    async def test_change_plan_clears_trial(self, engine, doubles):
        user = await register_verified(engine, doubles)
        handler = ChangePlanHandler(subscription_service=engine.subscriptions)

        result = await handler.handle(
            ChangePlan(
                user_id=user.id,
                plan_name="enterprise",
                billing_cycle=BillingCycle.ANNUAL,
            )
        )

        assert isinstance(result, Success)
        assert result.value.plan_name == "enterprise"
        assert result.value.is_trial is False
        assert result.value.trial_ends_at is None
        assert result.value.billing_cycle == BillingCycle.ANNUAL
        doubles.clock.advance(days=30)
        assert await engine.subscriptions.check_and_handle_expiration(user.id) is False
        plan = await engine.subscriptions.resolve_effective_plan(user.id)
        assert plan.is_unlimited is True

    async def test_change_to_unknown_plan(self, engine):
        user = await register(engine)
        handler = ChangePlanHandler(subscription_service=engine.subscriptions)

        result = await handler.handle(ChangePlan(user_id=user.id, plan_name="platinum"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PLAN_NOT_FOUND

    async def test_cancel_active_subscription(self, engine):
        user = await register(engine)
        await engine.subscriptions.change_plan(user.id, "professional")
        handler = CancelSubscriptionHandler(subscription_service=engine.subscriptions)

        result = await handler.handle(CancelSubscription(user_id=user.id))

        assert isinstance(result, Success)
        assert await engine.subscriptions.get_user_subscription(user.id) is None
        stored = await engine.subscription_repo.find_by_user(user.id)
        assert stored.status == SubscriptionStatus.CANCELLED
        plan = await engine.subscriptions.resolve_effective_plan(user.id)
        assert plan.plan_name == "starter"

    async def test_cancel_leaves_trial_untouched(self, engine, doubles):
        user = await register_verified(engine, doubles)
        handler = CancelSubscriptionHandler(subscription_service=engine.subscriptions)

        result = await handler.handle(CancelSubscription(user_id=user.id))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SUBSCRIPTION_NOT_FOUND
        assert (await engine.subscriptions.get_user_subscription(user.id)).is_trial is True

    async def test_check_interval_follows_plan(self, engine, doubles):
        user = await register(engine)
        assert await engine.subscriptions.get_check_interval(user.id) == 12

        await engine.subscriptions.change_plan(user.id, "professional")

        assert await engine.subscriptions.get_check_interval(user.id) == 1
