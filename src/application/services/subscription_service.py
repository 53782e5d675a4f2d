"""Subscription and trial state machine.

States per user:

    none -> trial -> active (downgraded to the default plan at trial end)
    none -> active (default plan)
    active <-> cancelled

Trial expiry is applied lazily: ``resolve_effective_plan`` (used by every
entitlement decision) and the trial info query (after reading the stored
trial) call ``check_and_handle_expiration``. ``expire_overdue_trials`` runs
the same transition for every overdue trial and can be scheduled as a sweep so
that users who never make an entitlement call are downgraded too.

``resolve_effective_plan`` is the single place that turns a subscription
row into limits: it owns the "no subscription", "plan row missing" and
"trial override" fallbacks.
"""

from datetime import timedelta
from uuid import UUID

from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import SubscriptionPlan, TrialInfo, UserSubscription
from src.domain.enums import (
    AuditAction,
    BillingCycle,
    PlanSource,
    SubscriptionStatus,
)
from src.domain.protocols import (
    AuditProtocol,
    ClockProtocol,
    LoggerProtocol,
    SubscriptionRepository,
)
from src.domain.value_objects import EffectivePlan


class SubscriptionService:
    """Plan assignment, trial lifecycle and effective plan resolution.

    Attributes:
        default_plan_name: Base plan (assigned by default and after trials).
        trial_plan_name: Plan whose features a trial grants.
        unlimited_plan_name: Tier treated as unlimited in every dimension.
        trial_duration: Length of a trial.
        trial_max_domains: Domain cap while a trial is active.
        trial_max_sms_alerts: Monthly SMS cap while a trial is active.
    """

    def __init__(
        self,
        *,
        subscription_repo: SubscriptionRepository,
        clock: ClockProtocol,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        default_plan_name: str = "starter",
        trial_plan_name: str = "professional",
        unlimited_plan_name: str = "enterprise",
        trial_duration: timedelta = timedelta(days=14),
        trial_max_domains: int = 10,
        trial_max_sms_alerts: int = 10,
    ) -> None:
        self._repo = subscription_repo
        self._clock = clock
        self._audit = audit
        self._logger = logger
        self.default_plan_name = default_plan_name
        self.trial_plan_name = trial_plan_name
        self.unlimited_plan_name = unlimited_plan_name
        self.trial_duration = trial_duration
        self.trial_max_domains = trial_max_domains
        self.trial_max_sms_alerts = trial_max_sms_alerts

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_plans(self) -> list[SubscriptionPlan]:
        """List all plans, cheapest first."""
        return await self._repo.list_plans()

    async def get_user_subscription(self, user_id: UUID) -> UserSubscription | None:
        """Return the user's active or trial subscription, if any."""
        return await self._repo.find_current_by_user(user_id)

    async def get_trial_info(self, user_id: UUID) -> TrialInfo:
        """Compute trial information (pure read, no expiry transition).

        Returns:
            TrialInfo: ``days_remaining`` is the ceiling of remaining days,
                0 once expired. ``TrialInfo.none()`` when not on a trial.
        """
        subscription = await self._repo.find_current_by_user(user_id)
        if subscription is None:
            return TrialInfo.none()
        return subscription.trial_info(self._clock.now())

    async def resolve_effective_plan(self, user_id: UUID) -> EffectivePlan:
        """Resolve the limits that apply to ``user_id`` right now.

        Steps:
            1. Apply trial expiry if due
            2. Load the active/trial subscription (cancelled counts as none)
            3. Load its plan, else the default plan, else built-in defaults
            4. Apply the trial override while a trial is active

        Returns:
            EffectivePlan: Tagged BASE or TRIAL_OVERRIDE.
        """
        await self.check_and_handle_expiration(user_id)

        now = self._clock.now()
        subscription = await self._repo.find_current_by_user(user_id)

        plan: SubscriptionPlan | None = None
        if subscription is not None:
            plan = await self._repo.find_plan_by_name(subscription.plan_name)
        if plan is None:
            plan = await self._repo.find_plan_by_name(self.default_plan_name)

        if plan is None:
            self._logger.warning(
                "plan_reference_data_missing",
                user_id=str(user_id),
                plan=self.default_plan_name,
            )
            effective = self._builtin_default_plan()
        else:
            effective = EffectivePlan.from_plan(
                plan, is_unlimited=plan.name == self.unlimited_plan_name
            )

        if subscription is not None and subscription.is_trial_active(now):
            effective = effective.with_trial_override(
                max_domains=self.trial_max_domains,
                max_sms_alerts=self.trial_max_sms_alerts,
                trial_ends_at=subscription.trial_ends_at,
            )
        return effective

    async def get_check_interval(self, user_id: UUID) -> int:
        """Return the monitoring interval (hours) of the effective plan."""
        effective = await self.resolve_effective_plan(user_id)
        return effective.check_interval_hours

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def assign_default(
        self, user_id: UUID
    ) -> Result[UserSubscription, NotFoundError]:
        """Upsert the user's subscription to the default plan (active).

        Returns:
            Success(UserSubscription) or Failure(NotFoundError) when the
            default plan is not seeded.
        """
        plan = await self._repo.find_plan_by_name(self.default_plan_name)
        if plan is None:
            return Failure(error=self._plan_not_found(self.default_plan_name))

        subscription = await self._repo.upsert(
            user_id=user_id,
            plan_id=plan.id,
            status=SubscriptionStatus.ACTIVE,
            is_trial=False,
            trial_ends_at=None,
            billing_cycle=None,
            now=self._clock.now(),
        )
        await self._audit.record(
            action=AuditAction.PLAN_ASSIGNED,
            message=f"Assigned {plan.name} plan",
            user_id=user_id,
            metadata={"plan": plan.name},
        )
        return Success(value=subscription)

    async def assign_trial(
        self, user_id: UUID
    ) -> Result[UserSubscription, NotFoundError]:
        """Start a trial of the trial plan.

        Falls back to ``assign_default`` when the trial plan is not seeded.

        Returns:
            Success(UserSubscription) with ``is_trial=True`` and
            ``trial_ends_at = now + trial_duration``.
        """
        plan = await self._repo.find_plan_by_name(self.trial_plan_name)
        if plan is None:
            self._logger.warning(
                "trial_plan_missing_assigning_default",
                user_id=str(user_id),
                plan=self.trial_plan_name,
            )
            return await self.assign_default(user_id)

        now = self._clock.now()
        trial_ends_at = now + self.trial_duration
        subscription = await self._repo.upsert(
            user_id=user_id,
            plan_id=plan.id,
            status=SubscriptionStatus.TRIAL,
            is_trial=True,
            trial_ends_at=trial_ends_at,
            billing_cycle=None,
            now=now,
        )
        await self._audit.record(
            action=AuditAction.TRIAL_ASSIGNED,
            message=f"{self.trial_duration.days}-day {plan.name} trial assigned",
            user_id=user_id,
            metadata={"plan": plan.name, "trial_ends_at": trial_ends_at.isoformat()},
        )
        self._logger.info(
            "trial_assigned",
            user_id=str(user_id),
            plan=plan.name,
            trial_ends_at=trial_ends_at.isoformat(),
        )
        return Success(value=subscription)

    async def check_and_handle_expiration(self, user_id: UUID) -> bool:
        """Downgrade an expired trial to the default plan.

        The downgrade is a full-row rewrite conditional on the row still
        being the same trial (``is_trial`` and unchanged ``trial_ends_at``),
        so a concurrent plan change is never overwritten.

        Returns:
            bool: True if this call downgraded the subscription.
        """
        now = self._clock.now()
        subscription = await self._repo.find_current_by_user(user_id)
        if subscription is None or not subscription.is_trial_expired(now):
            return False
        # is_trial_expired guarantees trial_ends_at is set
        expected_trial_ends_at = subscription.trial_ends_at
        if expected_trial_ends_at is None:
            return False

        base_plan = await self._repo.find_plan_by_name(self.default_plan_name)
        if base_plan is None:
            self._logger.error(
                "trial_downgrade_skipped_plan_missing",
                user_id=str(user_id),
                plan=self.default_plan_name,
            )
            return False

        downgraded = await self._repo.downgrade_expired_trial(
            user_id=user_id,
            expected_trial_ends_at=expected_trial_ends_at,
            plan_id=base_plan.id,
            now=now,
        )
        if downgraded:
            await self._audit.record(
                action=AuditAction.TRIAL_EXPIRED,
                message=f"Trial expired; downgraded to {base_plan.name}",
                user_id=user_id,
                metadata={
                    "from_plan": subscription.plan_name,
                    "to_plan": base_plan.name,
                    "trial_ended_at": expected_trial_ends_at.isoformat(),
                },
            )
            self._logger.info(
                "trial_expired_downgraded",
                user_id=str(user_id),
                plan=base_plan.name,
            )
        return downgraded

    async def change_plan(
        self,
        user_id: UUID,
        plan_name: str,
        billing_cycle: BillingCycle | None = None,
    ) -> Result[UserSubscription, NotFoundError]:
        """Move the user to ``plan_name`` (status active, trial cleared).

        Returns:
            Success(UserSubscription) or Failure(NotFoundError) for an
            unknown plan.
        """
        plan = await self._repo.find_plan_by_name(plan_name)
        if plan is None:
            return Failure(error=self._plan_not_found(plan_name))

        previous = await self._repo.find_by_user(user_id)
        subscription = await self._repo.upsert(
            user_id=user_id,
            plan_id=plan.id,
            status=SubscriptionStatus.ACTIVE,
            is_trial=False,
            trial_ends_at=None,
            billing_cycle=billing_cycle,
            now=self._clock.now(),
        )
        await self._audit.record(
            action=AuditAction.PLAN_CHANGED,
            message=f"Plan changed to {plan.name}",
            user_id=user_id,
            metadata={
                "from_plan": previous.plan_name if previous else None,
                "to_plan": plan.name,
                "billing_cycle": billing_cycle.value if billing_cycle else None,
            },
        )
        return Success(value=subscription)

    async def cancel(self, user_id: UUID) -> bool:
        """Cancel an active subscription (trials and cancelled rows untouched).

        Returns:
            bool: True if a row moved from active to cancelled.
        """
        cancelled = await self._repo.cancel_active(user_id, self._clock.now())
        if cancelled:
            await self._audit.record(
                action=AuditAction.SUBSCRIPTION_CANCELLED,
                message="Subscription cancelled",
                user_id=user_id,
            )
        return cancelled

    async def expire_overdue_trials(self) -> int:
        """Apply trial expiry to every overdue trial.

        Returns:
            int: Number of subscriptions downgraded by this sweep.
        """
        user_ids = await self._repo.find_user_ids_with_expired_trials(
            self._clock.now()
        )
        downgraded = 0
        for user_id in user_ids:
            if await self.check_and_handle_expiration(user_id):
                downgraded += 1
        self._logger.info(
            "overdue_trials_expired",
            candidates=len(user_ids),
            downgraded=downgraded,
        )
        return downgraded

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _builtin_default_plan(self) -> EffectivePlan:
        return EffectivePlan(
            plan_name=self.default_plan_name,
            display_name=self.default_plan_name.title(),
            source=PlanSource.BASE,
            is_unlimited=False,
            max_domains=10,
            max_team_members=1,
            check_interval_hours=12,
            api_requests_per_month=None,
            sms_alerts_per_month=0,
            email_alerts=True,
            sms_alerts=False,
            slack_alerts=False,
        )

    def _plan_not_found(self, plan_name: str) -> NotFoundError:
        return NotFoundError(
            code=ErrorCode.PLAN_NOT_FOUND,
            message=f"Plan '{plan_name}' not found",
            resource_type="SubscriptionPlan",
            resource_id=plan_name,
        )

