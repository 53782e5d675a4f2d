"""SubscriptionRepository - SQLAlchemy implementation for plans and subscriptions.

Plan assignment is ``INSERT ... ON CONFLICT (user_id) DO UPDATE`` rewriting
every mutable column, so the one-row-per-user invariant holds under
concurrent assignments. The trial downgrade is a conditional full-row
UPDATE.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.domain.entities.subscription_plan import SubscriptionPlan
from src.domain.entities.user_subscription import UserSubscription
from src.domain.enums import BillingCycle, SubscriptionStatus
from src.infrastructure.persistence.models.subscription_plan import (
    SubscriptionPlan as SubscriptionPlanModel,
)
from src.infrastructure.persistence.models.user_subscription import (
    UserSubscription as UserSubscriptionModel,
)
from src.infrastructure.persistence.upsert import upsert_insert


def _plan_to_domain(model: SubscriptionPlanModel) -> SubscriptionPlan:
    """Convert plan model to domain entity."""
    return SubscriptionPlan(
        id=model.id,
        name=model.name,
        display_name=model.display_name,
        price_monthly=model.price_monthly,
        price_annual=model.price_annual,
        max_domains=model.max_domains,
        max_team_members=model.max_team_members,
        check_interval_hours=model.check_interval_hours,
        api_requests_per_month=model.api_requests_per_month,
        sms_alerts_per_month=model.sms_alerts_per_month,
        email_alerts=model.email_alerts,
        sms_alerts=model.sms_alerts,
        slack_alerts=model.slack_alerts,
    )


def _subscription_to_domain(
    model: UserSubscriptionModel, plan_name: str
) -> UserSubscription:
    """Convert subscription model (plus joined plan name) to domain entity."""
    return UserSubscription(
        id=model.id,
        user_id=model.user_id,
        plan_id=model.plan_id,
        plan_name=plan_name,
        status=SubscriptionStatus(model.status),
        is_trial=model.is_trial,
        trial_ends_at=model.trial_ends_at,
        billing_cycle=BillingCycle(model.billing_cycle) if model.billing_cycle else None,
        billing_reference=model.billing_reference,
        started_at=model.started_at,
        expires_at=model.expires_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SubscriptionRepository:
    """SQLAlchemy implementation of SubscriptionRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def list_plans(self) -> list[SubscriptionPlan]:
        """List all plans, cheapest first."""
        stmt = select(SubscriptionPlanModel).order_by(
            SubscriptionPlanModel.price_monthly, SubscriptionPlanModel.name
        )
        result = await self.session.execute(stmt)
        return [_plan_to_domain(model) for model in result.scalars().all()]

    async def find_plan_by_name(self, name: str) -> SubscriptionPlan | None:
        """Find a plan by its unique name."""
        stmt = select(SubscriptionPlanModel).where(SubscriptionPlanModel.name == name)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _plan_to_domain(model) if model else None

    async def find_current_by_user(self, user_id: UUID) -> UserSubscription | None:
        """Find the user's subscription when its status is active or trial."""
        statuses = [status.value for status in SubscriptionStatus.current_statuses()]
        return await self._find_for_user(
            user_id, UserSubscriptionModel.status.in_(statuses)
        )

    async def find_by_user(self, user_id: UUID) -> UserSubscription | None:
        """Find the user's subscription regardless of status."""
        return await self._find_for_user(user_id)

    async def upsert(
        self,
        *,
        user_id: UUID,
        plan_id: UUID,
        status: SubscriptionStatus,
        is_trial: bool,
        trial_ends_at: datetime | None,
        billing_cycle: BillingCycle | None,
        now: datetime,
    ) -> UserSubscription:
        """Insert or fully rewrite the user's subscription row."""
        stmt = upsert_insert(self.session, UserSubscriptionModel).values(
            id=uuid7(),
            user_id=user_id,
            plan_id=plan_id,
            status=status.value,
            is_trial=is_trial,
            trial_ends_at=trial_ends_at,
            billing_cycle=billing_cycle.value if billing_cycle else None,
            billing_reference=None,
            started_at=now,
            expires_at=None,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "plan_id": stmt.excluded.plan_id,
                "status": stmt.excluded.status,
                "is_trial": stmt.excluded.is_trial,
                "trial_ends_at": stmt.excluded.trial_ends_at,
                "billing_cycle": stmt.excluded.billing_cycle,
                "billing_reference": stmt.excluded.billing_reference,
                "started_at": stmt.excluded.started_at,
                "expires_at": stmt.excluded.expires_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return await self._get_for_user(user_id)

    async def downgrade_expired_trial(
        self,
        *,
        user_id: UUID,
        expected_trial_ends_at: datetime,
        plan_id: UUID,
        now: datetime,
    ) -> bool:
        """Rewrite an expired trial row to the base plan (full-row replace).

        Returns:
            bool: True if this call downgraded the row.
        """
        stmt = (
            update(UserSubscriptionModel)
            .where(
                UserSubscriptionModel.user_id == user_id,
                UserSubscriptionModel.is_trial.is_(True),
                UserSubscriptionModel.trial_ends_at == expected_trial_ends_at,
            )
            .values(
                plan_id=plan_id,
                status=SubscriptionStatus.ACTIVE.value,
                is_trial=False,
                trial_ends_at=None,
                billing_cycle=None,
                billing_reference=None,
                started_at=now,
                expires_at=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def cancel_active(self, user_id: UUID, now: datetime) -> bool:
        """Move an ``active`` row to ``cancelled``.

        Returns:
            bool: True if a row was cancelled.
        """
        stmt = (
            update(UserSubscriptionModel)
            .where(
                UserSubscriptionModel.user_id == user_id,
                UserSubscriptionModel.status == SubscriptionStatus.ACTIVE.value,
            )
            .values(status=SubscriptionStatus.CANCELLED.value, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def find_user_ids_with_expired_trials(self, now: datetime) -> list[UUID]:
        """List users whose trial end has passed but are still on trial."""
        stmt = select(UserSubscriptionModel.user_id).where(
            UserSubscriptionModel.is_trial.is_(True),
            UserSubscriptionModel.trial_ends_at < now,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _get_for_user(self, user_id: UUID) -> UserSubscription:
        result = await self.session.execute(self._select_for_user(user_id))
        model, plan_name = result.one()
        return _subscription_to_domain(model, plan_name)

    async def _find_for_user(
        self, user_id: UUID, *criteria: object
    ) -> UserSubscription | None:
        result = await self.session.execute(self._select_for_user(user_id, *criteria))
        row = result.one_or_none()
        if row is None:
            return None
        model, plan_name = row
        return _subscription_to_domain(model, plan_name)

    def _select_for_user(self, user_id: UUID, *criteria: object) -> Select[Any]:
        return (
            select(UserSubscriptionModel, SubscriptionPlanModel.name)
            .join(
                SubscriptionPlanModel,
                SubscriptionPlanModel.id == UserSubscriptionModel.plan_id,
            )
            .where(UserSubscriptionModel.user_id == user_id, *criteria)  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
