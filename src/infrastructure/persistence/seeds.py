"""Subscription plan reference data.

Seeding is idempotent: plans are upserted by name, so re-running it after a
limit change updates the existing rows in place.

Plans:
    starter ($19/month): 10 domains, 1 team member, 12h checks, email
        alerts only (no API access, no SMS, no Slack)
    professional ($59/month): 40 domains, 5 team members, 1h checks,
        5,000 API requests and 100 SMS per month, email/SMS/Slack alerts
    enterprise ($149/month): unlimited (stored as 999999 / NULL)
"""

from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.core.constants import UNLIMITED_QUOTA
from src.infrastructure.persistence.models.subscription_plan import SubscriptionPlan
from src.infrastructure.persistence.upsert import upsert_insert

PLAN_SEEDS: list[dict[str, Any]] = [
    {
        "name": "starter",
        "display_name": "Starter",
        "price_monthly": Decimal("19.00"),
        "price_annual": Decimal("180.00"),
        "max_domains": 10,
        "max_team_members": 1,
        "check_interval_hours": 12,
        "api_requests_per_month": None,
        "sms_alerts_per_month": 0,
        "email_alerts": True,
        "sms_alerts": False,
        "slack_alerts": False,
    },
    {
        "name": "professional",
        "display_name": "Professional",
        "price_monthly": Decimal("59.00"),
        "price_annual": Decimal("564.00"),
        "max_domains": 40,
        "max_team_members": 5,
        "check_interval_hours": 1,
        "api_requests_per_month": 5000,
        "sms_alerts_per_month": 100,
        "email_alerts": True,
        "sms_alerts": True,
        "slack_alerts": True,
    },
    {
        "name": "enterprise",
        "display_name": "Enterprise",
        "price_monthly": Decimal("149.00"),
        "price_annual": Decimal("1788.00"),
        "max_domains": UNLIMITED_QUOTA,
        "max_team_members": UNLIMITED_QUOTA,
        "check_interval_hours": 1,
        "api_requests_per_month": None,
        "sms_alerts_per_month": None,
        "email_alerts": True,
        "sms_alerts": True,
        "slack_alerts": True,
    },
]


async def seed_subscription_plans(session: AsyncSession) -> int:
    """Upsert every plan of ``PLAN_SEEDS`` by name.

    Args:
        session: Database session.

    Returns:
        int: Number of plans written.
    """
    for plan in PLAN_SEEDS:
        stmt = upsert_insert(session, SubscriptionPlan).values(id=uuid7(), **plan)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                column: getattr(stmt.excluded, column)
                for column in plan
                if column != "name"
            },
        )
        await session.execute(stmt)
    await session.commit()
    return len(PLAN_SEEDS)
