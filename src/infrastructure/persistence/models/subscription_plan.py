"""Subscription plan reference data model."""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class SubscriptionPlan(BaseMutableModel):
    """Plan tier with limits and feature flags.

    Seeded by ``seed_subscription_plans`` (upsert by name); never edited by
    the engine at runtime.
    """

    __tablename__ = "subscription_plans"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    price_monthly: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    price_annual: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    max_domains: Mapped[int] = mapped_column(Integer, nullable=False)
    max_team_members: Mapped[int] = mapped_column(Integer, nullable=False)
    check_interval_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    api_requests_per_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sms_alerts_per_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    email_alerts: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sms_alerts: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    slack_alerts: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
