"""User subscription model.

``user_id`` is unique: a user has exactly one subscription row, rewritten
in place by plan assignments (upsert on user_id).
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class UserSubscription(BaseMutableModel):
    """Subscription row of one user.

    Fields:
        user_id: Owning user (unique, cascade delete)
        plan_id: Subscribed plan
        status: active, cancelled, expired, trial
        is_trial: Trial flag
        trial_ends_at: End of the trial window
        billing_cycle: monthly, annual (nullable)
        billing_reference: External billing reference (nullable, opaque)
        started_at: Start of the current assignment
        expires_at: End of a paid period (nullable)
    """

    __tablename__ = "user_subscriptions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    plan_id: Mapped[UUID] = mapped_column(
        ForeignKey("subscription_plans.id"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    is_trial: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    trial_ends_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    billing_cycle: Mapped[str | None] = mapped_column(String(20), nullable=True)
    billing_reference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("idx_user_subscriptions_trial_end", "is_trial", "trial_ends_at"),
    )
