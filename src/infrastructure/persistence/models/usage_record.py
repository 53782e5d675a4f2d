"""Monthly usage record model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class UsageRecord(BaseMutableModel):
    """Counters of one user for one month.

    Constraints:
        - uq_usage_records_user_month: (user_id, month_year), the conflict
          target of the atomic upsert-increment
    """

    __tablename__ = "usage_records"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month_year: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        comment="Month key YYYY-MM (UTC)",
    )
    api_requests: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sms_alerts_sent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "month_year", name="uq_usage_records_user_month"),
    )
