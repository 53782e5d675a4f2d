"""UsageRepository - SQLAlchemy implementation for monthly usage counters.

Increments are one ``INSERT ... ON CONFLICT (user_id, month_year) DO UPDATE
SET counter = counter + excluded.counter`` statement: parallel increments
never lose updates and the first one of a month creates the record.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.domain.entities.usage_record import UsageRecord
from src.infrastructure.persistence.models.usage_record import (
    UsageRecord as UsageRecordModel,
)
from src.infrastructure.persistence.upsert import upsert_insert


def _to_domain(model: UsageRecordModel) -> UsageRecord:
    """Convert database model to domain entity."""
    return UsageRecord(
        id=model.id,
        user_id=model.user_id,
        month_year=model.month_year,
        api_requests=model.api_requests,
        sms_alerts_sent=model.sms_alerts_sent,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class UsageRepository:
    """SQLAlchemy implementation of UsageRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find(self, user_id: UUID, month_year: str) -> UsageRecord | None:
        """Find the record of a user for a month."""
        stmt = (
            select(UsageRecordModel)
            .where(
                UsageRecordModel.user_id == user_id,
                UsageRecordModel.month_year == month_year,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def ensure_exists(self, user_id: UUID, month_year: str, now: datetime) -> UsageRecord:
        """Return the month's record, creating a zeroed one if missing."""
        stmt = (
            upsert_insert(self.session, UsageRecordModel)
            .values(
                id=uuid7(),
                user_id=user_id,
                month_year=month_year,
                api_requests=0,
                sms_alerts_sent=0,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["user_id", "month_year"])
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return await self._get(user_id, month_year)

    async def increment(
        self,
        user_id: UUID,
        month_year: str,
        *,
        api_requests: int = 0,
        sms_alerts: int = 0,
        now: datetime,
    ) -> UsageRecord:
        """Atomically add to the month's counters (creating the record)."""
        stmt = upsert_insert(self.session, UsageRecordModel).values(
            id=uuid7(),
            user_id=user_id,
            month_year=month_year,
            api_requests=api_requests,
            sms_alerts_sent=sms_alerts,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "month_year"],
            set_={
                "api_requests": UsageRecordModel.api_requests + stmt.excluded.api_requests,
                "sms_alerts_sent": UsageRecordModel.sms_alerts_sent
                + stmt.excluded.sms_alerts_sent,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return await self._get(user_id, month_year)

    async def list_recent(self, user_id: UUID, limit: int) -> list[UsageRecord]:
        """List a user's records, newest month first."""
        stmt = (
            select(UsageRecordModel)
            .where(UsageRecordModel.user_id == user_id)
            .order_by(UsageRecordModel.month_year.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def reset(self, user_id: UUID, month_year: str, now: datetime) -> bool:
        """Zero a month's counters.

        Returns:
            bool: Whether a record existed.
        """
        stmt = (
            update(UsageRecordModel)
            .where(
                UsageRecordModel.user_id == user_id,
                UsageRecordModel.month_year == month_year,
            )
            .values(api_requests=0, sms_alerts_sent=0, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def delete_before(self, month_year: str) -> int:
        """Delete records of months strictly before ``month_year``.

        Returns:
            int: Number of records deleted.
        """
        stmt = (
            delete(UsageRecordModel)
            .where(UsageRecordModel.month_year < month_year)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    async def _get(self, user_id: UUID, month_year: str) -> UsageRecord:
        stmt = (
            select(UsageRecordModel)
            .where(
                UsageRecordModel.user_id == user_id,
                UsageRecordModel.month_year == month_year,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return _to_domain(result.scalar_one())
