"""RateLimitRepository - SQLAlchemy implementation for fixed-window records.

Stored in ``email_verification_attempts``. Each method is one atomic
statement naming the state it expects; the limiter service combines them.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.domain.protocols.rate_limit_repository import RateLimitRecordData
from src.infrastructure.persistence.models.email_verification_attempt import (
    EmailVerificationAttempt,
)
from src.infrastructure.persistence.upsert import upsert_insert


class RateLimitRepository:
    """SQLAlchemy implementation of RateLimitRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find(self, key: str) -> RateLimitRecordData | None:
        """Read the record for a key."""
        stmt = (
            select(EmailVerificationAttempt)
            .where(EmailVerificationAttempt.key == key)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return RateLimitRecordData(
            key=model.key,
            attempt_count=model.attempt_count,
            first_attempt_at=model.first_attempt_at,
            last_attempt_at=model.last_attempt_at,
        )

    async def create_if_absent(self, key: str, now: datetime) -> bool:
        """Create a record with counter=1 (INSERT ... ON CONFLICT DO NOTHING).

        Returns:
            bool: True if this call created the record.
        """
        stmt = (
            upsert_insert(self.session, EmailVerificationAttempt)
            .values(
                id=uuid7(),
                key=key,
                attempt_count=1,
                first_attempt_at=now,
                last_attempt_at=now,
                created_at=now,
            )
            .on_conflict_do_nothing(index_elements=["key"])
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def reset_window(
        self,
        key: str,
        expected_first_attempt_at: datetime,
        now: datetime,
    ) -> bool:
        """Start a new window if nobody else has since the read.

        Returns:
            bool: True if the window was reset by this call.
        """
        stmt = (
            update(EmailVerificationAttempt)
            .where(
                EmailVerificationAttempt.key == key,
                EmailVerificationAttempt.first_attempt_at == expected_first_attempt_at,
            )
            .values(attempt_count=1, first_attempt_at=now, last_attempt_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def increment_within_window(
        self,
        key: str,
        expected_first_attempt_at: datetime,
        max_attempts: int,
        now: datetime,
    ) -> bool:
        """Take one slot of the current window if still below the cap.

        Returns:
            bool: True if the counter was incremented.
        """
        stmt = (
            update(EmailVerificationAttempt)
            .where(
                EmailVerificationAttempt.key == key,
                EmailVerificationAttempt.first_attempt_at == expected_first_attempt_at,
                EmailVerificationAttempt.attempt_count < max_attempts,
            )
            .values(
                attempt_count=EmailVerificationAttempt.attempt_count + 1,
                last_attempt_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1
