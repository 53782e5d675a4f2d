"""Rate limit record model (``email_verification_attempts``).

One row per limiter key (``<scope>:<normalized email>``) holding the attempt
counter of the current fixed window.
"""

from datetime import datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, UTCDateTime


class EmailVerificationAttempt(BaseModel):
    """Fixed-window attempt counter.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: First time the key was seen (from BaseModel)
        key: Unique limiter key
        attempt_count: Attempts allowed in the current window
        first_attempt_at: Start of the current window
        last_attempt_at: Last allowed attempt
    """

    __tablename__ = "email_verification_attempts"

    key: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        index=True,
        comment="Scoped, normalized limiter key",
    )

    attempt_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )

    first_attempt_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    last_attempt_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )
