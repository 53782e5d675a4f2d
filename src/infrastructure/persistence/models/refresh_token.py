"""Refresh token database model.

Security:
    - token_hash: SHA-256 digest of the opaque secret (NOT plaintext)
    - revoked: one-way flag set on rotation, logout, password reset or
      reuse detection; rotation flips it with a conditional UPDATE
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class RefreshToken(BaseMutableModel):
    """Refresh token model for the rotation flow.

    Token Lifecycle:
        1. Created on login and on each rotation
        2. Revoked when rotated away, logged out, or family-revoked
        3. Expires naturally after the configured number of days
        4. Deleted only by the maintenance purge

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Issue time (from BaseMutableModel)
        updated_at: Last state change (from BaseMutableModel)
        user_id: Owning user (cascade delete)
        token_hash: SHA-256 digest (unique, indexed for lookup)
        expires_at: Expiry timestamp
        revoked: Revocation flag
        revoked_at: When revoked
        revoked_reason: rotated, logout, logout_all, password_reset, token_reuse

    Indexes:
        - idx_refresh_tokens_user_active: (user_id, revoked) for family revocation
        - token_hash unique index for lookup
        - expires_at index for the purge
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this refresh token",
    )

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 digest of the refresh token",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True,
    )

    revoked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    revoked_reason: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_refresh_tokens_user_active", "user_id", "revoked"),
    )

    def __repr__(self) -> str:
        """String representation for debugging (digest omitted)."""
        return (
            f"<RefreshToken(id={self.id}, user_id={self.user_id}, "
            f"revoked={self.revoked})>"
        )
