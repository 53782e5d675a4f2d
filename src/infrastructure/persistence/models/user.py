"""User database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - verification_token_hash / password_reset_token_hash: SHA-256 digests
      of single-use tokens (the plaintext only exists in the sent email)
"""

from datetime import datetime

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class User(BaseMutableModel):
    """User model for credentials and verification state.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when user registered (from BaseMutableModel)
        updated_at: Timestamp when user last updated (from BaseMutableModel)
        email: Unique normalized email address (indexed)
        password_hash: Bcrypt hashed password
        is_verified: Email verification status (blocks login if False)
        verification_token_hash: Digest of pending verification token (indexed)
        verification_token_expires_at: Pending verification token expiry
        password_reset_token_hash: Digest of pending reset token (indexed)
        password_reset_token_expires_at: Pending reset token expiry
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Normalized (case-folded) email address",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Email verification status",
    )

    verification_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="SHA-256 digest of the pending verification token",
    )

    verification_token_expires_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    password_reset_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="SHA-256 digest of the pending password reset token",
    )

    password_reset_token_expires_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email!r}, is_verified={self.is_verified})>"
