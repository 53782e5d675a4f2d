"""User (identity) domain entity.

Pure business logic, no framework dependencies.

Pending tokens:
    Email verification and password reset tokens are single-use and
    time-boxed. Only their SHA-256 digests are stored on the user; the
    plaintext secret exists only in the email sent to the user.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """User domain entity.

    Business Rules:
        - Email is unique and stored normalized (trimmed, case-folded)
        - Email verification required before login
        - Verification fields cleared on successful verification
        - Reset fields cleared after a successful reset

    Attributes:
        id: Unique user identifier
        email: Normalized email address
        password_hash: Bcrypt hashed password (never plaintext)
        is_verified: Email verification status (blocks login if False)
        created_at: Timestamp when user was created
        updated_at: Timestamp when user was last updated
        verification_token_hash: Digest of the pending verification token
        verification_token_expires_at: Expiry of the pending verification token
        password_reset_token_hash: Digest of the pending reset token
        password_reset_token_expires_at: Expiry of the pending reset token

    Example:
        >>> user = User(
        ...     id=uuid7(),
        ...     email="user@example.com",
        ...     password_hash="$2b$12$...",
        ...     is_verified=False,
        ...     created_at=now,
        ...     updated_at=now,
        ... )
        >>> user.is_verification_token_expired(now)
        False
    """

    id: UUID
    email: str
    password_hash: str
    is_verified: bool
    created_at: datetime
    updated_at: datetime

    verification_token_hash: str | None = None
    verification_token_expires_at: datetime | None = None
    password_reset_token_hash: str | None = None
    password_reset_token_expires_at: datetime | None = None

    def is_verification_token_expired(self, now: datetime) -> bool:
        """Check whether the pending verification token has expired.

        A token without an expiry never expires (legacy rows).

        Args:
            now: Current time from the engine clock.

        Returns:
            bool: True if the token's expiry is in the past.
        """
        if self.verification_token_expires_at is None:
            return False
        return self.verification_token_expires_at < now

    def is_reset_token_expired(self, now: datetime) -> bool:
        """Check whether the pending password reset token has expired.

        Args:
            now: Current time from the engine clock.

        Returns:
            bool: True if the token's expiry is in the past.
        """
        if self.password_reset_token_expires_at is None:
            return False
        return self.password_reset_token_expires_at < now
