"""UserRepository protocol for identity persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.

Token lookups:
    Verification and reset tokens are looked up by digest through the
    store's equality lookup. Consuming a token is a conditional write keyed
    on that digest, so a token can be consumed at most once even when two
    requests present it concurrently.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by normalized email address.

        Args:
            email: Normalized (trimmed, case-folded) email.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an identity exists for a normalized email."""
        ...

    async def find_by_verification_token_hash(self, token_hash: str) -> User | None:
        """Find the user holding a pending verification token digest."""
        ...

    async def find_by_reset_token_hash(self, token_hash: str) -> User | None:
        """Find the user holding a pending password reset token digest."""
        ...

    async def create(self, user: User) -> bool:
        """Insert a new user.

        Args:
            user: User entity to persist.

        Returns:
            bool: False if the email is already taken (unique violation),
                True once created.
        """
        ...

    async def set_verification_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        """Store a pending verification token, replacing any previous one."""
        ...

    async def mark_verified(self, user_id: UUID, token_hash: str, now: datetime) -> bool:
        """Mark the user verified and clear the verification token.

        Conditional on the user still holding ``token_hash`` and not yet
        being verified.

        Returns:
            bool: True if this call performed the verification.
        """
        ...

    async def set_password_reset_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        """Store a pending reset token, replacing any previous one."""
        ...

    async def complete_password_reset(
        self,
        user_id: UUID,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Replace the password digest and clear the reset token.

        Conditional on the user still holding ``token_hash``.

        Returns:
            bool: True if this call consumed the reset token.
        """
        ...
