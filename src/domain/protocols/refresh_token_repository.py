"""RefreshTokenRepository protocol (port) for domain layer.

Token Lifecycle:
    1. Created on every login and every successful rotation
    2. Looked up by digest on refresh (revoked rows included, so that
       presenting a rotated-away secret can be detected as reuse)
    3. Revoked on rotation, logout, password reset or reuse detection
    4. Deleted only by the unscoped maintenance purge

All state changes are one-way (there is no un-revoke) and every revoke is a
single conditional UPDATE, so concurrent rotations of one token produce at
most one winner.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass
class RefreshTokenData:
    """Data transfer object for refresh token information.

    Used by protocol methods to return token data without
    exposing infrastructure model classes to application layers.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    revoked: bool
    revoked_at: datetime | None
    revoked_reason: str | None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Whether the token's expiry has passed."""
        return self.expires_at <= now


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence operations.

    Implementations:
        - RefreshTokenRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> RefreshTokenData:
        """Create a new, non-revoked refresh token record.

        Args:
            user_id: Owning identity.
            token_hash: SHA-256 digest of the secret (never the secret).
            expires_at: Token expiration timestamp.
            now: Creation time.

        Returns:
            Created RefreshTokenData.
        """
        ...

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find a refresh token by digest, revoked or not.

        Does NOT check expiration - caller must verify expires_at.
        """
        ...

    async def revoke_if_active(self, token_id: UUID, reason: str, now: datetime) -> bool:
        """Revoke one token if it is not revoked yet.

        Single conditional write (``WHERE id = :id AND revoked = false``).

        Returns:
            bool: True if this call revoked the token, False if it was
                already revoked (a concurrent rotation or logout won).
        """
        ...

    async def revoke_by_token_hash(self, token_hash: str, reason: str, now: datetime) -> bool:
        """Revoke the active token with this digest.

        Returns:
            bool: Whether a token was revoked.
        """
        ...

    async def revoke_all_for_user(self, user_id: UUID, reason: str, now: datetime) -> int:
        """Revoke every non-revoked token of an identity.

        Args:
            user_id: Identity whose token family is revoked.
            reason: Revocation reason (audit trail), e.g. "token_reuse",
                "password_reset", "logout_all".
            now: Revocation time.

        Returns:
            int: Number of tokens revoked.
        """
        ...

    async def delete_stale(self, now: datetime) -> int:
        """Delete tokens that are expired or revoked.

        Returns:
            int: Number of tokens deleted.
        """
        ...
