"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Every revocation is a single ``UPDATE ... WHERE revoked = false`` whose
``rowcount`` reports whether this caller performed it. Two concurrent
rotations of one token therefore see exactly one ``True``.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.domain.protocols.refresh_token_repository import RefreshTokenData
from src.infrastructure.persistence.models.refresh_token import RefreshToken


def _to_data(model: RefreshToken) -> RefreshTokenData:
    """Convert database model to domain DTO."""
    return RefreshTokenData(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        expires_at=model.expires_at,
        revoked=model.revoked,
        revoked_at=model.revoked_at,
        revoked_reason=model.revoked_reason,
        created_at=model.created_at,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation for refresh token persistence.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     token = await repo.find_by_token_hash(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> RefreshTokenData:
        """Create new refresh token in database.

        Args:
            user_id: User's unique identifier.
            token_hash: SHA-256 digest of the refresh token.
            expires_at: Token expiration timestamp.
            now: Creation time.

        Returns:
            Created RefreshTokenData.
        """
        token_model = RefreshToken(
            id=uuid7(),
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            revoked=False,
            created_at=now,
            updated_at=now,
        )
        self.session.add(token_model)
        await self.session.commit()
        return _to_data(token_model)

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find refresh token by digest, including revoked tokens.

        Args:
            token_hash: SHA-256 digest of the presented secret.

        Returns:
            RefreshTokenData if found, None otherwise.
        """
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        token_model = result.scalar_one_or_none()
        return _to_data(token_model) if token_model else None

    async def revoke_if_active(self, token_id: UUID, reason: str, now: datetime) -> bool:
        """Revoke one token if it is not revoked yet.

        Returns:
            bool: True if this call revoked the token.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == token_id, RefreshToken.revoked.is_(False))
            .values(revoked=True, revoked_at=now, revoked_reason=reason, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def revoke_by_token_hash(self, token_hash: str, reason: str, now: datetime) -> bool:
        """Revoke the active token with this digest (logout).

        Returns:
            bool: Whether a token was revoked.
        """
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.token_hash == token_hash,
                RefreshToken.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=now, revoked_reason=reason, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def revoke_all_for_user(self, user_id: UUID, reason: str, now: datetime) -> int:
        """Revoke every non-revoked token of a user.

        Args:
            user_id: User's unique identifier.
            reason: Reason for revocation (for audit trail).
            now: Revocation time.

        Returns:
            int: Number of tokens revoked.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked.is_(False))
            .values(revoked=True, revoked_at=now, revoked_reason=reason, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    async def delete_stale(self, now: datetime) -> int:
        """Delete tokens that are expired or revoked.

        Returns:
            int: Number of tokens deleted.
        """
        stmt = (
            delete(RefreshToken)
            .where(or_(RefreshToken.expires_at <= now, RefreshToken.revoked.is_(True)))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
