"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.

Consumption of verification and reset tokens is a conditional UPDATE keyed
on the token digest; ``rowcount`` tells the caller whether it won.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        return await self._find_one(UserModel.id == user_id)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by normalized email address.

        Emails are stored case-folded, so this is an exact (indexed) match.

        Args:
            email: Normalized email address.

        Returns:
            Domain User entity if found, None otherwise.
        """
        return await self._find_one(UserModel.email == email)

    async def exists_by_email(self, email: str) -> bool:
        """Check if user with email exists."""
        stmt = select(UserModel.id).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def find_by_verification_token_hash(self, token_hash: str) -> User | None:
        """Find the user holding a pending verification token digest."""
        return await self._find_one(UserModel.verification_token_hash == token_hash)

    async def find_by_reset_token_hash(self, token_hash: str) -> User | None:
        """Find the user holding a pending password reset token digest."""
        return await self._find_one(UserModel.password_reset_token_hash == token_hash)

    async def create(self, user: User) -> bool:
        """Insert a new user.

        Args:
            user: Domain User entity to persist.

        Returns:
            bool: False if the email is taken (a concurrent registration
                won the unique index), True once created.
        """
        self.session.add(self._to_model(user))
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def set_verification_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        """Store a pending verification token, replacing any previous one."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                verification_token_hash=token_hash,
                verification_token_expires_at=expires_at,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def mark_verified(self, user_id: UUID, token_hash: str, now: datetime) -> bool:
        """Mark the user verified and clear the verification token.

        Returns:
            bool: True if this call performed the verification.
        """
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.verification_token_hash == token_hash,
                UserModel.is_verified.is_(False),
            )
            .values(
                is_verified=True,
                verification_token_hash=None,
                verification_token_expires_at=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def set_password_reset_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        """Store a pending reset token, replacing any previous one."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                password_reset_token_hash=token_hash,
                password_reset_token_expires_at=expires_at,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def complete_password_reset(
        self,
        user_id: UUID,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Replace the password digest and clear the reset token.

        Returns:
            bool: True if this call consumed the reset token.
        """
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.password_reset_token_hash == token_hash,
            )
            .values(
                password_hash=password_hash,
                password_reset_token_hash=None,
                password_reset_token_expires_at=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def _find_one(self, *criteria: object) -> User | None:
        stmt = (
            select(UserModel)
            .where(*criteria)  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity.

        Args:
            user_model: SQLAlchemy UserModel instance.

        Returns:
            Domain User entity.
        """
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            is_verified=user_model.is_verified,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
            verification_token_hash=user_model.verification_token_hash,
            verification_token_expires_at=user_model.verification_token_expires_at,
            password_reset_token_hash=user_model.password_reset_token_hash,
            password_reset_token_expires_at=user_model.password_reset_token_expires_at,
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model.

        Args:
            user: Domain User entity.

        Returns:
            SQLAlchemy UserModel instance.
        """
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            is_verified=user.is_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
            verification_token_hash=user.verification_token_hash,
            verification_token_expires_at=user.verification_token_expires_at,
            password_reset_token_hash=user.password_reset_token_hash,
            password_reset_token_expires_at=user.password_reset_token_expires_at,
        )
