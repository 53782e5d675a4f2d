"""Repository dependency factories.

Session-scoped repository instances. Repositories built for one unit of
work share the caller's session.

Usage:
    async with get_database().get_session() as session:
        user_repo = get_user_repository(session)
        user = await user_repo.find_by_email("user@example.com")
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.repositories import (
    RateLimitRepository,
    RefreshTokenRepository,
    SubscriptionRepository,
    UsageRepository,
    UserRepository,
)


def get_user_repository(session: AsyncSession) -> UserRepository:
    """Get user repository (session-scoped)."""
    return UserRepository(session=session)


def get_refresh_token_repository(session: AsyncSession) -> RefreshTokenRepository:
    """Get refresh token repository (session-scoped)."""
    return RefreshTokenRepository(session=session)


def get_rate_limit_repository(session: AsyncSession) -> RateLimitRepository:
    """Get rate limit record repository (session-scoped)."""
    return RateLimitRepository(session=session)


def get_subscription_repository(session: AsyncSession) -> SubscriptionRepository:
    """Get subscription and plan repository (session-scoped)."""
    return SubscriptionRepository(session=session)


def get_usage_repository(session: AsyncSession) -> UsageRepository:
    """Get monthly usage repository (session-scoped)."""
    return UsageRepository(session=session)
