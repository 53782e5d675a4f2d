"""Repository implementations (SQLAlchemy adapters for domain ports).

Each repository takes an ``AsyncSession`` and maps between database models
and domain dataclasses. Methods commit their own statement so every write
is atomic on its own; no transaction spans two repositories.
"""

from src.infrastructure.persistence.repositories.rate_limit_repository import (
    RateLimitRepository,
)
from src.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from src.infrastructure.persistence.repositories.subscription_repository import (
    SubscriptionRepository,
)
from src.infrastructure.persistence.repositories.usage_repository import (
    UsageRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "RateLimitRepository",
    "RefreshTokenRepository",
    "SubscriptionRepository",
    "UsageRepository",
    "UserRepository",
]
