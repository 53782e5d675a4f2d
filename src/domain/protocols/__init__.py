"""Domain protocols (ports) package.

This package contains protocol definitions that the application layer
depends on. Infrastructure adapters implement these protocols without
inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.
Do NOT re-export from other domain subpackages (entities, value objects) to
avoid circular import risks.

Usage:
    # Import service protocols
    from src.domain.protocols import PasswordHashingProtocol, TokenGenerationProtocol

    # Import repository protocols
    from src.domain.protocols import UserRepository, RefreshTokenRepository
"""

# Service protocols
from src.domain.protocols.audit_protocol import AuditProtocol
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.email_protocol import EmailProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.opaque_token_protocol import OpaqueTokenProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol

# Repository protocols
from src.domain.protocols.rate_limit_repository import (
    RateLimitRecordData,
    RateLimitRepository,
)
from src.domain.protocols.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)
from src.domain.protocols.subscription_repository import SubscriptionRepository
from src.domain.protocols.usage_repository import UsageRepository
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    # Service protocols
    "AuditProtocol",
    "ClockProtocol",
    "EmailProtocol",
    "LoggerProtocol",
    "OpaqueTokenProtocol",
    "PasswordHashingProtocol",
    "TokenGenerationProtocol",
    # Repository protocols
    "RateLimitRecordData",
    "RateLimitRepository",
    "RefreshTokenData",
    "RefreshTokenRepository",
    "SubscriptionRepository",
    "UsageRepository",
    "UserRepository",
]
