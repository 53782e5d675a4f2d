"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL / SQLite)
- Logging (structlog console/JSON)
- Clock (UTC wall clock)
- Password hashing (bcrypt)
- Token generation (JWT) and opaque secrets
- Email (stub/Brevo)
- Audit trail (database-backed, own session per entry)

Every factory reads ``get_settings()``, so one process serves one
application (one ``APP_NAME``, one database).

Testing:
    Call ``clear_container_cache()`` after changing the environment so the
    next factory call re-reads settings.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        AuditProtocol,
        ClockProtocol,
        EmailProtocol,
        LoggerProtocol,
        OpaqueTokenProtocol,
        PasswordHashingProtocol,
        TokenGenerationProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool. Open a session with
    ``async with get_database().get_session() as session``.

    Returns:
        Database manager instance.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get structured logger singleton (app-scoped).

    JSON output outside development, colored console output in development.

    Returns:
        Logger implementing LoggerProtocol.
    """
    from src.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get the engine clock (UTC wall clock)."""
    from src.infrastructure.clock import SystemClock

    return SystemClock()


@lru_cache()
def get_audit() -> "AuditProtocol":
    """Get audit trail adapter singleton (app-scoped).

    The adapter opens its own session per entry so audit records persist
    regardless of the outcome of the business write that triggered them.

    Returns:
        Audit adapter implementing AuditProtocol.
    """
    from src.infrastructure.audit import DatabaseAuditAdapter

    return DatabaseAuditAdapter(
        database=get_database(),
        logger=get_logger(),
        app_name=get_settings().app_name,
    )


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT token service singleton (app-scoped).

    Returns JWTService with the configured algorithm and expiration.
    """
    from src.infrastructure.security import JWTService

    settings = get_settings()
    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )


@lru_cache()
def get_opaque_token_service() -> "OpaqueTokenProtocol":
    """Get opaque secret generator (refresh, verification, reset secrets)."""
    from src.infrastructure.security import OpaqueTokenService

    return OpaqueTokenService()


# ============================================================================
# Email Service (Application-Scoped)
# ============================================================================


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Container owns factory logic - decides which adapter based on
    EMAIL_BACKEND:
        - stub: StubEmailService (logs links to the console)
        - brevo: BrevoEmailService (Brevo transactional API)

    Returns:
        Email service implementing EmailProtocol.

    Raises:
        ValueError: If the brevo backend is selected without an API key.
    """
    from src.infrastructure.email import BrevoEmailService, StubEmailService

    settings = get_settings()
    if settings.email_backend == "brevo":
        if not settings.brevo_api_key:
            raise ValueError("BREVO_API_KEY is required for the brevo email backend")
        return BrevoEmailService(
            api_key=settings.brevo_api_key,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
            app_url=settings.app_url,
            logger=get_logger(),
        )
    return StubEmailService(logger=get_logger(), app_url=settings.app_url)


def clear_container_cache() -> None:
    """Drop every cached singleton (settings included)."""
    for factory in (
        get_database,
        get_logger,
        get_clock,
        get_audit,
        get_password_service,
        get_token_service,
        get_opaque_token_service,
        get_email_service,
    ):
        factory.cache_clear()
    get_settings.cache_clear()
