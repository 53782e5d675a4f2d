"""Authentication handler factories.

Session-scoped handler instances for the credential lifecycle:
- Registration, email verification, verification resend
- Login, refresh, logout, logout everywhere
- Password reset (request and confirm)

Usage:
    async with get_database().get_session() as session:
        handler = get_login_user_handler(session)
        result = await handler.handle(LoginUser(email=email, password=password))
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from src.application.commands.handlers.login_user_handler import LoginUserHandler
from src.application.commands.handlers.logout_user_handler import (
    LogoutAllSessionsHandler,
    LogoutUserHandler,
)
from src.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from src.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from src.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from src.application.commands.handlers.resend_verification_handler import (
    ResendVerificationHandler,
)
from src.application.commands.handlers.verify_email_handler import VerifyEmailHandler
from src.core.container.infrastructure import (
    get_audit,
    get_clock,
    get_logger,
    get_password_service,
)
from src.core.container.repositories import get_user_repository
from src.core.container.services import (
    get_account_token_service,
    get_credential_token_service,
    get_password_reset_rate_limiter,
    get_verification_rate_limiter,
)


def get_register_user_handler(session: AsyncSession) -> RegisterUserHandler:
    """Get RegisterUser command handler (session-scoped)."""
    return RegisterUserHandler(
        user_repo=get_user_repository(session),
        password_service=get_password_service(),
        account_tokens=get_account_token_service(session),
        clock=get_clock(),
        audit=get_audit(),
        logger=get_logger(),
    )


def get_verify_email_handler(session: AsyncSession) -> VerifyEmailHandler:
    """Get VerifyEmail command handler (session-scoped)."""
    return VerifyEmailHandler(account_tokens=get_account_token_service(session))


def get_resend_verification_handler(
    session: AsyncSession,
) -> ResendVerificationHandler:
    """Get ResendVerification command handler (session-scoped)."""
    return ResendVerificationHandler(
        user_repo=get_user_repository(session),
        rate_limiter=get_verification_rate_limiter(session),
        account_tokens=get_account_token_service(session),
        audit=get_audit(),
    )


def get_login_user_handler(session: AsyncSession) -> LoginUserHandler:
    """Get LoginUser command handler (session-scoped).

    The auto-resend path shares the verification limiter with the resend
    handler, so both consume the same per-email budget.
    """
    return LoginUserHandler(
        user_repo=get_user_repository(session),
        password_service=get_password_service(),
        rate_limiter=get_verification_rate_limiter(session),
        account_tokens=get_account_token_service(session),
        credential_tokens=get_credential_token_service(session),
        audit=get_audit(),
        logger=get_logger(),
    )


def get_refresh_token_handler(session: AsyncSession) -> RefreshAccessTokenHandler:
    """Get RefreshAccessToken command handler (session-scoped)."""
    return RefreshAccessTokenHandler(
        credential_tokens=get_credential_token_service(session)
    )


def get_logout_user_handler(session: AsyncSession) -> LogoutUserHandler:
    """Get LogoutUser command handler (session-scoped)."""
    return LogoutUserHandler(credential_tokens=get_credential_token_service(session))


def get_logout_all_sessions_handler(
    session: AsyncSession,
) -> LogoutAllSessionsHandler:
    """Get LogoutAllSessions command handler (session-scoped)."""
    return LogoutAllSessionsHandler(
        credential_tokens=get_credential_token_service(session)
    )


def get_request_password_reset_handler(
    session: AsyncSession,
) -> RequestPasswordResetHandler:
    """Get RequestPasswordReset command handler (session-scoped)."""
    return RequestPasswordResetHandler(
        user_repo=get_user_repository(session),
        rate_limiter=get_password_reset_rate_limiter(session),
        account_tokens=get_account_token_service(session),
        audit=get_audit(),
    )


def get_confirm_password_reset_handler(
    session: AsyncSession,
) -> ConfirmPasswordResetHandler:
    """Get ConfirmPasswordReset command handler (session-scoped)."""
    return ConfirmPasswordResetHandler(
        account_tokens=get_account_token_service(session)
    )
