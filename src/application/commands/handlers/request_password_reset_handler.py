"""Request password reset handler.

Flow:
1. Malformed email: stop (no account can match it)
2. Consume one attempt of the password reset rate limit for the email
3. Denied: record it and stop (still generic success)
4. Known email: issue a reset secret and email it
5. Return the generic success message in every case

The response never reveals whether the email is registered or throttled.
"""

from src.application.commands.auth_commands import RequestPasswordReset
from src.application.services import AccountTokenService, EmailRateLimiter
from src.core.enums import ErrorCode
from src.core.result import Result, Success
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage
from src.domain.protocols import AuditProtocol, UserRepository
from src.domain.validators import validate_email


class RequestPasswordResetHandler:
    """Handler for password reset request command."""

    def __init__(
        self,
        user_repo: UserRepository,
        rate_limiter: EmailRateLimiter,
        account_tokens: AccountTokenService,
        audit: AuditProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._rate_limiter = rate_limiter
        self._account_tokens = account_tokens
        self._audit = audit

    async def handle(self, cmd: RequestPasswordReset) -> Result[str, None]:
        """Handle password reset request.

        Returns:
            Success(message): always the same generic message.
        """
        try:
            email = validate_email(cmd.email)
        except ValueError:
            return Success(value=AuthMessage.RESET_REQUESTED)

        decision = await self._rate_limiter.check(email)
        if not decision.allowed:
            await self._audit.record(
                action=AuditAction.PASSWORD_RESET_REQUESTED,
                message="Password reset rate limit exceeded",
                level=LogLevel.WARN,
                user_email=email,
                error_code=ErrorCode.RATE_LIMIT_EXCEEDED.value,
                metadata={"attempts": decision.attempts},
            )
            return Success(value=AuthMessage.RESET_REQUESTED)

        user = await self._user_repo.find_by_email(email)
        if user is not None:
            await self._account_tokens.issue_reset(user)

        return Success(value=AuthMessage.RESET_REQUESTED)
