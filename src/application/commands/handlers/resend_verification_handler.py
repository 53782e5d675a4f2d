"""Resend verification email handler.

Flow:
1. Malformed email: generic success (no account can match it)
2. Consume one attempt of the verification rate limit for the email
3. Denied: record VERIFICATION_RATE_LIMITED, return RATE_LIMIT_EXCEEDED
4. Unknown or already verified email: generic success, nothing sent
5. Otherwise issue a new verification secret (overwrites the old one)
6. Return the same generic success message in every allowed case
"""

from src.application.commands.auth_commands import ResendVerification
from src.application.services import AccountTokenService, EmailRateLimiter
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage, RateLimitError
from src.domain.protocols import AuditProtocol, UserRepository
from src.domain.validators import validate_email


class ResendVerificationHandler:
    """Handler for resend verification command."""

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

    async def handle(self, cmd: ResendVerification) -> Result[str, RateLimitError]:
        """Handle resend verification command.

        Returns:
            Success(message) with a generic message that never reveals
            whether the email is registered. Failure(RateLimitError) when
            the per-email limit is exhausted.
        """
        try:
            email = validate_email(cmd.email)
        except ValueError:
            return Success(value=AuthMessage.VERIFICATION_SENT)

        decision = await self._rate_limiter.check(email)
        if not decision.allowed:
            await self._audit.record(
                action=AuditAction.VERIFICATION_RATE_LIMITED,
                message="Verification email rate limit exceeded",
                level=LogLevel.WARN,
                user_email=email,
                error_code=ErrorCode.RATE_LIMIT_EXCEEDED.value,
                metadata={"attempts": decision.attempts},
            )
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_EXCEEDED,
                    message=AuthMessage.RATE_LIMITED,
                    retry_after_seconds=decision.retry_after_seconds,
                )
            )

        user = await self._user_repo.find_by_email(email)
        if user is not None and not user.is_verified:
            await self._account_tokens.issue_verification(user)

        return Success(value=AuthMessage.VERIFICATION_SENT)
