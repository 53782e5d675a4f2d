"""Login handler.

Flow:
1. Find user by normalized email
2. Verify password (unknown email and wrong password fail identically)
3. Unverified email: consult the verification rate limit, resend the
   verification email when allowed, fail with EMAIL_NOT_VERIFIED
4. Issue access token + refresh secret
5. Record USER_LOGIN_SUCCESS
6. Return Success(LoginResult)

Login never fails for a rate-limit reason: a denied resend only changes
the EMAIL_NOT_VERIFIED message.
"""

from src.application.commands.auth_commands import LoginUser
from src.application.dtos import LoginResult
from src.application.services import (
    AccountTokenService,
    CredentialTokenService,
    EmailRateLimiter,
)
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success
from src.domain.entities import User
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    AuditProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from src.domain.value_objects import normalize_email


class LoginError:
    """Login-specific failure reasons."""

    USER_NOT_FOUND = "user_not_found"
    INVALID_PASSWORD = "invalid_password"
    EMAIL_NOT_VERIFIED = "email_not_verified"


class LoginUserHandler:
    """Handler for user login command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        rate_limiter: EmailRateLimiter,
        account_tokens: AccountTokenService,
        credential_tokens: CredentialTokenService,
        audit: AuditProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password verification service.
            rate_limiter: Verification email limiter (auto-resend path).
            account_tokens: Verification secret issuer.
            credential_tokens: Access/refresh token issuer.
            audit: Audit sink.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._rate_limiter = rate_limiter
        self._account_tokens = account_tokens
        self._credential_tokens = credential_tokens
        self._audit = audit
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[LoginResult, AuthenticationError]:
        """Handle user login command.

        Returns:
            Success(LoginResult) on successful login.
            Failure(AuthenticationError):
                - INVALID_CREDENTIALS: unknown email or wrong password
                - EMAIL_NOT_VERIFIED: details carry the email and whether a
                  new verification email was sent
        """
        email = normalize_email(cmd.email)

        # Step 1: Find user
        user = await self._user_repo.find_by_email(email)
        if user is None:
            return await self._invalid_credentials(email, None, LoginError.USER_NOT_FOUND)

        # Step 2: Verify password
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            return await self._invalid_credentials(
                email, user, LoginError.INVALID_PASSWORD
            )

        # Step 3: Unverified email, auto-resend within the rate limit
        if not user.is_verified:
            return await self._not_verified(user)

        # Step 4: Issue tokens
        tokens = await self._credential_tokens.issue(user)

        # Step 5: Audit
        await self._audit.record(
            action=AuditAction.USER_LOGIN_SUCCESS,
            message="Login succeeded",
            user_id=user.id,
            user_email=user.email,
        )

        return Success(value=LoginResult(user_id=user.id, email=user.email, tokens=tokens))

    async def _not_verified(self, user: User) -> Failure[AuthenticationError]:
        decision = await self._rate_limiter.check(user.email)
        if decision.allowed:
            await self._account_tokens.issue_verification(user)
            message = AuthMessage.NOT_VERIFIED_RESENT
        else:
            message = AuthMessage.NOT_VERIFIED_RATE_LIMITED

        await self._audit.record(
            action=AuditAction.USER_LOGIN_BLOCKED,
            message=(
                "Login blocked - email not verified, verification email resent"
                if decision.allowed
                else "Login blocked - email not verified, rate limit exceeded"
            ),
            level=LogLevel.WARN,
            user_id=user.id,
            user_email=user.email,
            error_code=ErrorCode.EMAIL_NOT_VERIFIED.value,
            metadata={"verification_resent": decision.allowed},
        )
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.EMAIL_NOT_VERIFIED,
                message=message,
                details={
                    "email": user.email,
                    "verification_resent": "true" if decision.allowed else "false",
                },
            )
        )

    async def _invalid_credentials(
        self, email: str, user: User | None, reason: str
    ) -> Failure[AuthenticationError]:
        await self._audit.record(
            action=AuditAction.USER_LOGIN_FAILED,
            message=f"Login failed: {reason}",
            level=LogLevel.WARN,
            user_id=user.id if user else None,
            user_email=email,
            error_code=ErrorCode.INVALID_CREDENTIALS.value,
        )
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.INVALID_CREDENTIALS,
                message=AuthMessage.INVALID_CREDENTIALS,
            )
        )
