"""Registration handler.

Flow:
1. Validate and normalize email, validate password
2. Check email uniqueness
3. Hash password
4. Create User (unverified)
5. Issue verification secret and email it
6. Record USER_REGISTERED
7. Return Success(RegistrationResult)

On failure:
- Record USER_REGISTRATION_FAILED
- Return Failure(error)

Architecture:
- Application layer ONLY imports from domain layer and application services
- NO infrastructure imports (repositories are injected via protocols)
"""

from uuid_extensions import uuid7

from src.application.commands.auth_commands import RegisterUser
from src.application.dtos import RegistrationResult
from src.application.services import AccountTokenService
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import User
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    AuditProtocol,
    ClockProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from src.domain.validators import validate_email, validate_password


class RegistrationError:
    """Registration-specific failure reasons."""

    EMAIL_ALREADY_EXISTS = "email_already_registered"
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        account_tokens: AccountTokenService,
        clock: ClockProtocol,
        audit: AuditProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            account_tokens: Verification secret issuer.
            clock: Time source.
            audit: Audit sink.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._account_tokens = account_tokens
        self._clock = clock
        self._audit = audit
        self._logger = logger

    async def handle(
        self, cmd: RegisterUser
    ) -> Result[RegistrationResult, ValidationError | ConflictError]:
        """Handle user registration command.

        Returns:
            Success(RegistrationResult) on successful registration.
            Failure(ValidationError) for a malformed email or password.
            Failure(ConflictError) when the email is already registered.

        Side Effects:
            - Creates User in database
            - Stores verification token digest and sends the email
        """
        # Step 1: Validate input
        try:
            email = validate_email(cmd.email)
        except ValueError as e:
            await self._record_failure(cmd.email, RegistrationError.INVALID_EMAIL)
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_EMAIL, message=str(e), field="email"
                )
            )
        try:
            validate_password(cmd.password)
        except ValueError as e:
            await self._record_failure(email, RegistrationError.INVALID_PASSWORD)
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PASSWORD, message=str(e), field="password"
                )
            )

        # Step 2: Check email uniqueness
        if await self._user_repo.exists_by_email(email):
            return await self._email_taken(email)

        # Step 3-4: Hash password, create user
        now = self._clock.now()
        user = User(
            id=uuid7(),
            email=email,
            password_hash=self._password_service.hash_password(cmd.password),
            is_verified=False,
            created_at=now,
            updated_at=now,
        )
        if not await self._user_repo.create(user):
            # Concurrent registration won the unique index
            return await self._email_taken(email)

        # Step 5: Issue verification secret
        await self._account_tokens.issue_verification(user)

        # Step 6: Audit
        await self._audit.record(
            action=AuditAction.USER_REGISTERED,
            message="User registered",
            user_id=user.id,
            user_email=email,
        )
        self._logger.info("user_registered", user_id=str(user.id))

        return Success(
            value=RegistrationResult(
                user_id=user.id, email=email, message=AuthMessage.REGISTERED
            )
        )

    async def _email_taken(self, email: str) -> Failure[ConflictError]:
        await self._record_failure(email, RegistrationError.EMAIL_ALREADY_EXISTS)
        return Failure(
            error=ConflictError(
                code=ErrorCode.EMAIL_ALREADY_REGISTERED,
                message=AuthMessage.EMAIL_ALREADY_REGISTERED,
                resource_type="User",
                conflicting_field="email",
            )
        )

    async def _record_failure(self, email: str, reason: str) -> None:
        await self._audit.record(
            action=AuditAction.USER_REGISTRATION_FAILED,
            message=f"Registration failed: {reason}",
            level=LogLevel.WARN,
            user_email=email,
            metadata={"reason": reason},
        )
