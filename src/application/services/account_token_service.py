"""Verification and password reset token manager.

Both flows use single-use, time-boxed opaque secrets:

    - A new secret overwrites any pending one on the user row
    - Only the SHA-256 digest and its expiry are stored
    - Lookup is by digest equality in the store
    - Consumption is a conditional UPDATE on the consumed digest, so a
      secret can be used once even under concurrent requests

Verification hands off to the subscription state machine to start a trial.
That second write is independent: if it fails the user stays verified and
the failure is logged and audited.

A successful password reset revokes every refresh token of the user.
"""

from datetime import timedelta

from src.application.dtos import VerificationResult
from src.application.services.credential_token_service import (
    CredentialTokenService,
    RevocationReason,
)
from src.application.services.subscription_service import SubscriptionService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, ConflictError
from src.core.result import Failure, Result, Success
from src.domain.entities import User
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    AuditProtocol,
    ClockProtocol,
    EmailProtocol,
    LoggerProtocol,
    OpaqueTokenProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class AccountTokenService:
    """Issues and consumes verification and password reset secrets.

    Attributes:
        verification_ttl: Lifetime of a verification secret (24h default).
        reset_ttl: Lifetime of a reset secret (1h default).
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        opaque_token_service: OpaqueTokenProtocol,
        password_service: PasswordHashingProtocol,
        email_service: EmailProtocol,
        credential_tokens: CredentialTokenService,
        subscription_service: SubscriptionService,
        clock: ClockProtocol,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        verification_ttl: timedelta = timedelta(hours=24),
        reset_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self._user_repo = user_repo
        self._opaque = opaque_token_service
        self._password_service = password_service
        self._email = email_service
        self._credential_tokens = credential_tokens
        self._subscriptions = subscription_service
        self._clock = clock
        self._audit = audit
        self._logger = logger
        self.verification_ttl = verification_ttl
        self.reset_ttl = reset_ttl

    # ------------------------------------------------------------------
    # Email verification
    # ------------------------------------------------------------------

    async def issue_verification(self, user: User) -> bool:
        """Store a new verification secret and email it.

        Returns:
            bool: Whether the email sender accepted the message. A delivery
                failure keeps the stored secret (the user can ask again).
        """
        now = self._clock.now()
        secret, digest = self._opaque.generate()
        await self._user_repo.set_verification_token(
            user.id, digest, now + self.verification_ttl, now
        )

        sent = await self._email.send_verification(user.email, secret)
        await self._audit.record(
            action=AuditAction.VERIFICATION_EMAIL_SENT,
            message="Verification email sent" if sent else "Verification email failed",
            level=LogLevel.INFO if sent else LogLevel.ERROR,
            user_id=user.id,
            user_email=user.email,
            metadata={"delivered": sent},
        )
        return sent

    async def consume_verification(
        self, secret: str
    ) -> Result[VerificationResult, AuthenticationError | ConflictError]:
        """Verify the user owning ``secret`` and start their trial.

        Returns:
            Success(VerificationResult) on verification (even when the
            trial could not be assigned).
            Failure(AuthenticationError): INVALID_TOKEN or TOKEN_EXPIRED.
            Failure(ConflictError): EMAIL_ALREADY_VERIFIED.
        """
        now = self._clock.now()
        digest = self._opaque.digest(secret)
        user = await self._user_repo.find_by_verification_token_hash(digest)

        if user is None:
            return await self._verification_failed(
                None, ErrorCode.INVALID_TOKEN, AuthMessage.INVALID_VERIFICATION_TOKEN
            )

        if user.is_verified:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_VERIFIED,
                    message=AuthMessage.EMAIL_ALREADY_VERIFIED,
                    resource_type="User",
                    conflicting_field="is_verified",
                )
            )

        if user.is_verification_token_expired(now):
            return await self._verification_failed(
                user, ErrorCode.TOKEN_EXPIRED, AuthMessage.VERIFICATION_TOKEN_EXPIRED
            )

        if not await self._user_repo.mark_verified(user.id, digest, now):
            # Consumed concurrently
            return await self._verification_failed(
                user, ErrorCode.INVALID_TOKEN, AuthMessage.INVALID_VERIFICATION_TOKEN
            )

        await self._audit.record(
            action=AuditAction.EMAIL_VERIFIED,
            message="Email verified",
            user_id=user.id,
            user_email=user.email,
        )

        trial_assigned = await self._start_trial(user)
        return Success(
            value=VerificationResult(
                user_id=user.id,
                email=user.email,
                trial_assigned=trial_assigned,
                message=AuthMessage.EMAIL_VERIFIED,
            )
        )

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    async def issue_reset(self, user: User) -> bool:
        """Store a new reset secret and email it.

        Returns:
            bool: Whether the email sender accepted the message.
        """
        now = self._clock.now()
        secret, digest = self._opaque.generate()
        await self._user_repo.set_password_reset_token(
            user.id, digest, now + self.reset_ttl, now
        )

        sent = await self._email.send_password_reset(user.email, secret)
        await self._audit.record(
            action=AuditAction.PASSWORD_RESET_REQUESTED,
            message="Password reset email sent" if sent else "Password reset email failed",
            level=LogLevel.INFO if sent else LogLevel.ERROR,
            user_id=user.id,
            user_email=user.email,
            metadata={"delivered": sent},
        )
        return sent

    async def consume_reset(
        self, secret: str, new_password: str
    ) -> Result[None, AuthenticationError]:
        """Replace the password of the user owning ``secret``.

        The new password must already be validated by the caller.

        Returns:
            Success(None) after the password changed and every session was
            revoked. Failure(AuthenticationError): INVALID_TOKEN or
            TOKEN_EXPIRED.
        """
        now = self._clock.now()
        digest = self._opaque.digest(secret)
        user = await self._user_repo.find_by_reset_token_hash(digest)

        if user is None:
            return await self._reset_failed(
                None, ErrorCode.INVALID_TOKEN, AuthMessage.INVALID_RESET_TOKEN
            )

        if user.is_reset_token_expired(now):
            return await self._reset_failed(
                user, ErrorCode.TOKEN_EXPIRED, AuthMessage.RESET_TOKEN_EXPIRED
            )

        password_hash = self._password_service.hash_password(new_password)
        if not await self._user_repo.complete_password_reset(
            user.id, digest, password_hash, now
        ):
            return await self._reset_failed(
                user, ErrorCode.INVALID_TOKEN, AuthMessage.INVALID_RESET_TOKEN
            )

        revoked = await self._credential_tokens.revoke_all(
            user.id, RevocationReason.PASSWORD_RESET
        )
        await self._audit.record(
            action=AuditAction.PASSWORD_RESET_COMPLETED,
            message="Password reset completed",
            user_id=user.id,
            user_email=user.email,
            metadata={"revoked_sessions": revoked},
        )
        return Success(value=None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _start_trial(self, user: User) -> bool:
        try:
            result = await self._subscriptions.assign_trial(user.id)
        except Exception as e:
            # Verification stays committed; only report the trial failure.
            self._logger.error(
                "trial_assignment_failed", error=e, user_id=str(user.id)
            )
            await self._audit.record(
                action=AuditAction.TRIAL_ASSIGNMENT_FAILED,
                message=f"Trial assignment failed: {type(e).__name__}",
                level=LogLevel.ERROR,
                user_id=user.id,
                user_email=user.email,
            )
            return False

        if isinstance(result, Failure):
            self._logger.error(
                "trial_assignment_failed",
                user_id=str(user.id),
                reason=result.error.message,
            )
            await self._audit.record(
                action=AuditAction.TRIAL_ASSIGNMENT_FAILED,
                message=result.error.message,
                level=LogLevel.ERROR,
                user_id=user.id,
                user_email=user.email,
                error_code=result.error.code.value,
            )
            return False
        return True

    async def _verification_failed(
        self, user: User | None, code: ErrorCode, message: str
    ) -> Failure[AuthenticationError]:
        await self._audit.record(
            action=AuditAction.EMAIL_VERIFICATION_FAILED,
            message=message,
            level=LogLevel.WARN,
            user_id=user.id if user else None,
            user_email=user.email if user else None,
            error_code=code.value,
        )
        return Failure(error=AuthenticationError(code=code, message=message))

    async def _reset_failed(
        self, user: User | None, code: ErrorCode, message: str
    ) -> Failure[AuthenticationError]:
        await self._audit.record(
            action=AuditAction.PASSWORD_RESET_FAILED,
            message=message,
            level=LogLevel.WARN,
            user_id=user.id if user else None,
            user_email=user.email if user else None,
            error_code=code.value,
        )
        return Failure(error=AuthenticationError(code=code, message=message))
