"""Credential token manager: refresh-token families with reuse detection.

Every login or refresh issues a short-lived JWT access token and a
long-lived opaque refresh secret. Only the SHA-256 digest of the secret is
stored. A refresh secret is single-use:

    active -> revoked (rotated)
    active -> revoked (logout)
    active -> revoked (reuse cascade)
    active -> expired (time-based, implicit)

Presenting a secret whose record is already revoked is a theft signal:
every token of that user is revoked and the caller must re-authenticate.

Rotation race:
    ``revoke_if_active`` is a conditional UPDATE on ``revoked = false``.
    Of two concurrent rotations of the same secret exactly one sees
    rowcount 1 and issues a new pair. The other observes the record as
    already revoked and takes the reuse path.
"""

from datetime import timedelta
from uuid import UUID

from src.application.dtos import AuthTokens
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import User
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    AuditProtocol,
    ClockProtocol,
    LoggerProtocol,
    OpaqueTokenProtocol,
    RefreshTokenData,
    RefreshTokenRepository,
    TokenGenerationProtocol,
    UserRepository,
)


class RevocationReason:
    """Reasons stored on revoked refresh token records."""

    ROTATED = "rotated"
    LOGOUT = "logout"
    LOGOUT_ALL = "logout_all"
    REUSE_DETECTED = "reuse_detected"
    PASSWORD_RESET = "password_reset"


class CredentialTokenService:
    """Issues, rotates and revokes refresh-token families.

    Attributes:
        refresh_token_ttl: Lifetime of a refresh secret.
    """

    def __init__(
        self,
        *,
        refresh_token_repo: RefreshTokenRepository,
        user_repo: UserRepository,
        token_service: TokenGenerationProtocol,
        opaque_token_service: OpaqueTokenProtocol,
        clock: ClockProtocol,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        refresh_token_ttl: timedelta,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._user_repo = user_repo
        self._token_service = token_service
        self._opaque = opaque_token_service
        self._clock = clock
        self._audit = audit
        self._logger = logger
        self.refresh_token_ttl = refresh_token_ttl

    async def issue(self, user: User) -> AuthTokens:
        """Issue a new access token and refresh secret for ``user``.

        Side Effects:
            - Inserts one refresh token record (digest only)
            - Records REFRESH_TOKEN_ISSUED
        """
        now = self._clock.now()
        secret, digest = self._opaque.generate()
        record = await self._refresh_token_repo.save(
            user_id=user.id,
            token_hash=digest,
            expires_at=now + self.refresh_token_ttl,
            now=now,
        )
        access_token = self._token_service.generate_access_token(
            user_id=user.id, email=user.email
        )

        await self._audit.record(
            action=AuditAction.REFRESH_TOKEN_ISSUED,
            message="Refresh token issued",
            user_id=user.id,
            user_email=user.email,
            metadata={"token_id": str(record.id)},
        )

        return AuthTokens(
            access_token=access_token,
            refresh_token=secret,
            expires_in=self._token_service.expires_in_seconds,
        )

    async def rotate(
        self, refresh_secret: str
    ) -> Result[AuthTokens, AuthenticationError | NotFoundError]:
        """Exchange a refresh secret for a new token pair.

        Returns:
            Success(AuthTokens) for the single winner of a rotation.
            Failure(AuthenticationError):
                - INVALID_TOKEN: unknown secret
                - TOKEN_REUSE_DETECTED: secret already revoked (family revoked)
                - TOKEN_EXPIRED: secret past its expiry
            Failure(NotFoundError): USER_NOT_FOUND when the user is gone.
        """
        now = self._clock.now()
        record = await self._refresh_token_repo.find_by_token_hash(
            self._opaque.digest(refresh_secret)
        )

        if record is None:
            await self._audit.record(
                action=AuditAction.REFRESH_TOKEN_REJECTED,
                message="Unknown refresh token presented",
                level=LogLevel.WARN,
                error_code=ErrorCode.INVALID_TOKEN.value,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_TOKEN,
                    message=AuthMessage.INVALID_REFRESH_TOKEN,
                )
            )

        if record.revoked:
            return await self._handle_reuse(record)

        if record.is_expired(now):
            await self._audit.record(
                action=AuditAction.REFRESH_TOKEN_REJECTED,
                message="Expired refresh token presented",
                level=LogLevel.WARN,
                user_id=record.user_id,
                error_code=ErrorCode.TOKEN_EXPIRED.value,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AuthMessage.REFRESH_TOKEN_EXPIRED,
                )
            )

        user = await self._user_repo.find_by_id(record.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message=AuthMessage.USER_NOT_FOUND,
                    resource_type="User",
                    resource_id=str(record.user_id),
                )
            )

        # Closes the rotation window; a concurrent loser falls into reuse.
        if not await self._refresh_token_repo.revoke_if_active(
            record.id, RevocationReason.ROTATED, now
        ):
            return await self._handle_reuse(record)

        tokens = await self.issue(user)
        await self._audit.record(
            action=AuditAction.REFRESH_TOKEN_ROTATED,
            message="Refresh token rotated",
            user_id=user.id,
            user_email=user.email,
            metadata={"rotated_token_id": str(record.id)},
        )
        return Success(value=tokens)

    async def revoke(self, refresh_secret: str) -> bool:
        """Revoke a single refresh secret.

        Returns:
            bool: True if an active record was revoked.
        """
        now = self._clock.now()
        revoked = await self._refresh_token_repo.revoke_by_token_hash(
            self._opaque.digest(refresh_secret), RevocationReason.LOGOUT, now
        )
        if revoked:
            await self._audit.record(
                action=AuditAction.REFRESH_TOKEN_REVOKED,
                message="Refresh token revoked (logout)",
            )
        return revoked

    async def revoke_all(
        self, user_id: UUID, reason: str = RevocationReason.LOGOUT_ALL
    ) -> int:
        """Revoke every active refresh token of a user.

        Args:
            user_id: Owner of the token family.
            reason: Revocation reason stored on each record.

        Returns:
            int: Number of records revoked.
        """
        count = await self._refresh_token_repo.revoke_all_for_user(
            user_id, reason, self._clock.now()
        )
        await self._audit.record(
            action=AuditAction.ALL_SESSIONS_REVOKED,
            message=f"Revoked {count} refresh tokens",
            user_id=user_id,
            metadata={"reason": reason, "revoked_count": count},
        )
        return count

    async def purge_stale_tokens(self) -> int:
        """Delete refresh tokens that are expired or revoked.

        Maintenance task. Reuse detection only works while revoked records
        exist, so run it with a cadence longer than a refresh token lifetime.

        Returns:
            int: Number of records deleted.
        """
        deleted = await self._refresh_token_repo.delete_stale(self._clock.now())
        self._logger.info("refresh_tokens_purged", deleted=deleted)
        return deleted

    async def _handle_reuse(
        self, record: RefreshTokenData
    ) -> Result[AuthTokens, AuthenticationError | NotFoundError]:
        count = await self._refresh_token_repo.revoke_all_for_user(
            record.user_id, RevocationReason.REUSE_DETECTED, self._clock.now()
        )
        self._logger.warning(
            "refresh_token_reuse_detected",
            user_id=str(record.user_id),
            token_id=str(record.id),
            revoked_count=count,
        )
        await self._audit.record(
            action=AuditAction.REFRESH_TOKEN_REUSE_DETECTED,
            message="Revoked refresh token presented again; all sessions revoked",
            level=LogLevel.WARN,
            user_id=record.user_id,
            error_code=ErrorCode.TOKEN_REUSE_DETECTED.value,
            metadata={"token_id": str(record.id), "revoked_count": count},
        )
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.TOKEN_REUSE_DETECTED,
                message=AuthMessage.TOKEN_REUSE_DETECTED,
            )
        )
