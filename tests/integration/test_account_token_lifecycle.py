"""Integration tests for registration, verification and password reset.

Tests cover:
- Registration stores the user unverified with a hashed verification secret
- Verification is single use, time-boxed and starts the trial
- Trial assignment failure never rolls verification back
- Resend and login auto-resend share the per-email limit
- Password reset is single use, time-boxed and revokes every session
"""

from datetime import timedelta

import pytest

from src.application.commands.auth_commands import (
    ConfirmPasswordReset,
    LoginUser,
    RefreshAccessToken,
    RegisterUser,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AuditAction, SubscriptionStatus
from src.domain.errors import AuthMessage
from src.infrastructure.security import OpaqueTokenService
from tests.utils.fakes import DEFAULT_NOW
from tests.utils.flows import login, register, register_verified


@pytest.mark.integration
class TestRegistration:
    """Test registration persistence."""

    async def test_user_stored_unverified_with_digest(self, engine, doubles):
        user = await register(engine, "New.User@Example.com")

        secret = doubles.email.last_token("verification")
        assert user.email == "new.user@example.com"
        assert user.is_verified is False
        assert user.verification_token_hash == OpaqueTokenService().digest(secret)
        assert user.verification_token_expires_at == DEFAULT_NOW + timedelta(hours=24)
        assert doubles.email.sent[-1].to == "new.user@example.com"

    async def test_duplicate_email_is_case_insensitive(self, engine):
        await register(engine, "user@example.com")

        result = await engine.register.handle(
            RegisterUser(email="USER@example.com", password="AnotherPass123!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_REGISTERED

    async def test_failed_delivery_keeps_registration(self, engine, doubles):
        doubles.email.deliver = False

        user = await register(engine)

        assert user.verification_token_hash is not None
        entry = doubles.audit.last(AuditAction.VERIFICATION_EMAIL_SENT)
        assert entry.metadata == {"delivered": False}


@pytest.mark.integration
class TestEmailVerification:
    """Test verification and trial start."""

    async def test_verification_starts_trial(self, engine, doubles):
        # Arrange
        user = await register(engine)
        secret = doubles.email.last_token("verification")

        # Act
        result = await engine.verify_email.handle(VerifyEmail(token=secret))

        # Assert
        assert isinstance(result, Success)
        assert result.value.trial_assigned is True
        assert result.value.message == AuthMessage.EMAIL_VERIFIED
        stored = await engine.user_repo.find_by_id(user.id)
        assert stored.is_verified is True
        assert stored.verification_token_hash is None
        subscription = await engine.subscription_repo.find_current_by_user(user.id)
        assert subscription.plan_name == "professional"
        assert subscription.status == SubscriptionStatus.TRIAL
        assert subscription.is_trial is True
        assert subscription.trial_ends_at == DEFAULT_NOW + timedelta(days=14)
        actions = doubles.audit.actions()
        assert actions.index(AuditAction.EMAIL_VERIFIED) < actions.index(
            AuditAction.TRIAL_ASSIGNED
        )

    async def test_secret_is_single_use(self, engine, doubles):
        await register(engine)
        secret = doubles.email.last_token("verification")
        await engine.verify_email.handle(VerifyEmail(token=secret))

        result = await engine.verify_email.handle(VerifyEmail(token=secret))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_TOKEN

    async def test_expired_secret(self, engine, doubles):
        user = await register(engine)
        secret = doubles.email.last_token("verification")

        doubles.clock.advance(hours=24, seconds=1)
        result = await engine.verify_email.handle(VerifyEmail(token=secret))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        assert (await engine.user_repo.find_by_id(user.id)).is_verified is False
        assert AuditAction.EMAIL_VERIFICATION_FAILED in doubles.audit.actions()

    async def test_secret_valid_at_exact_expiry(self, engine, doubles):
        await register(engine)
        secret = doubles.email.last_token("verification")

        doubles.clock.advance(hours=24)
        result = await engine.verify_email.handle(VerifyEmail(token=secret))

        assert isinstance(result, Success)

    async def test_trial_failure_keeps_user_verified(self, engine, doubles, monkeypatch):
        user = await register(engine)
        secret = doubles.email.last_token("verification")

        async def broken_assign_trial(user_id):
            raise RuntimeError("subscription store unavailable")

        monkeypatch.setattr(engine.subscriptions, "assign_trial", broken_assign_trial)

        result = await engine.verify_email.handle(VerifyEmail(token=secret))

        assert isinstance(result, Success)
        assert result.value.trial_assigned is False
        assert (await engine.user_repo.find_by_id(user.id)).is_verified is True
        assert AuditAction.TRIAL_ASSIGNMENT_FAILED in doubles.audit.actions()

    async def test_resend_replaces_previous_secret(self, engine, doubles):
        await register(engine)
        first = doubles.email.last_token("verification")

        await engine.resend_verification.handle(ResendVerification(email="user@example.com"))
        second = doubles.email.last_token("verification")

        assert first != second
        stale = await engine.verify_email.handle(VerifyEmail(token=first))
        assert isinstance(stale, Failure)
        assert stale.error.code == ErrorCode.INVALID_TOKEN
        fresh = await engine.verify_email.handle(VerifyEmail(token=second))
        assert isinstance(fresh, Success)


@pytest.mark.integration
class TestVerificationEmailLimit:
    """Test the shared per-email verification limit."""

    async def test_resend_limited_after_three(self, engine, doubles):
        await register(engine)

        results = [
            await engine.resend_verification.handle(
                ResendVerification(email="user@example.com")
            )
            for _ in range(4)
        ]

        assert all(isinstance(r, Success) for r in results[:3])
        assert isinstance(results[3], Failure)
        assert results[3].error.code == ErrorCode.RATE_LIMIT_EXCEEDED
        assert results[3].error.retry_after_seconds == 3600
        # one at registration plus three resends
        assert doubles.email.count("verification") == 4

    async def test_login_auto_resend_shares_limit(self, engine, doubles):
        await register(engine)
        await engine.resend_verification.handle(ResendVerification(email="user@example.com"))
        await engine.resend_verification.handle(ResendVerification(email="user@example.com"))

        allowed = await engine.login.handle(
            LoginUser(email="user@example.com", password="SecurePass123!")
        )
        denied = await engine.login.handle(
            LoginUser(email="user@example.com", password="SecurePass123!")
        )

        assert allowed.error.code == ErrorCode.EMAIL_NOT_VERIFIED
        assert allowed.error.details["verification_resent"] == "true"
        assert denied.error.code == ErrorCode.EMAIL_NOT_VERIFIED
        assert denied.error.details["verification_resent"] == "false"
        assert denied.error.message == AuthMessage.NOT_VERIFIED_RATE_LIMITED

    async def test_limit_resets_after_window(self, engine, doubles):
        await register(engine)
        for _ in range(3):
            await engine.resend_verification.handle(
                ResendVerification(email="user@example.com")
            )

        doubles.clock.advance(hours=1, seconds=1)
        result = await engine.resend_verification.handle(
            ResendVerification(email="user@example.com")
        )

        assert isinstance(result, Success)

    async def test_unknown_email_consumes_limit(self, engine):
        for _ in range(3):
            await engine.resend_verification.handle(
                ResendVerification(email="ghost@example.com")
            )

        result = await engine.resend_verification.handle(
            ResendVerification(email="ghost@example.com")
        )

        assert isinstance(result, Failure)


@pytest.mark.integration
class TestPasswordReset:
    """Test the reset flow end to end."""

    async def test_reset_changes_password_and_revokes_sessions(self, engine, doubles):
        # Arrange
        await register_verified(engine, doubles)
        session_tokens = await login(engine)
        await engine.request_reset.handle(RequestPasswordReset(email="user@example.com"))
        secret = doubles.email.last_token("password_reset")

        # Act
        result = await engine.confirm_reset.handle(
            ConfirmPasswordReset(token=secret, new_password="BrandNewPass456!")
        )

        # Assert
        assert result == Success(value=AuthMessage.PASSWORD_RESET)
        old_password = await engine.login.handle(
            LoginUser(email="user@example.com", password="SecurePass123!")
        )
        assert old_password.error.code == ErrorCode.INVALID_CREDENTIALS
        await login(engine, password="BrandNewPass456!")
        refreshed = await engine.refresh.handle(
            RefreshAccessToken(refresh_token=session_tokens.refresh_token)
        )
        assert isinstance(refreshed, Failure)
        entry = doubles.audit.last(AuditAction.PASSWORD_RESET_COMPLETED)
        assert entry.metadata == {"revoked_sessions": 1}

    async def test_reset_secret_is_single_use(self, engine, doubles):
        await register_verified(engine, doubles)
        await engine.request_reset.handle(RequestPasswordReset(email="user@example.com"))
        secret = doubles.email.last_token("password_reset")
        await engine.confirm_reset.handle(
            ConfirmPasswordReset(token=secret, new_password="BrandNewPass456!")
        )

        result = await engine.confirm_reset.handle(
            ConfirmPasswordReset(token=secret, new_password="OtherPass789!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_TOKEN

    async def test_expired_reset_secret(self, engine, doubles):
        await register_verified(engine, doubles)
        await engine.request_reset.handle(RequestPasswordReset(email="user@example.com"))
        secret = doubles.email.last_token("password_reset")

        doubles.clock.advance(hours=1, seconds=1)
        result = await engine.confirm_reset.handle(
            ConfirmPasswordReset(token=secret, new_password="BrandNewPass456!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    async def test_unknown_email_sends_nothing(self, engine, doubles):
        result = await engine.request_reset.handle(
            RequestPasswordReset(email="ghost@example.com")
        )

        assert result == Success(value=AuthMessage.RESET_REQUESTED)
        assert doubles.email.count("password_reset") == 0

    async def test_reset_limit_is_separate_from_verification(self, engine, doubles):
        await register_verified(engine, doubles)
        for _ in range(3):
            await engine.resend_verification.handle(
                ResendVerification(email="user@example.com")
            )

        result = await engine.request_reset.handle(
            RequestPasswordReset(email="user@example.com")
        )

        assert result == Success(value=AuthMessage.RESET_REQUESTED)
        assert doubles.email.count("password_reset") == 1

    async def test_fourth_reset_request_is_silently_dropped(self, engine, doubles):
        await register_verified(engine, doubles)

        for _ in range(4):
            result = await engine.request_reset.handle(
                RequestPasswordReset(email="user@example.com")
            )
            assert result == Success(value=AuthMessage.RESET_REQUESTED)

        assert doubles.email.count("password_reset") == 3
