"""Unit tests for RegisterUserHandler.

Tests cover:
- Successful registration (user created unverified, verification issued)
- Email normalization
- Validation failures (email, password)
- Duplicate email (pre-check and lost race on the unique index)
"""

from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.auth_commands import RegisterUser
from src.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
    RegistrationError,
)
from src.application.dtos import RegistrationResult
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, ValidationError
from src.core.result import Failure, Success
from src.domain.entities import User
from src.domain.enums import AuditAction
from src.domain.errors import AuthMessage
from tests.utils.fakes import DEFAULT_NOW, FakeClock, FakePasswordService, InMemoryAuditAdapter


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.exists_by_email.return_value = False
    repo.create.return_value = True
    return repo


@pytest.fixture
def account_tokens():
    return AsyncMock()


@pytest.fixture
def audit():
    return InMemoryAuditAdapter()


@pytest.fixture
def handler(user_repo, account_tokens, audit):
    return RegisterUserHandler(
        user_repo=user_repo,
        password_service=FakePasswordService(),
        account_tokens=account_tokens,
        clock=FakeClock(),
        audit=audit,
        logger=Mock(),
    )


@pytest.mark.unit
class TestRegisterUserHandlerSuccess:
    """Test successful registration."""

    async def test_creates_unverified_user_and_issues_verification(
        self, handler, user_repo, account_tokens, audit
    ):
        # Act
        result = await handler.handle(
            RegisterUser(email=" New.User@Example.COM ", password="SecurePass123!")
        )

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, RegistrationResult)
        assert result.value.email == "new.user@example.com"
        assert result.value.message == AuthMessage.REGISTERED

        created: User = user_repo.create.await_args.args[0]
        assert created.email == "new.user@example.com"
        assert created.is_verified is False
        assert created.password_hash == "hashed::SecurePass123!"
        assert created.created_at == DEFAULT_NOW
        account_tokens.issue_verification.assert_awaited_once_with(created)
        assert audit.actions() == [AuditAction.USER_REGISTERED]


@pytest.mark.unit
class TestRegisterUserHandlerValidation:
    """Test input validation failures."""

    async def test_invalid_email(self, handler, user_repo, audit):
        result = await handler.handle(
            RegisterUser(email="not-an-email", password="SecurePass123!")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_EMAIL
        assert result.error.field == "email"
        user_repo.create.assert_not_awaited()
        entry = audit.last(AuditAction.USER_REGISTRATION_FAILED)
        assert entry.metadata == {"reason": RegistrationError.INVALID_EMAIL}

    async def test_short_password(self, handler, user_repo):
        result = await handler.handle(
            RegisterUser(email="user@example.com", password="short")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_PASSWORD
        assert result.error.field == "password"
        user_repo.create.assert_not_awaited()


@pytest.mark.unit
class TestRegisterUserHandlerDuplicate:
    """Test duplicate email handling."""

    async def test_existing_email_conflicts(self, handler, user_repo, account_tokens):
        user_repo.exists_by_email.return_value = True

        result = await handler.handle(
            RegisterUser(email="taken@example.com", password="SecurePass123!")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_REGISTERED
        user_repo.create.assert_not_awaited()
        account_tokens.issue_verification.assert_not_awaited()

    async def test_lost_insert_race_conflicts(self, handler, user_repo, account_tokens, audit):
        user_repo.create.return_value = False

        result = await handler.handle(
            RegisterUser(email="taken@example.com", password="SecurePass123!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_REGISTERED
        account_tokens.issue_verification.assert_not_awaited()
        assert AuditAction.USER_REGISTERED not in audit.actions()
