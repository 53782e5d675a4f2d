"""Unit tests for the dependency container.

Tests cover:
- Application-scoped singletons (lru_cache)
- Backend selection from settings (email, logger rendering)
- Settings flowing into services (bcrypt cost, JWT lifetime, limiter rule)
- Session-scoped factories build fresh objects per call
- clear_container_cache() drops every singleton
"""

import os
from unittest.mock import MagicMock, patch

import pytest

from src.core.container import (
    clear_container_cache,
    get_audit,
    get_email_service,
    get_login_user_handler,
    get_password_service,
    get_quota_service,
    get_subscription_service,
    get_token_service,
    get_verification_rate_limiter,
)
from src.infrastructure.email import BrevoEmailService, StubEmailService
from src.infrastructure.security import BcryptPasswordService, JWTService


@pytest.fixture
def container_env(tmp_path):
    env = {
        "APP_URL": "https://app.example.com",
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'container.db'}",
        "SECRET_KEY": "container-test-secret-key-with-32-chars!",
        "ENVIRONMENT": "testing",
        "BCRYPT_ROUNDS": "10",
    }
    with patch.dict(os.environ, env, clear=True):
        clear_container_cache()
        yield env
    clear_container_cache()


@pytest.mark.unit
class TestApplicationScopedSingletons:
    """Test lru_cache singletons."""

    def test_password_service_uses_configured_rounds(self, container_env):
        service = get_password_service()

        assert isinstance(service, BcryptPasswordService)
        assert service.hash_password("SecurePass123!").startswith("$2b$10$")
        assert get_password_service() is service

    def test_token_service_uses_configured_lifetime(self, container_env):
        os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
        clear_container_cache()

        service = get_token_service()

        assert isinstance(service, JWTService)
        assert service.expires_in_seconds == 1800

    def test_audit_is_singleton(self, container_env):
        assert get_audit() is get_audit()

    def test_clear_container_cache_drops_singletons(self, container_env):
        first = get_password_service()

        clear_container_cache()

        assert get_password_service() is not first


@pytest.mark.unit
class TestEmailBackendSelection:
    """Test email adapter selection."""

    def test_stub_is_default(self, container_env):
        assert isinstance(get_email_service(), StubEmailService)

    def test_brevo_with_api_key(self, container_env):
        os.environ["EMAIL_BACKEND"] = "brevo"
        os.environ["BREVO_API_KEY"] = "xkeysib-test"
        clear_container_cache()

        assert isinstance(get_email_service(), BrevoEmailService)

    def test_brevo_without_api_key_fails(self, container_env):
        os.environ["EMAIL_BACKEND"] = "brevo"
        clear_container_cache()

        with pytest.raises(ValueError, match="BREVO_API_KEY"):
            get_email_service()


@pytest.mark.unit
class TestSessionScopedFactories:
    """Test factories taking a session."""

    def test_subscription_service_reads_trial_settings(self, container_env):
        os.environ["TRIAL_DURATION_DAYS"] = "30"
        os.environ["TRIAL_MAX_DOMAINS"] = "20"
        clear_container_cache()

        service = get_subscription_service(MagicMock())

        assert service.trial_duration.days == 30
        assert service.trial_max_domains == 20
        assert service.default_plan_name == "starter"

    def test_rate_limiter_rule_from_settings(self, container_env):
        os.environ["VERIFICATION_RATE_LIMIT_MAX_ATTEMPTS"] = "5"
        clear_container_cache()

        limiter = get_verification_rate_limiter(MagicMock())

        assert limiter.rule.max_attempts == 5
        assert limiter.scope == "verification"

    def test_factories_build_fresh_objects(self, container_env):
        session = MagicMock()

        assert get_quota_service(session) is not get_quota_service(session)
        assert get_login_user_handler(session) is not get_login_user_handler(session)
