"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- Validation (bcrypt_rounds, URLs, email backend, positive limits)
- Default values
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Environment, Settings, get_settings


@pytest.fixture
def base_test_env():
    """Minimal required settings. Tests merge overrides into this dict."""
    return {
        "APP_URL": "https://app.example.com",
        "DATABASE_URL": "postgresql+asyncpg://test",
        "SECRET_KEY": "test-secret-key-with-at-least-32-characters",
    }


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values for business and security settings."""

    def test_defaults(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = get_settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.app_name == "entitlements"
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.verification_token_expire_hours == 24
        assert settings.password_reset_token_expire_hours == 1
        assert settings.verification_rate_limit_max_attempts == 3
        assert settings.verification_rate_limit_window_minutes == 60
        assert settings.trial_duration_days == 14
        assert settings.trial_max_domains == 10
        assert settings.trial_max_sms_alerts == 10
        assert settings.default_plan_name == "starter"
        assert settings.trial_plan_name == "professional"
        assert settings.unlimited_plan_name == "enterprise"
        assert settings.email_backend == "stub"

    def test_missing_required_settings_raise(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings()  # type: ignore[call-arg]


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings field validation."""

    def test_bcrypt_rounds_valid(self, base_test_env):
        env_values = base_test_env | {"BCRYPT_ROUNDS": "10"}
        with patch.dict(os.environ, env_values, clear=True):
            assert get_settings().bcrypt_rounds == 10

    @pytest.mark.parametrize("rounds", ["3", "32"])
    def test_bcrypt_rounds_out_of_range(self, base_test_env, rounds):
        env_values = base_test_env | {"BCRYPT_ROUNDS": rounds}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError, match="bcrypt_rounds"):
                get_settings()

    def test_app_url_trailing_slash_removed(self, base_test_env):
        env_values = base_test_env | {"APP_URL": "https://app.example.com///"}
        with patch.dict(os.environ, env_values, clear=True):
            assert get_settings().app_url == "https://app.example.com"

    def test_email_backend_normalized(self, base_test_env):
        env_values = base_test_env | {"EMAIL_BACKEND": "BREVO"}
        with patch.dict(os.environ, env_values, clear=True):
            assert get_settings().email_backend == "brevo"

    def test_unknown_email_backend_rejected(self, base_test_env):
        env_values = base_test_env | {"EMAIL_BACKEND": "smtp"}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError):
                get_settings()

    @pytest.mark.parametrize(
        "variable",
        [
            "VERIFICATION_RATE_LIMIT_MAX_ATTEMPTS",
            "VERIFICATION_RATE_LIMIT_WINDOW_MINUTES",
            "TRIAL_DURATION_DAYS",
        ],
    )
    def test_non_positive_limits_rejected(self, base_test_env, variable):
        env_values = base_test_env | {variable: "0"}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError):
                get_settings()


@pytest.mark.unit
class TestEnvironmentDetection:
    """Test environment convenience properties."""

    @pytest.mark.parametrize(
        ("value", "development", "testing", "production"),
        [
            ("development", True, False, False),
            ("testing", False, True, False),
            ("ci", False, False, False),
            ("production", False, False, True),
        ],
    )
    def test_environment_flags(
        self, base_test_env, value, development, testing, production
    ):
        env_values = base_test_env | {"ENVIRONMENT": value}
        with patch.dict(os.environ, env_values, clear=True):
            settings = get_settings()

        assert settings.is_development is development
        assert settings.is_testing is testing
        assert settings.is_production is production


@pytest.mark.unit
class TestGetSettingsCache:
    """Test cached singleton behavior."""

    def test_returns_same_instance(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            assert get_settings() is get_settings()
