"""Unit tests for validation functions and the Email value object."""

import pytest

from src.domain.validators import is_token_format, validate_email, validate_password
from src.domain.value_objects import Email, normalize_email


@pytest.mark.unit
class TestEmailValidation:
    """Test email validation and normalization."""

    def test_validate_email_normalizes(self):
        assert validate_email("  User@Example.COM ") == "user@example.com"

    @pytest.mark.parametrize("value", ["invalid", "user@", "@example.com", ""])
    def test_validate_email_rejects_malformed(self, value):
        with pytest.raises(ValueError, match="Invalid email"):
            validate_email(value)

    def test_email_value_object_str(self):
        assert str(Email("Someone@Example.com")) == "someone@example.com"

    def test_normalize_email_does_not_validate(self):
        """Lookup normalization only trims and case-folds."""
        assert normalize_email("  NOT-AN-EMAIL ") == "not-an-email"


@pytest.mark.unit
class TestPasswordValidation:
    """Test password length rules."""

    def test_accepts_eight_characters(self):
        assert validate_password("abcdefgh") == "abcdefgh"

    def test_rejects_short_password(self):
        with pytest.raises(ValueError, match="at least 8 characters"):
            validate_password("short")

    def test_rejects_password_over_72_bytes(self):
        """Length is measured in UTF-8 bytes (bcrypt input limit)."""
        with pytest.raises(ValueError, match="at most 72 bytes"):
            validate_password("é" * 37)

    def test_accepts_exactly_72_bytes(self):
        validate_password("a" * 72)


@pytest.mark.unit
class TestTokenFormat:
    """Test opaque secret shape check."""

    def test_accepts_64_lowercase_hex(self):
        assert is_token_format("a1" * 32) is True

    @pytest.mark.parametrize(
        "value",
        ["", "a1" * 31, "A1" * 32, "g" * 64, "a1" * 33],
    )
    def test_rejects_other_shapes(self, value):
        assert is_token_format(value) is False
