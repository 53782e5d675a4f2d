"""Unit tests for security adapters.

Tests cover:
- BcryptPasswordService: hash/verify, cost factor bounds, 72-byte limit
- JWTService: claims, expiry (freezegun), tampering, key length
- OpaqueTokenService: secret shape, digest determinism
"""

import hashlib
from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.core.result import Failure, Success
from src.domain.validators import is_token_format
from src.infrastructure.security import (
    BcryptPasswordService,
    JWTService,
    OpaqueTokenService,
)

SECRET_KEY = "unit-test-secret-key-with-at-least-32-chars"


@pytest.mark.unit
class TestBcryptPasswordService:
    """Test bcrypt hashing (minimum cost factor for speed)."""

    def test_hash_and_verify_round_trip(self):
        service = BcryptPasswordService(cost_factor=10)

        password_hash = service.hash_password("correct horse battery")

        assert password_hash.startswith("$2b$10$")
        assert service.verify_password("correct horse battery", password_hash) is True
        assert service.verify_password("wrong password", password_hash) is False

    def test_hashes_are_salted(self):
        service = BcryptPasswordService(cost_factor=10)

        assert service.hash_password("same-password") != service.hash_password(
            "same-password"
        )

    @pytest.mark.parametrize("cost", [9, 21])
    def test_rejects_cost_factor_out_of_range(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)

    def test_rejects_password_over_72_bytes(self):
        service = BcryptPasswordService(cost_factor=10)

        with pytest.raises(ValueError):
            service.hash_password("x" * 73)

    def test_verify_with_malformed_hash_returns_false(self):
        service = BcryptPasswordService(cost_factor=10)

        assert service.verify_password("password", "not-a-bcrypt-hash") is False


@pytest.mark.unit
class TestJWTService:
    """Test access token generation and validation."""

    def test_rejects_short_secret_key(self):
        with pytest.raises(ValueError, match="at least 32 bytes"):
            JWTService(secret_key="too-short")

    def test_token_carries_identity_claims(self):
        service = JWTService(secret_key=SECRET_KEY)
        user_id = uuid7()

        token = service.generate_access_token(user_id, "user@example.com")
        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        assert result.value["sub"] == str(user_id)
        assert result.value["email"] == "user@example.com"
        assert result.value["exp"] - result.value["iat"] == 15 * 60
        assert "jti" in result.value

    def test_expires_in_seconds(self):
        assert JWTService(secret_key=SECRET_KEY, expiration_minutes=30).expires_in_seconds == 1800

    def test_token_expires_after_lifetime(self):
        service = JWTService(secret_key=SECRET_KEY, expiration_minutes=15)
        issued_at = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)

        with freeze_time(issued_at):
            token = service.generate_access_token(uuid7(), "user@example.com")

        with freeze_time(issued_at + timedelta(minutes=14)):
            assert isinstance(service.validate_access_token(token), Success)

        with freeze_time(issued_at + timedelta(minutes=16)):
            result = service.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error == "token_expired"

    def test_token_signed_with_other_key_is_invalid(self):
        issuer = JWTService(secret_key="another-secret-key-with-32-characters!!")
        token = issuer.generate_access_token(uuid7(), "user@example.com")

        result = JWTService(secret_key=SECRET_KEY).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error == "token_invalid"

    def test_garbage_token_is_invalid(self):
        result = JWTService(secret_key=SECRET_KEY).validate_access_token("not.a.jwt")

        assert isinstance(result, Failure)
        assert result.error == "token_invalid"


@pytest.mark.unit
class TestOpaqueTokenService:
    """Test opaque secret generation."""

    def test_generate_returns_secret_and_sha256_digest(self):
        service = OpaqueTokenService()

        secret, digest = service.generate()

        assert is_token_format(secret)
        assert digest == hashlib.sha256(secret.encode()).hexdigest()
        assert service.digest(secret) == digest

    def test_secrets_are_unique(self):
        service = OpaqueTokenService()

        secrets = {service.generate()[0] for _ in range(50)}

        assert len(secrets) == 50
