"""JWT token service (adapter).

This service implements the TokenGenerationProtocol using PyJWT with
HMAC-SHA256. It produces the short-lived bearer assertion handed out with
every refresh secret.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - Expiration from settings (minutes)
    - Unique JWT ID (jti) per token

Performance:
    - Stateless validation (no database lookup)
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success


class JWTService:
    """JWT access token generation and validation service.

    Usage:
        from src.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_access_token(user_id=user.id, email=user.email)
        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing (at least 32 bytes).
            expiration_minutes: Token expiration in minutes (default: 15).
            algorithm: HMAC algorithm (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    @property
    def expires_in_seconds(self) -> int:
        """Access token lifetime in seconds."""
        return self._expiration_minutes * 60

    def generate_access_token(self, user_id: UUID, email: str) -> str:
        """Generate JWT access token.

        Args:
            user_id: User's unique identifier.
            email: User's email address.

        Returns:
            JWT access token string.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_access_token(uuid7(), "user@example.com")
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate JWT access token and extract payload.

        Returns:
            Success(payload) if valid; Failure("token_expired") or
            Failure("token_invalid") otherwise.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token, self._secret_key, algorithms=[self._algorithm]
            )
            return Success(value=payload)
        except ExpiredSignatureError:
            return Failure(error="token_expired")
        except InvalidTokenError:
            return Failure(error="token_invalid")
