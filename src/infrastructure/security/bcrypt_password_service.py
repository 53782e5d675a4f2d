"""Bcrypt password hashing service (adapter).

This service implements the PasswordHashingProtocol using bcrypt.

Architecture:
    - Implements PasswordHashingProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - Cost factor from settings (12 by default, ~250ms per hash)
    - Random salt per hash
    - bcrypt only reads the first 72 bytes of a password; longer passwords
      are rejected at registration/reset (see MAX_PASSWORD_BYTES)
"""

import bcrypt

MAX_PASSWORD_BYTES = 72
"""Longest password (UTF-8 bytes) bcrypt accepts."""


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("SecurePass123!")
        password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (default: 12). Each +1 doubles
                computation time (10 = ~60ms, 12 = ~250ms, 14 = ~1000ms).

        Raises:
            ValueError: If cost factor is below 10 or above 20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)
        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash (at most 72 UTF-8 bytes).

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).

        Raises:
            ValueError: If the password is longer than 72 bytes.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            msg = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            raise ValueError(msg)
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash, False otherwise.

        Note:
            - Constant-time comparison (prevents timing attacks)
            - Returns False for invalid hash format or over-long input
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
