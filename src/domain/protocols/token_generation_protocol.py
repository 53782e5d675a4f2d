"""Bearer assertion (JWT access token) protocol.

Token Strategy:
    - Access tokens: short-lived signed JWT (minutes), stateless validation
    - Refresh tokens: long-lived opaque secrets (OpaqueTokenProtocol),
      persisted only as digests
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result


class TokenGenerationProtocol(Protocol):
    """JWT access token generation and validation interface.

    Implementations:
        - JWTService: HMAC-SHA256 signed assertions
    """

    expires_in_seconds: int
    """Access token lifetime in seconds (reported to clients)."""

    def generate_access_token(self, user_id: UUID, email: str) -> str:
        """Generate a signed access token for an identity.

        Args:
            user_id: Identity id (``sub`` claim).
            email: Identity email (``email`` claim).

        Returns:
            JWT string (header.payload.signature).
        """
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate an access token and return its claims.

        Returns:
            Success(payload) if valid, Failure(reason) if expired, tampered or
            malformed (never raises).
        """
        ...
