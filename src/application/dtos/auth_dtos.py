"""Authentication DTOs (Data Transfer Objects).

Response/result dataclasses for authentication command handlers.
These carry data from handlers back to the calling layer.

DTOs:
    - AuthTokens: bearer assertion + refresh secret pair
    - LoginResult: Result from LoginUser command
    - RegistrationResult: Result from RegisterUser command
    - VerificationResult: Result from VerifyEmail command
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class AuthTokens:
    """Token pair returned on login and refresh.

    Attributes:
        access_token: JWT access token (short-lived, minutes).
        refresh_token: Opaque refresh secret (long-lived, days). Returned
            exactly once; only its digest is stored.
        token_type: Token type (always "bearer").
        expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 900


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Response from successful login.

    Attributes:
        user_id: Authenticated user.
        email: Normalized email address.
        tokens: Issued token pair.
    """

    user_id: UUID
    email: str
    tokens: AuthTokens


@dataclass(frozen=True, kw_only=True)
class RegistrationResult:
    """Response from successful registration."""

    user_id: UUID
    email: str
    message: str


@dataclass(frozen=True, kw_only=True)
class VerificationResult:
    """Response from successful email verification.

    Attributes:
        user_id: Verified user.
        email: Verified email address.
        trial_assigned: False when trial hand-off failed (verification
            still succeeded).
        message: User-visible message.
    """

    user_id: UUID
    email: str
    trial_assigned: bool
    message: str
