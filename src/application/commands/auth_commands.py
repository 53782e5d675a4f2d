"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers validate input and execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register new user account.

    Creates an unverified user and emails a verification link. The user
    cannot log in until the email is verified.

    Attributes:
        email: User's email address (validated and normalized by the handler).
        password: Plaintext password (8 characters to 72 bytes, hashed).

    Example:
        >>> command = RegisterUser(email="user@example.com", password="SecurePass123!")
        >>> result = await handler.handle(command)
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Verify email address with the emailed secret.

    Marks the user verified and starts the trial.

    Attributes:
        token: Verification secret from the email link.
    """

    token: str


@dataclass(frozen=True, kw_only=True)
class ResendVerification:
    """Send a new verification link (rate-limited per email).

    Attributes:
        email: Email address the user registered with.
    """

    email: str


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate with email and password and issue tokens.

    An unverified user gets a fresh verification email (when the rate
    limit allows) and an EMAIL_NOT_VERIFIED failure.

    Attributes:
        email: User's email address.
        password: Plaintext password.
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Rotate a refresh secret into a new token pair.

    Attributes:
        refresh_token: Opaque refresh secret from the last login/refresh.
    """

    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """Revoke one refresh secret.

    Attributes:
        refresh_token: Opaque refresh secret to revoke.
    """

    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """Revoke every refresh token of a user ("log out everywhere").

    Attributes:
        user_id: Authenticated user.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Request a password reset link.

    Always reports generic success so account existence stays private.

    Attributes:
        email: Email address for the reset link.
    """

    email: str


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Set a new password using the emailed reset secret.

    Revokes every refresh token of the user on success.

    Attributes:
        token: Reset secret from the email link.
        new_password: New plaintext password (8 characters to 72 bytes).
    """

    token: str
    new_password: str
