"""User-visible authentication messages.

Messages are shared by the handlers so equivalent failures read the same
(e.g. unknown email and wrong password both produce INVALID_CREDENTIALS with
the same text, which keeps account existence private).

Architecture:
    - Domain layer constants (no infrastructure dependencies)
    - Paired with ErrorCode in AuthenticationError / ConflictError values
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.domain.errors import AuthMessage

    return Failure(error=AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=AuthMessage.INVALID_CREDENTIALS,
    ))
"""


class AuthMessage:
    """Authentication message constants."""

    # Registration and verification
    REGISTERED = (
        "Registration successful. Please check your email to verify your account."
    )
    EMAIL_ALREADY_REGISTERED = "Email already registered"
    EMAIL_VERIFIED = "Email verified successfully"
    EMAIL_ALREADY_VERIFIED = "Email already verified"
    INVALID_VERIFICATION_TOKEN = "Invalid verification token"
    VERIFICATION_TOKEN_EXPIRED = "Verification token has expired"
    VERIFICATION_SENT = (
        "If your email is registered, you will receive a verification link"
    )
    RATE_LIMITED = (
        "Too many verification email requests. Please try again in an hour."
    )

    # Login
    INVALID_CREDENTIALS = "Invalid email or password"
    NOT_VERIFIED_RESENT = (
        "Your email is not verified. We have sent you a new verification link. "
        "Please check your email."
    )
    NOT_VERIFIED_RATE_LIMITED = (
        "Your email is not verified. Too many verification emails sent. "
        "Please check your inbox or try again in an hour."
    )

    # Session tokens
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    REFRESH_TOKEN_EXPIRED = "Refresh token has expired"
    TOKEN_REUSE_DETECTED = "Token reuse detected. All sessions have been revoked."
    USER_NOT_FOUND = "User not found"

    # Password reset
    RESET_REQUESTED = "If your email is registered, you will receive a password reset link"
    INVALID_RESET_TOKEN = "Invalid or expired reset token"
    RESET_TOKEN_EXPIRED = "Reset token has expired"
    PASSWORD_RESET = "Password reset successful. Please log in with your new password."
