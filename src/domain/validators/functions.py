"""Centralized validation functions (DRY principle).

Validation logic defined once and reused by the command handlers.
Validators are pure functions that raise ValueError on validation failure;
handlers turn that into ``Failure(ValidationError(...))``.
"""

import re

from src.core.constants import TOKEN_HEX_LENGTH
from src.domain.value_objects.email import Email

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72

_HEX_TOKEN = re.compile(rf"^[a-f0-9]{{{TOKEN_HEX_LENGTH}}}$")


def validate_email(v: str) -> str:
    """Validate email format and normalize it.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (trimmed, case-folded).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email(" User@Example.COM ")
        'user@example.com'
    """
    return Email(v).value


def validate_password(v: str) -> str:
    """Validate password length.

    Requirements:
        - At least 8 characters
        - At most 72 bytes in UTF-8 (bcrypt input limit)

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password doesn't meet requirements.
    """
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


def is_token_format(v: str) -> bool:
    """Check that ``v`` looks like an issued opaque secret (64 lowercase hex).

    Malformed secrets can be rejected as invalid without a store lookup.
    """
    return bool(_HEX_TOKEN.match(v))
