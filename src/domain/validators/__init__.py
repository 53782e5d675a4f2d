"""Validators package exports."""

from src.domain.validators.functions import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LENGTH,
    is_token_format,
    validate_email,
    validate_password,
)

__all__ = [
    "PASSWORD_MAX_BYTES",
    "PASSWORD_MIN_LENGTH",
    "is_token_format",
    "validate_email",
    "validate_password",
]
