"""Email value object with validation.

Immutable value object that validates email format and normalizes the
address to the form used as the identity key.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


def normalize_email(value: str) -> str:
    """Normalize an email for lookups and rate-limit keys.

    Lookups never validate (a malformed address simply matches nothing);
    they only trim and case-fold so every path agrees on the same key.

    Args:
        value: Raw email string.

    Returns:
        str: Trimmed, case-folded email.
    """
    return value.strip().casefold()


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses email-validator library for RFC-compliant validation, then
    case-folds the whole address (local part included) so that
    ``User@Example.com`` and ``user@example.com`` are one identity.

    Attributes:
        value: The email address string (validated, case-folded)

    Raises:
        ValueError: If email format is invalid

    Example:
        >>> str(Email("  User@Example.COM "))
        'user@example.com'
        >>> Email("invalid")
        Traceback (most recent call last):
        ...
        ValueError: Invalid email: ...
    """

    value: str

    def __post_init__(self) -> None:
        """Validate email format after initialization.

        Raises:
            ValueError: If email format is invalid.
        """
        try:
            # No deliverability (DNS) check
            validated = validate_email(
                self.value.strip(), check_deliverability=False
            )
            object.__setattr__(self, "value", normalize_email(validated.normalized))
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e

    def __str__(self) -> str:
        """Return email address as string."""
        return self.value

    def __repr__(self) -> str:
        """Return repr for debugging."""
        return f"Email('{self.value}')"
