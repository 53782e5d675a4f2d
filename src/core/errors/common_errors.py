"""Common error classes used across all domains and layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Resource conflicts (duplicate email, already verified)
- AuthenticationError: Credential and token failures

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_EMAIL,
        message="Invalid email format",
        field="email",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, SubscriptionPlan, etc.).
        resource_id: ID or natural key of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, state conflict).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email, is_verified, etc.).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, invalid/expired/reused token).

    ``details`` may carry the email for EMAIL_NOT_VERIFIED so the client can
    offer a resend.
    """

    pass
