"""Data Transfer Objects (DTOs) for application layer.

DTOs are response/result dataclasses returned by command and query handlers.

Usage:
    from src.application.dtos import AuthTokens, LoginResult

Note:
    Entitlement reports (UsageLimits, TrialInfo, EffectivePlan) are domain
    value objects and are returned as-is.
"""

from src.application.dtos.auth_dtos import (
    AuthTokens,
    LoginResult,
    RegistrationResult,
    VerificationResult,
)

__all__ = [
    "AuthTokens",
    "LoginResult",
    "RegistrationResult",
    "VerificationResult",
]
