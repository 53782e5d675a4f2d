"""Application services: the credential and entitlement engine components.

Services:
    - CredentialTokenService: refresh-token families, rotation, reuse detection
    - AccountTokenService: verification and password reset secrets
    - EmailRateLimiter: fixed-window limiter for verification/reset email
    - SubscriptionService: plan assignment and trial state machine
    - UsageService: monthly usage counters
    - QuotaService: entitlement checks against the effective plan

Services receive every collaborator through their constructor; the
container in ``src.core.container`` wires them.
"""

from src.application.services.account_token_service import AccountTokenService
from src.application.services.credential_token_service import (
    CredentialTokenService,
    RevocationReason,
)
from src.application.services.email_rate_limiter import EmailRateLimiter
from src.application.services.quota_service import QuotaService
from src.application.services.subscription_service import SubscriptionService
from src.application.services.usage_service import UsageService

__all__ = [
    "AccountTokenService",
    "CredentialTokenService",
    "EmailRateLimiter",
    "QuotaService",
    "RevocationReason",
    "SubscriptionService",
    "UsageService",
]
