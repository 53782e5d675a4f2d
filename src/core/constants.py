"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings
(token lifetimes, trial length, rate-limit cap), use `src/core/config.py`.

Categories:
- Token lengths: Fixed sizes for cryptographic tokens
- Rate limiting: Key scopes and contention retries
- Usage: Month key format and retention defaults
- Email: Outbound API defaults

Example:
    >>> from src.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of bytes for secure token generation (32 bytes = 256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Rate Limiting
# =============================================================================

VERIFICATION_RATE_LIMIT_SCOPE: str = "verification"
"""Key scope for verification email throttling."""

PASSWORD_RESET_RATE_LIMIT_SCOPE: str = "password_reset"
"""Key scope for password reset email throttling."""

RATE_LIMIT_MAX_CAS_RETRIES: int = 5
"""Conditional-write retries before a contended rate-limit check is denied."""


# =============================================================================
# Usage Tracking
# =============================================================================

MONTH_KEY_FORMAT: str = "%Y-%m"
"""strftime format of usage month keys (e.g. 2026-10)."""

USAGE_HISTORY_MONTHS_DEFAULT: int = 6
"""Months returned by usage history queries."""

USAGE_RETENTION_MONTHS_DEFAULT: int = 12
"""Months of usage records kept by cleanup."""


# =============================================================================
# Plans
# =============================================================================

UNLIMITED_QUOTA: int = 999999
"""Sentinel quantity stored for unlimited tiers."""


# =============================================================================
# Email
# =============================================================================

BREVO_API_URL: str = "https://api.brevo.com/v3/smtp/email"
"""Brevo transactional email endpoint."""

EMAIL_TIMEOUT_SECONDS: float = 10.0
"""Timeout for outbound email API calls in seconds."""
