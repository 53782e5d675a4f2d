"""Security infrastructure adapters.

This package contains security-related infrastructure implementations:
- Password hashing (bcrypt)
- JWT access token generation/validation
- Opaque secret generation (refresh, verification and reset tokens)
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.opaque_token_service import OpaqueTokenService

__all__ = [
    "BcryptPasswordService",
    "JWTService",
    "OpaqueTokenService",
]
