"""Email service implementations.

This package contains email service adapters:
- StubEmailService: Console logging for development/testing
- BrevoEmailService: Brevo transactional API (production)
"""

from src.infrastructure.email.brevo_email_service import BrevoEmailService
from src.infrastructure.email.stub_email_service import StubEmailService

__all__ = [
    "BrevoEmailService",
    "StubEmailService",
]
