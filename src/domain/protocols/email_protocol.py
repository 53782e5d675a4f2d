"""Notification sender protocol.

Fire-and-forget from the engine's perspective: a delivery failure is logged
by the implementation and reported as False, and never rolls back token
issuance (the user can ask for a new email).
"""

from typing import Protocol


class EmailProtocol(Protocol):
    """Transactional email interface.

    Implementations:
        - StubEmailService: logs the link (development, tests)
        - BrevoEmailService: Brevo transactional API over httpx
    """

    async def send_verification(self, email: str, token: str) -> bool:
        """Send the email verification link containing ``token``.

        Returns:
            bool: True if the provider accepted the message.
        """
        ...

    async def send_password_reset(self, email: str, token: str) -> bool:
        """Send the password reset link containing ``token``.

        Returns:
            bool: True if the provider accepted the message.
        """
        ...
