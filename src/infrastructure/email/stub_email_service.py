"""Stub email service (development/testing).

Logs the link that would have been emailed instead of sending anything.
The plaintext token appears only inside the link, which is the point of
the stub: a developer can copy it from the console.
"""

from src.domain.protocols import LoggerProtocol


class StubEmailService:
    """EmailProtocol implementation that only logs.

    Args:
        logger: Structured logger.
        app_url: Frontend base URL used to build links.
    """

    def __init__(self, *, logger: LoggerProtocol, app_url: str) -> None:
        self._logger = logger
        self._app_url = app_url.rstrip("/")

    async def send_verification(self, email: str, token: str) -> bool:
        """Log the verification link."""
        self._logger.info(
            "stub_email_verification",
            to=email,
            link=f"{self._app_url}/verify-email?token={token}",
        )
        return True

    async def send_password_reset(self, email: str, token: str) -> bool:
        """Log the password reset link."""
        self._logger.info(
            "stub_email_password_reset",
            to=email,
            link=f"{self._app_url}/reset-password?token={token}",
        )
        return True
