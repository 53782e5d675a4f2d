"""Brevo transactional email adapter.

Sends verification and password reset emails through the Brevo HTTP API
(``POST /v3/smtp/email``) using httpx.

Delivery is fire-and-forget from the engine's point of view: timeouts,
connection errors and non-2xx responses are logged and reported as False.
They never raise into the calling flow.
"""

from typing import Any

import httpx

from src.core.constants import BREVO_API_URL, EMAIL_TIMEOUT_SECONDS
from src.domain.protocols import LoggerProtocol


class BrevoEmailService:
    """EmailProtocol implementation backed by Brevo.

    Attributes:
        _api_key: Brevo API key (sent as the ``api-key`` header).
        _sender: Sender block (``{"email": ..., "name": ...}``).
        _app_url: Frontend base URL used to build links.
    """

    def __init__(
        self,
        *,
        api_key: str,
        from_address: str,
        from_name: str,
        app_url: str,
        logger: LoggerProtocol,
        api_url: str = BREVO_API_URL,
        timeout: float = EMAIL_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize Brevo email service.

        Args:
            api_key: Brevo API key.
            from_address: Sender email address.
            from_name: Sender display name.
            app_url: Frontend base URL (no trailing slash).
            logger: Structured logger.
            api_url: Brevo send endpoint (overridable for tests).
            timeout: HTTP request timeout in seconds.
        """
        self._api_key = api_key
        self._sender = {"email": from_address, "name": from_name}
        self._app_url = app_url.rstrip("/")
        self._logger = logger
        self._api_url = api_url
        self._timeout = timeout

    async def send_verification(self, email: str, token: str) -> bool:
        """Send the email verification link."""
        link = f"{self._app_url}/verify-email?token={token}"
        return await self._send(
            to=email,
            subject="Verify your email address",
            html=(
                "<p>Welcome! Please confirm your email address.</p>"
                f'<p><a href="{link}">Verify email</a></p>'
                "<p>This link expires in 24 hours.</p>"
            ),
            operation="send_verification",
        )

    async def send_password_reset(self, email: str, token: str) -> bool:
        """Send the password reset link."""
        link = f"{self._app_url}/reset-password?token={token}"
        return await self._send(
            to=email,
            subject="Reset your password",
            html=(
                "<p>We received a request to reset your password.</p>"
                f'<p><a href="{link}">Reset password</a></p>'
                "<p>This link expires in 1 hour. "
                "If you did not ask for it, ignore this email.</p>"
            ),
            operation="send_password_reset",
        )

    async def _send(self, *, to: str, subject: str, html: str, operation: str) -> bool:
        payload: dict[str, Any] = {
            "sender": self._sender,
            "to": [{"email": to}],
            "subject": subject,
            "htmlContent": html,
        }
        headers = {
            "api-key": self._api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error(
                "email_delivery_failed", error=e, operation=operation, to=to
            )
            return False

        if response.is_success:
            self._logger.info("email_sent", operation=operation, to=to)
            return True

        self._logger.error(
            "email_delivery_rejected",
            operation=operation,
            to=to,
            status_code=response.status_code,
            response_body=response.text[:500],
        )
        return False
