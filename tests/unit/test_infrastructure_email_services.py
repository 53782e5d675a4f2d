"""Unit tests for email adapters.

Tests cover:
- StubEmailService: logs links, always succeeds
- BrevoEmailService: request shape, non-2xx and transport failures
  reported as False (httpx.MockTransport)
"""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.infrastructure.email import BrevoEmailService, StubEmailService

_RealAsyncClient = httpx.AsyncClient


def _client_with(handler):
    """Build an AsyncClient factory routed through a mock transport."""

    def factory(**kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler), **kwargs)

    return factory


def _brevo(logger) -> BrevoEmailService:
    return BrevoEmailService(
        api_key="brevo-test-key",
        from_address="noreply@example.com",
        from_name="Entitlements",
        app_url="https://app.example.com/",
        logger=logger,
        api_url="https://brevo.test/v3/smtp/email",
    )


@pytest.mark.unit
class TestStubEmailService:
    """Test the logging-only email adapter."""

    async def test_verification_logs_link(self):
        logger = MagicMock()
        service = StubEmailService(logger=logger, app_url="https://app.example.com/")

        sent = await service.send_verification("user@example.com", "abc123")

        assert sent is True
        logger.info.assert_called_once_with(
            "stub_email_verification",
            to="user@example.com",
            link="https://app.example.com/verify-email?token=abc123",
        )

    async def test_password_reset_logs_link(self):
        logger = MagicMock()
        service = StubEmailService(logger=logger, app_url="https://app.example.com")

        sent = await service.send_password_reset("user@example.com", "def456")

        assert sent is True
        logger.info.assert_called_once_with(
            "stub_email_password_reset",
            to="user@example.com",
            link="https://app.example.com/reset-password?token=def456",
        )


@pytest.mark.unit
class TestBrevoEmailService:
    """Test the Brevo HTTP adapter."""

    async def test_verification_request_shape(self):
        # Arrange
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(201, json={"messageId": "m-1"})

        logger = MagicMock()
        service = _brevo(logger)

        # Act
        with patch.object(httpx, "AsyncClient", side_effect=_client_with(handler)):
            sent = await service.send_verification("user@example.com", "tok123")

        # Assert
        assert sent is True
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == "https://brevo.test/v3/smtp/email"
        assert request.headers["api-key"] == "brevo-test-key"
        body = json.loads(request.content)
        assert body["to"] == [{"email": "user@example.com"}]
        assert body["sender"] == {
            "email": "noreply@example.com",
            "name": "Entitlements",
        }
        assert "https://app.example.com/verify-email?token=tok123" in body["htmlContent"]
        logger.info.assert_called_once()

    async def test_password_reset_link(self):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(201)

        service = _brevo(MagicMock())

        with patch.object(httpx, "AsyncClient", side_effect=_client_with(handler)):
            sent = await service.send_password_reset("user@example.com", "tok456")

        assert sent is True
        body = json.loads(captured[0].content)
        assert "https://app.example.com/reset-password?token=tok456" in body["htmlContent"]

    async def test_rejected_response_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Key not found"})

        logger = MagicMock()
        service = _brevo(logger)

        with patch.object(httpx, "AsyncClient", side_effect=_client_with(handler)):
            sent = await service.send_verification("user@example.com", "tok")

        assert sent is False
        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "email_delivery_rejected"
        assert logger.error.call_args.kwargs["status_code"] == 401

    async def test_transport_error_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        logger = MagicMock()
        service = _brevo(logger)

        with patch.object(httpx, "AsyncClient", side_effect=_client_with(handler)):
            sent = await service.send_password_reset("user@example.com", "tok")

        assert sent is False
        assert logger.error.call_args.args[0] == "email_delivery_failed"
