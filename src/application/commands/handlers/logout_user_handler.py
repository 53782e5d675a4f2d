"""Logout handlers.

LogoutUserHandler revokes the presented refresh secret only.
LogoutAllSessionsHandler revokes every refresh token of the user.
"""

from src.application.commands.auth_commands import LogoutAllSessions, LogoutUser
from src.application.services import CredentialTokenService, RevocationReason
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage


class LogoutUserHandler:
    """Handler for single-session logout."""

    def __init__(self, credential_tokens: CredentialTokenService) -> None:
        self._credential_tokens = credential_tokens

    async def handle(self, cmd: LogoutUser) -> Result[None, AuthenticationError]:
        """Handle logout command.

        Returns:
            Success(None) when an active token was revoked.
            Failure(AuthenticationError) INVALID_TOKEN for an unknown or
            already revoked secret.
        """
        if await self._credential_tokens.revoke(cmd.refresh_token):
            return Success(value=None)
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.INVALID_TOKEN,
                message=AuthMessage.INVALID_REFRESH_TOKEN,
            )
        )


class LogoutAllSessionsHandler:
    """Handler for "log out everywhere"."""

    def __init__(self, credential_tokens: CredentialTokenService) -> None:
        self._credential_tokens = credential_tokens

    async def handle(self, cmd: LogoutAllSessions) -> Result[int, None]:
        """Handle logout-all command.

        Returns:
            Success(count) with the number of refresh tokens revoked.
        """
        count = await self._credential_tokens.revoke_all(
            cmd.user_id, RevocationReason.LOGOUT_ALL
        )
        return Success(value=count)
