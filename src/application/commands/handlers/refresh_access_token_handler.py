"""Refresh access token handler.

Flow:
1. Reject malformed secrets without a lookup
2. Rotate: revoke the presented record (single winner), issue a new pair
3. A revoked secret triggers family-wide revocation (reuse detection)
4. Return Success(AuthTokens)
"""

from src.application.commands.auth_commands import RefreshAccessToken
from src.application.dtos import AuthTokens
from src.application.services import CredentialTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, NotFoundError
from src.core.result import Failure, Result
from src.domain.errors import AuthMessage
from src.domain.validators import is_token_format


class RefreshAccessTokenHandler:
    """Handler for refresh access token command."""

    def __init__(self, credential_tokens: CredentialTokenService) -> None:
        self._credential_tokens = credential_tokens

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[AuthTokens, AuthenticationError | NotFoundError]:
        """Handle refresh access token command.

        Returns:
            Success(AuthTokens) on successful rotation.
            Failure(AuthenticationError): INVALID_TOKEN, TOKEN_EXPIRED or
                TOKEN_REUSE_DETECTED.
            Failure(NotFoundError): USER_NOT_FOUND.
        """
        if not is_token_format(cmd.refresh_token):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_TOKEN,
                    message=AuthMessage.INVALID_REFRESH_TOKEN,
                )
            )
        return await self._credential_tokens.rotate(cmd.refresh_token)
