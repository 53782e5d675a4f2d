"""Confirm password reset handler.

Flow:
1. Reject malformed secrets without a lookup
2. Validate the new password
3. Consume the reset secret: replace the password digest (single-use)
4. Revoke every refresh token of the user
5. Return Success(message)
"""

from src.application.commands.auth_commands import ConfirmPasswordReset
from src.application.services import AccountTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.validators import is_token_format, validate_password


class ConfirmPasswordResetHandler:
    """Handler for password reset confirmation command."""

    def __init__(self, account_tokens: AccountTokenService) -> None:
        self._account_tokens = account_tokens

    async def handle(
        self, cmd: ConfirmPasswordReset
    ) -> Result[str, AuthenticationError | ValidationError]:
        """Handle password reset confirmation.

        Returns:
            Success(message) after the password changed.
            Failure(AuthenticationError): INVALID_TOKEN or TOKEN_EXPIRED.
            Failure(ValidationError): INVALID_PASSWORD.
        """
        if not is_token_format(cmd.token):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_TOKEN,
                    message=AuthMessage.INVALID_RESET_TOKEN,
                )
            )

        try:
            validate_password(cmd.new_password)
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PASSWORD, message=str(e), field="password"
                )
            )

        result = await self._account_tokens.consume_reset(cmd.token, cmd.new_password)
        if isinstance(result, Failure):
            return result
        return Success(value=AuthMessage.PASSWORD_RESET)
