"""Email verification handler.

Flow:
1. Reject malformed secrets without a lookup
2. Consume the verification secret (marks the user verified)
3. Start the trial (failure is reported, never rolls verification back)
4. Return Success(VerificationResult)
"""

from src.application.commands.auth_commands import VerifyEmail
from src.application.dtos import VerificationResult
from src.application.services import AccountTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, ConflictError
from src.core.result import Failure, Result
from src.domain.errors import AuthMessage
from src.domain.validators import is_token_format


class VerifyEmailHandler:
    """Handler for email verification command."""

    def __init__(self, account_tokens: AccountTokenService) -> None:
        self._account_tokens = account_tokens

    async def handle(
        self, cmd: VerifyEmail
    ) -> Result[VerificationResult, AuthenticationError | ConflictError]:
        """Handle email verification command.

        Returns:
            Success(VerificationResult) on verification.
            Failure(AuthenticationError): INVALID_TOKEN or TOKEN_EXPIRED.
            Failure(ConflictError): EMAIL_ALREADY_VERIFIED.
        """
        if not is_token_format(cmd.token):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_TOKEN,
                    message=AuthMessage.INVALID_VERIFICATION_TOKEN,
                )
            )
        return await self._account_tokens.consume_verification(cmd.token)
