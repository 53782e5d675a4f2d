"""Opaque secret generation protocol.

Refresh, verification and reset tokens are unguessable random secrets.
Only their one-way digest is persisted; lookups hash the presented secret
and use the store's equality lookup on the digest.
"""

from typing import Protocol


class OpaqueTokenProtocol(Protocol):
    """Opaque token generation interface.

    Implementations:
        - OpaqueTokenService: ``secrets.token_hex`` + SHA-256 hex digest
    """

    def generate(self) -> tuple[str, str]:
        """Generate a new secret.

        Returns:
            Tuple of (plaintext_secret, digest). The plaintext goes to the
            client (or email); only the digest is stored.
        """
        ...

    def digest(self, secret: str) -> str:
        """Compute the stored digest of a presented secret."""
        ...
