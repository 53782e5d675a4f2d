"""Opaque token service.

Generates the unguessable secrets used for refresh tokens, email
verification links and password reset links.

Token Strategy:
    - 32-byte random hex string (64 characters, 256 bits of entropy)
    - Only the SHA-256 hex digest is persisted
    - Lookup hashes the presented secret and queries by digest equality

Bcrypt is deliberately not used here: the secret already carries full
entropy, and a deterministic digest allows an indexed lookup.
"""

import hashlib
import secrets

from src.core.constants import TOKEN_BYTES


class OpaqueTokenService:
    """Opaque secret generation and digest service.

    Usage:
        service = OpaqueTokenService()

        secret, digest = service.generate()
        # Store digest, hand secret to the client (or put it in an email)

        # Later: look up what the client presented
        record = await repo.find_by_token_hash(service.digest(presented))
    """

    def generate(self) -> tuple[str, str]:
        """Generate a secret and its digest.

        Returns:
            Tuple of (secret, digest):
                - secret: 64-character hex string for the client
                - digest: 64-character SHA-256 hex digest for storage

        Example:
            >>> service = OpaqueTokenService()
            >>> secret, digest = service.generate()
            >>> len(secret), len(digest)
            (64, 64)
            >>> digest == service.digest(secret)
            True
        """
        secret = secrets.token_hex(TOKEN_BYTES)
        return secret, self.digest(secret)

    def digest(self, secret: str) -> str:
        """Compute the stored digest of a presented secret.

        Args:
            secret: Plaintext secret as presented by the client.

        Returns:
            SHA-256 hex digest.
        """
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()
