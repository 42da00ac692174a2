"""Token hashing protocol.

Deterministic one-way digest of opaque token strings. Determinism is
required: the digest is the lookup key for refresh tokens and blacklist
entries, so salted password hashes do not fit here.
"""

from typing import Protocol


class TokenHasherProtocol(Protocol):
    """Deterministic token digest interface."""

    def hash(self, raw_token: str) -> str:
        """Digest a raw token.

        Args:
            raw_token: Opaque token string.

        Returns:
            Fixed-length hex digest (same input, same output).
        """
        ...
