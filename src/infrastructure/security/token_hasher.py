"""SHA-256 token hasher (adapter).

Implements TokenHasherProtocol. Refresh secrets and access tokens carry at
least 256 bits of entropy, so an unsalted fast digest is sufficient and
keeps the digest usable as a unique lookup key.
"""

import hashlib


class Sha256TokenHasher:
    """Deterministic SHA-256 hex digest of raw token strings.

    Example:
        >>> hasher = Sha256TokenHasher()
        >>> len(hasher.hash("secret"))
        64
    """

    def hash(self, raw_token: str) -> str:
        """Digest a raw token.

        Args:
            raw_token: Opaque token string.

        Returns:
            64-character lowercase hex digest.
        """
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
