"""Access token claim set.

Fixed claim structure of the short-lived stateless access credential.
Decoded tokens are turned into this value object after signature and
schema validation; nothing downstream reads raw JWT payload dicts.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenClaims:
    """Validated access token claims.

    Attributes:
        user_id: Subject (``sub`` claim).
        session_id: Owning session (``session_id`` claim).
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
        token_id: ``jti`` claim.
    """

    user_id: UUID
    session_id: str
    issued_at: datetime
    expires_at: datetime
    token_id: str
