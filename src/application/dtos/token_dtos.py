"""Token issuance DTOs.

Returned by LifecycleManager.issue and LifecycleManager.refresh. This is the
only place raw credentials leave the lifecycle core.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedTokens:
    """Freshly minted credential pair bound to a session.

    Attributes:
        access_token: Signed JWT access token.
        access_token_expires_in: Access token lifetime in seconds.
        refresh_token: Raw opaque refresh secret.
        refresh_token_expires_in: Refresh token lifetime in seconds.
        session_id: Session the pair is bound to.
        token_type: Always "bearer".
    """

    access_token: str
    access_token_expires_in: int
    refresh_token: str
    refresh_token_expires_in: int
    session_id: str
    token_type: str = "bearer"

    def __repr__(self) -> str:
        # Raw secrets must not end up in logs or tracebacks
        return (
            f"IssuedTokens(session_id={self.session_id[:8]}..., "
            f"access_token_expires_in={self.access_token_expires_in}, "
            f"refresh_token_expires_in={self.refresh_token_expires_in})"
        )
