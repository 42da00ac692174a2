"""Reasons recorded when a session or refresh token is revoked.

Stored verbatim in ``revoked_reason`` columns and in blacklist entries,
so values must stay stable once written.
"""

from enum import Enum


class RevocationReason(str, Enum):
    """Why a credential stopped being usable."""

    USER_LOGOUT = "user_logout"
    LOGOUT_ALL = "logout_all"
    USER_REVOKED = "user_revoked"
    REVOKE_OTHERS = "revoke_all_but_current"
    ROTATED = "rotated"
    SESSION_EVICTED = "max_sessions_exceeded"
    SESSION_REVOKED = "session_revoked"
    REPLAY_DETECTED = "replay_detected"
