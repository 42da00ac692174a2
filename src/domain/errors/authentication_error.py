"""Authentication error messages for the session lifecycle.

Message constants used when building ``AuthenticationError`` values.
Messages are internal (logs, problem details ``detail`` is replaced by a
generic text for credential failures), so they may be specific.
"""


class AuthenticationErrorMessage:
    """Authentication error message constants.

    These are NOT exceptions - they are message values used when returning
    ``Failure(AuthenticationError(...))``.
    """

    # Refresh token errors
    TOKEN_NOT_FOUND = "Refresh token not recognized"
    TOKEN_EXPIRED = "Refresh token has expired"
    TOKEN_REPLAYED = "Refresh token was already used or revoked"
    TOKEN_SESSION_MISMATCH = "Refresh token does not belong to this session"
    ROTATION_CONFLICT = "Refresh token was rotated concurrently"

    # Session errors
    SESSION_INACTIVE = "Session is not active"
    SESSION_NOT_FOUND = "Session not found"
    SESSION_NOT_OWNED = "Session belongs to another user"

    # Access token errors
    ACCESS_TOKEN_INVALID = "Access token is invalid"
    ACCESS_TOKEN_EXPIRED = "Access token has expired"
    ACCESS_TOKEN_REVOKED = "Access token has been revoked"
