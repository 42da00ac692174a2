"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_REASON naming convention and are used with
Result types for railway-oriented programming.

These codes are internal. Callers outside the lifecycle core only ever see
the collapsed CredentialErrorKind (see src.domain.errors.credential_error),
so that e.g. "token already rotated" and "token never existed" are
indistinguishable from the outside.

Categories:
- Credential errors (TOKEN_*)
- Session errors (SESSION_*)
- Authorization errors (RESOURCE_NOT_OWNED)
- Storage errors (STORE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Credential errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REPLAYED = "token_replayed"
    TOKEN_REVOKED = "token_revoked"

    # Session errors
    SESSION_INACTIVE = "session_inactive"
    SESSION_NOT_FOUND = "session_not_found"

    # Authorization errors
    RESOURCE_NOT_OWNED = "resource_not_owned"

    # Storage errors
    STORE_UNAVAILABLE = "store_unavailable"
