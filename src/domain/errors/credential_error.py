"""Outward-facing credential error kinds.

Internally the lifecycle distinguishes unknown, expired, replayed and
revoked credentials. Callers only ever see three kinds, so that a
replayed refresh token is indistinguishable from one that never existed.

Mapping:
    TOKEN_EXPIRED                        -> EXPIRED
    STORE_UNAVAILABLE                    -> TRANSIENT_STORE_FAILURE
    everything else (invalid, replayed,
    revoked, inactive, not found/owned)  -> INVALID_CREDENTIAL

Usage:
    from src.domain.errors import CredentialErrorKind, public_kind

    match result:
        case Failure(error=error):
            kind = public_kind(error)
"""

from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import DomainError


class CredentialErrorKind(str, Enum):
    """Error kinds surfaced to callers of the lifecycle."""

    INVALID_CREDENTIAL = "invalid_credential"
    EXPIRED = "expired"
    TRANSIENT_STORE_FAILURE = "transient_store_failure"


_KIND_BY_CODE: dict[ErrorCode, CredentialErrorKind] = {
    ErrorCode.TOKEN_EXPIRED: CredentialErrorKind.EXPIRED,
    ErrorCode.STORE_UNAVAILABLE: CredentialErrorKind.TRANSIENT_STORE_FAILURE,
}


def public_kind(error: DomainError) -> CredentialErrorKind:
    """Collapse an internal error into the kind a caller may see.

    Args:
        error: Error returned by the lifecycle manager or admin service.

    Returns:
        CredentialErrorKind safe to expose.
    """
    return _KIND_BY_CODE.get(error.code, CredentialErrorKind.INVALID_CREDENTIAL)
