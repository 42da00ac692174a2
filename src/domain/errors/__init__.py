"""Domain errors package.

Usage:
    from src.domain.errors import CredentialErrorKind, public_kind
"""

from src.domain.errors.authentication_error import AuthenticationErrorMessage
from src.domain.errors.credential_error import CredentialErrorKind, public_kind
from src.domain.errors.store_error import StoreUnavailableError

__all__ = [
    "AuthenticationErrorMessage",
    "CredentialErrorKind",
    "StoreUnavailableError",
    "public_kind",
]
