"""Domain value objects.

Immutable value objects shared across layers.
"""

from src.domain.value_objects.access_token_claims import AccessTokenClaims
from src.domain.value_objects.device_fingerprint import (
    DeviceContext,
    DeviceFingerprint,
)

__all__ = [
    "AccessTokenClaims",
    "DeviceContext",
    "DeviceFingerprint",
]
