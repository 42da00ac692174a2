"""Device fingerprinting protocol.

Implementations must never fail: unknown or malformed metadata yields an
"Other"/"unknown" fingerprint instead of an error.
"""

from typing import Protocol

from src.domain.value_objects import DeviceContext, DeviceFingerprint


class DeviceFingerprinterProtocol(Protocol):
    """Derive a coarse device descriptor from request metadata."""

    def fingerprint(self, device: DeviceContext) -> DeviceFingerprint:
        """Build a fingerprint for the given request metadata."""
        ...
