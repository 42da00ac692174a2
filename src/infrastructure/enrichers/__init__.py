"""Device fingerprinting infrastructure package.

Enrichers:
    - UserAgentDeviceFingerprinter: coarse device descriptor (user-agents library)
"""

from src.infrastructure.enrichers.device_fingerprinter import (
    UserAgentDeviceFingerprinter,
    coarse_network_origin,
)

__all__ = [
    "UserAgentDeviceFingerprinter",
    "coarse_network_origin",
]
