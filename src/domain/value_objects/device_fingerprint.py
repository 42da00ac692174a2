"""Device value objects.

DeviceContext is the request metadata handed over by the primary-auth
collaborator. DeviceFingerprint is the coarse, non-authoritative descriptor
derived from it; it is used for display and anomaly review only and must
never be treated as an authentication factor.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceContext:
    """Per-request client metadata.

    Attributes:
        user_agent: Raw User-Agent header (may be empty).
        ip_address: Client IP address as seen by the API (may be empty).
    """

    user_agent: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceFingerprint:
    """Low-cardinality device descriptor.

    Attributes:
        fingerprint: Hex digest of the coarse components below.
        browser: Browser family ("Chrome", "Other").
        os: Operating system family ("Mac OS X", "Other").
        device_class: One of "mobile", "tablet", "desktop", "bot", "other".
        ip_origin: Coarse network origin ("203.0.113.0/24"), None if unknown.

    Example:
        >>> fp.label
        'Chrome on Mac OS X'
    """

    fingerprint: str
    browser: str
    os: str
    device_class: str
    ip_origin: str | None = None

    @property
    def label(self) -> str:
        """Display-safe description of the device."""
        if self.browser == "Other" and self.os == "Other":
            return "Unknown device"
        return f"{self.browser} on {self.os}"
