"""Device fingerprinter using the user-agents library.

Derives a coarse, low-cardinality descriptor from request metadata:
browser family, OS family, device class and network origin. Versions and
full IP addresses are deliberately dropped so that routine browser updates
or DHCP renewals do not change the fingerprint.

The fingerprint is for display and anomaly review only and is never an
authentication factor.
"""

import hashlib
import ipaddress

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import DeviceContext, DeviceFingerprint

_UNKNOWN = "Other"
_IPV4_PREFIX = 24
_IPV6_PREFIX = 48


def coarse_network_origin(ip_address: str | None) -> str | None:
    """Collapse an IP address to its network (/24 for IPv4, /48 for IPv6).

    Args:
        ip_address: Client IP as text.

    Returns:
        Network in CIDR notation, or None if missing or unparseable.

    Example:
        >>> coarse_network_origin("203.0.113.57")
        '203.0.113.0/24'
    """
    if not ip_address:
        return None
    try:
        address = ipaddress.ip_address(ip_address.strip())
    except ValueError:
        return None
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped
    prefix = _IPV4_PREFIX if address.version == 4 else _IPV6_PREFIX
    network = ipaddress.ip_network(f"{address}/{prefix}", strict=False)
    return str(network)


class UserAgentDeviceFingerprinter:
    """Device fingerprinter using the user-agents library.

    Implements DeviceFingerprinterProtocol (structural typing).

    Behavior:
        - Fail-open: unparseable metadata yields an "Other" fingerprint
        - Non-blocking: pure string parsing
        - Deterministic: same coarse components, same fingerprint
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        """Initialize fingerprinter.

        Args:
            logger: Optional logger for parse failures.
        """
        self._logger = logger

    def fingerprint(self, device: DeviceContext) -> DeviceFingerprint:
        """Build a fingerprint for the given request metadata.

        Args:
            device: User agent and IP address of the request.

        Returns:
            DeviceFingerprint with digest and display components.
        """
        browser, os_name, device_class = self._parse(device.user_agent)
        ip_origin = coarse_network_origin(device.ip_address)

        components = [browser, os_name, device_class, ip_origin or ""]
        digest = hashlib.sha256("|".join(components).encode("utf-8")).hexdigest()

        return DeviceFingerprint(
            fingerprint=digest,
            browser=browser,
            os=os_name,
            device_class=device_class,
            ip_origin=ip_origin,
        )

    def _parse(self, user_agent: str | None) -> tuple[str, str, str]:
        """Parse browser family, OS family and device class.

        Args:
            user_agent: Raw user agent header.

        Returns:
            (browser, os, device_class); "Other"/"other" when unknown.
        """
        if not user_agent:
            return _UNKNOWN, _UNKNOWN, "other"

        try:
            ua: UserAgent = parse_user_agent(user_agent)
        except Exception as e:  # third-party parser, fail open
            if self._logger is not None:
                self._logger.warning(
                    "user_agent_parse_failed",
                    user_agent=user_agent[:100],
                    error_type=type(e).__name__,
                )
            return _UNKNOWN, _UNKNOWN, "other"

        browser = ua.browser.family or _UNKNOWN
        os_name = ua.os.family or _UNKNOWN
        return browser, os_name, self._determine_device_class(ua)

    def _determine_device_class(self, ua: UserAgent) -> str:
        """Determine device class from parsed user agent.

        Args:
            ua: Parsed UserAgent object.

        Returns:
            "bot", "mobile", "tablet", "desktop" or "other".
        """
        if ua.is_bot:
            return "bot"
        if ua.is_mobile:
            return "mobile"
        if ua.is_tablet:
            return "tablet"
        if ua.is_pc:
            return "desktop"
        return "other"
