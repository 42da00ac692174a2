"""Unit tests for UserAgentDeviceFingerprinter and coarse_network_origin.

Tests cover:
- Browser / OS / device class parsing for common user agents
- Fingerprint stability across browser version bumps and DHCP renewals
- IP coarsening (IPv4 /24, IPv6 /48, IPv4-mapped IPv6)
- Fail-open behavior for missing or garbage metadata
"""

import pytest

from src.domain.value_objects import DeviceContext
from src.infrastructure.enrichers import (
    UserAgentDeviceFingerprinter,
    coarse_network_origin,
)
from tests.factories import CHROME_MAC_UA, FIREFOX_WINDOWS_UA, IPHONE_SAFARI_UA


@pytest.fixture
def fingerprinter() -> UserAgentDeviceFingerprinter:
    return UserAgentDeviceFingerprinter()


@pytest.mark.unit
class TestCoarseNetworkOrigin:
    """IP addresses are collapsed to their network."""

    def test_ipv4_collapses_to_slash_24(self):
        assert coarse_network_origin("203.0.113.57") == "203.0.113.0/24"

    def test_ipv6_collapses_to_slash_48(self):
        assert coarse_network_origin("2001:db8:1234:5678::1") == "2001:db8:1234::/48"

    def test_ipv4_mapped_ipv6_is_treated_as_ipv4(self):
        assert coarse_network_origin("::ffff:203.0.113.9") == "203.0.113.0/24"

    def test_surrounding_whitespace_is_ignored(self):
        assert coarse_network_origin(" 198.51.100.7 ") == "198.51.100.0/24"

    @pytest.mark.parametrize("value", [None, "", "not-an-ip", "999.1.1.1"])
    def test_missing_or_invalid_returns_none(self, value):
        assert coarse_network_origin(value) is None


@pytest.mark.unit
class TestUserAgentParsing:
    """Device components extracted from user agents."""

    def test_chrome_on_mac_is_desktop(self, fingerprinter):
        fp = fingerprinter.fingerprint(DeviceContext(user_agent=CHROME_MAC_UA))

        assert fp.browser == "Chrome"
        assert fp.os == "Mac OS X"
        assert fp.device_class == "desktop"
        assert fp.label == "Chrome on Mac OS X"

    def test_firefox_on_windows_is_desktop(self, fingerprinter):
        fp = fingerprinter.fingerprint(DeviceContext(user_agent=FIREFOX_WINDOWS_UA))

        assert fp.browser == "Firefox"
        assert fp.os == "Windows"
        assert fp.device_class == "desktop"

    def test_iphone_is_mobile(self, fingerprinter):
        fp = fingerprinter.fingerprint(DeviceContext(user_agent=IPHONE_SAFARI_UA))

        assert fp.os == "iOS"
        assert fp.device_class == "mobile"

    def test_bot_is_detected(self, fingerprinter):
        fp = fingerprinter.fingerprint(
            DeviceContext(
                user_agent="Googlebot/2.1 (+http://www.google.com/bot.html)"
            )
        )

        assert fp.device_class == "bot"

    def test_missing_user_agent_is_unknown_device(self, fingerprinter):
        fp = fingerprinter.fingerprint(DeviceContext())

        assert fp.browser == "Other"
        assert fp.os == "Other"
        assert fp.device_class == "other"
        assert fp.label == "Unknown device"
        assert fp.ip_origin is None


@pytest.mark.unit
class TestFingerprintStability:
    """The digest only depends on coarse components."""

    def test_same_input_same_fingerprint(self, fingerprinter):
        device = DeviceContext(user_agent=CHROME_MAC_UA, ip_address="203.0.113.57")

        first = fingerprinter.fingerprint(device)
        second = fingerprinter.fingerprint(device)

        assert first.fingerprint == second.fingerprint
        assert len(first.fingerprint) == 64

    def test_browser_version_bump_keeps_fingerprint(self, fingerprinter):
        newer = CHROME_MAC_UA.replace("Chrome/120.0.0.0", "Chrome/121.0.6167.85")

        old_fp = fingerprinter.fingerprint(DeviceContext(user_agent=CHROME_MAC_UA))
        new_fp = fingerprinter.fingerprint(DeviceContext(user_agent=newer))

        assert old_fp.fingerprint == new_fp.fingerprint

    def test_address_change_within_network_keeps_fingerprint(self, fingerprinter):
        a = fingerprinter.fingerprint(
            DeviceContext(user_agent=CHROME_MAC_UA, ip_address="203.0.113.10")
        )
        b = fingerprinter.fingerprint(
            DeviceContext(user_agent=CHROME_MAC_UA, ip_address="203.0.113.200")
        )

        assert a.fingerprint == b.fingerprint

    def test_different_network_changes_fingerprint(self, fingerprinter):
        a = fingerprinter.fingerprint(
            DeviceContext(user_agent=CHROME_MAC_UA, ip_address="203.0.113.10")
        )
        b = fingerprinter.fingerprint(
            DeviceContext(user_agent=CHROME_MAC_UA, ip_address="198.51.100.10")
        )

        assert a.fingerprint != b.fingerprint

    def test_different_device_changes_fingerprint(self, fingerprinter):
        a = fingerprinter.fingerprint(DeviceContext(user_agent=CHROME_MAC_UA))
        b = fingerprinter.fingerprint(DeviceContext(user_agent=IPHONE_SAFARI_UA))

        assert a.fingerprint != b.fingerprint
