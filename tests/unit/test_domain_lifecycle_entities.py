"""Unit tests for Session, RefreshToken and BlacklistEntry entities.

Architecture:
- Pure domain entity tests (no mocks needed)
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from src.domain.entities import BlacklistEntry, RefreshToken, Session
from src.domain.enums import TokenKind
from src.domain.value_objects import DeviceFingerprint


def _session(**overrides) -> Session:
    fields = {
        "id": "sess-1",
        "user_id": uuid7(),
        "expires_at": datetime.now(UTC) + timedelta(days=30),
    }
    fields.update(overrides)
    return Session(**fields)


@pytest.mark.unit
class TestSession:
    def test_new_session_is_live(self):
        session = _session()

        assert session.is_active is True
        assert session.is_live() is True
        assert session.revoked_at is None

    def test_deactivated_session_is_not_live(self):
        session = _session(is_active=False)

        assert session.is_live() is False

    def test_expired_session_is_not_live(self):
        session = _session(expires_at=datetime.now(UTC) - timedelta(seconds=1))

        assert session.is_expired() is True
        assert session.is_live() is False

    def test_expiry_boundary_is_exclusive(self):
        now = datetime.now(UTC)
        session = _session(expires_at=now)

        assert session.is_expired(now) is False
        assert session.is_expired(now + timedelta(microseconds=1)) is True

    def test_belongs_to(self):
        owner = uuid7()
        session = _session(user_id=owner)

        assert session.belongs_to(owner) is True
        assert session.belongs_to(uuid7()) is False


@pytest.mark.unit
class TestRefreshToken:
    def _token(self, **overrides) -> RefreshToken:
        fields = {
            "id": uuid7(),
            "token_hash": "a" * 64,
            "user_id": uuid7(),
            "session_id": "sess-1",
            "expires_at": datetime.now(UTC) + timedelta(days=30),
        }
        fields.update(overrides)
        return RefreshToken(**fields)

    def test_new_token_is_live(self):
        token = self._token()

        assert token.is_live() is True
        assert token.rotated_from is None

    def test_revoked_token_is_not_live(self):
        assert self._token(is_revoked=True).is_live() is False

    def test_expired_token_is_not_live(self):
        token = self._token(expires_at=datetime.now(UTC) - timedelta(seconds=1))

        assert token.is_expired() is True
        assert token.is_live() is False

    def test_token_is_live_at_its_expiry_instant(self):
        now = datetime.now(UTC)
        token = self._token(expires_at=now)

        assert token.is_live(now) is True
        assert token.is_live(now + timedelta(microseconds=1)) is False


@pytest.mark.unit
class TestBlacklistEntry:
    def test_entry_expires_with_guarded_token(self):
        now = datetime.now(UTC)
        entry = BlacklistEntry(
            id=uuid7(),
            token_hash="b" * 64,
            token_kind=TokenKind.ACCESS,
            expires_at=now + timedelta(minutes=5),
            reason="user_logout",
        )

        assert entry.is_expired(now) is False
        assert entry.is_expired(now + timedelta(minutes=5)) is False
        assert entry.is_expired(now + timedelta(minutes=5, microseconds=1)) is True


@pytest.mark.unit
class TestDeviceFingerprintLabel:
    def test_label_combines_browser_and_os(self):
        fp = DeviceFingerprint(
            fingerprint="f" * 64, browser="Firefox", os="Windows", device_class="desktop"
        )

        assert fp.label == "Firefox on Windows"

    def test_unknown_components_give_unknown_device(self):
        fp = DeviceFingerprint(
            fingerprint="f" * 64, browser="Other", os="Other", device_class="other"
        )

        assert fp.label == "Unknown device"
