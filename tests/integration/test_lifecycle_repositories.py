"""Integration tests for the lifecycle repositories against SQLite.

Tests cover:
- Session locking order (least recently active first, ties oldest first)
- Conditional refresh token retirement
- Session and user wide revocation
- Blacklist de-duplication and expiry boundary
- FK cascade from sessions to refresh tokens
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from src.domain.errors import StoreUnavailableError

from tests.factories import make_blacklist_entry, make_refresh_token, make_session


@pytest.mark.integration
class TestSessionRepository:
    async def test_add_and_get(self, store):
        session = make_session()

        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)

        async with store.transaction(operation="test") as tx:
            loaded = await tx.sessions.get(session.id)

        assert loaded is not None
        assert loaded.user_id == session.user_id
        assert loaded.expires_at == session.expires_at
        assert loaded.expires_at.tzinfo is not None
        assert loaded.is_active is True

    async def test_get_unknown_returns_none(self, store):
        async with store.transaction(operation="test") as tx:
            assert await tx.sessions.get("missing") is None

    async def test_lock_active_orders_by_activity_then_creation(self, store):
        user_id = uuid7()
        now = datetime.now(UTC)
        recent = make_session(
            user_id=user_id,
            created_at=now - timedelta(hours=5),
            last_activity_at=now - timedelta(minutes=1),
        )
        tied_newer = make_session(
            user_id=user_id,
            created_at=now - timedelta(hours=3),
            last_activity_at=now - timedelta(hours=2),
        )
        tied_older = make_session(
            user_id=user_id,
            created_at=now - timedelta(hours=4),
            last_activity_at=now - timedelta(hours=2),
        )
        inactive = make_session(user_id=user_id, is_active=False)
        expired = make_session(user_id=user_id, expires_in=timedelta(seconds=-1))

        async with store.transaction(operation="test") as tx:
            for s in (recent, tied_newer, tied_older, inactive, expired):
                await tx.sessions.add(s)

        async with store.transaction(operation="test") as tx:
            locked = await tx.sessions.lock_active_for_user(user_id, now)

        assert [s.id for s in locked] == [tied_older.id, tied_newer.id, recent.id]

    async def test_deactivate_only_once(self, store):
        session = make_session()
        now = datetime.now(UTC)
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)

        async with store.transaction(operation="test") as tx:
            first = await tx.sessions.deactivate(session.id, reason="r", now=now)
            second = await tx.sessions.deactivate(session.id, reason="r", now=now)
            loaded = await tx.sessions.get(session.id)

        assert first is True
        assert second is False
        assert loaded is not None
        assert loaded.is_active is False
        assert loaded.revoked_reason == "r"

    async def test_deactivate_all_for_user_keeps_excluded(self, store):
        user_id = uuid7()
        keep, drop_a, drop_b = (make_session(user_id=user_id) for _ in range(3))
        other_user = make_session()
        async with store.transaction(operation="test") as tx:
            for s in (keep, drop_a, drop_b, other_user):
                await tx.sessions.add(s)

        async with store.transaction(operation="test") as tx:
            ids = await tx.sessions.deactivate_all_for_user(
                user_id,
                reason="logout_all",
                now=datetime.now(UTC),
                except_session_id=keep.id,
            )
            kept = await tx.sessions.get(keep.id)
            untouched = await tx.sessions.get(other_user.id)

        assert sorted(ids) == sorted([drop_a.id, drop_b.id])
        assert kept is not None and kept.is_active
        assert untouched is not None and untouched.is_active

    async def test_touch_updates_last_activity(self, store):
        session = make_session(last_activity_at=datetime.now(UTC) - timedelta(days=1))
        later = datetime.now(UTC)
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.sessions.touch(session.id, later)

        async with store.transaction(operation="test") as tx:
            loaded = await tx.sessions.get(session.id)

        assert loaded is not None
        assert loaded.last_activity_at == later


@pytest.mark.integration
class TestRefreshTokenRepository:
    async def test_find_by_hash_returns_revoked_records(self, store):
        session = make_session()
        token = make_refresh_token(session, "a" * 64, is_revoked=True)
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.refresh_tokens.add(token)

        async with store.transaction(operation="test") as tx:
            found = await tx.refresh_tokens.find_by_hash("a" * 64)
            missing = await tx.refresh_tokens.find_by_hash("b" * 64)

        assert found is not None
        assert found.is_revoked is True
        assert found.session_id == session.id
        assert missing is None

    async def test_revoke_if_live_flips_once(self, store):
        session = make_session()
        token = make_refresh_token(session, "c" * 64)
        now = datetime.now(UTC)
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.refresh_tokens.add(token)

        async with store.transaction(operation="test") as tx:
            first = await tx.refresh_tokens.revoke_if_live(
                token.id, reason="rotated", now=now
            )
            second = await tx.refresh_tokens.revoke_if_live(
                token.id, reason="rotated", now=now
            )
            stored = await tx.refresh_tokens.find_by_hash("c" * 64)

        assert (first, second) == (True, False)
        assert stored is not None
        assert stored.revoked_reason == "rotated"
        assert stored.last_used_at == now

    async def test_revoke_for_sessions_and_user(self, store):
        user_id = uuid7()
        s1, s2 = make_session(user_id=user_id), make_session(user_id=user_id)
        foreign = make_session()
        now = datetime.now(UTC)
        async with store.transaction(operation="test") as tx:
            for s in (s1, s2, foreign):
                await tx.sessions.add(s)
            await tx.refresh_tokens.add(make_refresh_token(s1, "1" * 64))
            await tx.refresh_tokens.add(make_refresh_token(s2, "2" * 64))
            await tx.refresh_tokens.add(make_refresh_token(foreign, "3" * 64))

        async with store.transaction(operation="test") as tx:
            nothing = await tx.refresh_tokens.revoke_for_sessions(
                [], reason="x", now=now
            )
            by_session = await tx.refresh_tokens.revoke_for_sessions(
                [s1.id], reason="x", now=now
            )
            by_user = await tx.refresh_tokens.revoke_for_user(
                user_id, reason="x", now=now
            )
            foreign_token = await tx.refresh_tokens.find_by_hash("3" * 64)

        assert nothing == 0
        assert by_session == 1
        assert by_user == 1
        assert foreign_token is not None and not foreign_token.is_revoked

    async def test_delete_removes_single_token(self, store):
        session = make_session()
        kept = make_refresh_token(session, "f" * 64)
        removed = make_refresh_token(session, "0" * 64)
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.refresh_tokens.add(kept)
            await tx.refresh_tokens.add(removed)

        async with store.transaction(operation="test") as tx:
            await tx.refresh_tokens.delete(removed.id)

        async with store.transaction(operation="test") as tx:
            assert await tx.refresh_tokens.find_by_hash("0" * 64) is None
            assert await tx.refresh_tokens.find_by_hash("f" * 64) is not None

    async def test_deleting_session_cascades_to_tokens(self, store):
        session = make_session(expires_in=timedelta(seconds=-1))
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.refresh_tokens.add(
                make_refresh_token(session, "d" * 64, expires_in=timedelta(seconds=-1))
            )

        async with store.transaction(operation="test") as tx:
            assert await tx.sessions.delete_expired(datetime.now(UTC)) == 1

        async with store.transaction(operation="test") as tx:
            assert await tx.refresh_tokens.list_for_session(session.id) == []

    async def test_token_hash_is_unique(self, store):
        session = make_session()
        async with store.transaction(operation="test") as tx:
            await tx.sessions.add(session)
            await tx.refresh_tokens.add(make_refresh_token(session, "e" * 64))

        with pytest.raises(StoreUnavailableError):
            async with store.transaction(operation="test") as tx:
                await tx.refresh_tokens.add(make_refresh_token(session, "e" * 64))


@pytest.mark.integration
class TestTokenBlacklistRepository:
    async def test_add_is_idempotent(self, store):
        async with store.transaction(operation="test") as tx:
            assert await tx.blacklist.add(make_blacklist_entry("f" * 64)) is True
            assert await tx.blacklist.add(make_blacklist_entry("f" * 64)) is False

    async def test_duplicate_from_committed_entry_keeps_transaction(self, store):
        async with store.transaction(operation="test") as tx:
            await tx.blacklist.add(make_blacklist_entry("9" * 64))

        async with store.transaction(operation="test") as tx:
            assert await tx.blacklist.add(make_blacklist_entry("9" * 64)) is False
            assert await tx.blacklist.add(make_blacklist_entry("8" * 64)) is True

        async with store.transaction(operation="test") as tx:
            assert await tx.blacklist.contains("8" * 64, datetime.now(UTC)) is True

    async def test_contains_respects_expiry(self, store):
        entry = make_blacklist_entry("g" * 64, expires_in=timedelta(minutes=5))
        async with store.transaction(operation="test") as tx:
            await tx.blacklist.add(entry)

        async with store.transaction(operation="test") as tx:
            now = datetime.now(UTC)
            assert await tx.blacklist.contains("g" * 64, now) is True
            assert await tx.blacklist.contains("g" * 64, entry.expires_at) is True
            assert (
                await tx.blacklist.contains(
                    "g" * 64, entry.expires_at + timedelta(seconds=1)
                )
                is False
            )
            assert await tx.blacklist.contains("h" * 64, now) is False

    async def test_delete_and_count_expired(self, store):
        async with store.transaction(operation="test") as tx:
            await tx.blacklist.add(
                make_blacklist_entry("i" * 64, expires_in=timedelta(seconds=-1))
            )
            await tx.blacklist.add(make_blacklist_entry("j" * 64))

        async with store.transaction(operation="test") as tx:
            now = datetime.now(UTC)
            assert await tx.blacklist.count_expired(now) == 1
            assert await tx.blacklist.delete_expired(now) == 1
            assert await tx.blacklist.contains("j" * 64, now) is True
