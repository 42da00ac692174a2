"""Integration tests for SessionAdminService.

Ownership checks happen here, before anything reaches the lifecycle
manager, so one user can never see or revoke another user's session.
"""

from datetime import timedelta

import pytest
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from tests.factories import DESKTOP, LAPTOP, PHONE, make_session


@pytest.mark.integration
class TestListSessions:
    async def test_lists_active_sessions_with_current_flag(self, manager, admin):
        user_id = uuid7()
        laptop = (await manager.issue(user_id, LAPTOP)).value
        phone = (await manager.issue(user_id, PHONE)).value
        revoked = (await manager.issue(user_id, DESKTOP)).value
        await manager.revoke(revoked.session_id)

        result = await admin.list_sessions(
            user_id, current_session_id=laptop.session_id
        )

        assert isinstance(result, Success)
        by_id = {s.session_id: s for s in result.value}
        assert set(by_id) == {laptop.session_id, phone.session_id}
        assert by_id[laptop.session_id].is_current is True
        assert by_id[phone.session_id].is_current is False
        assert by_id[phone.session_id].device_label == "Mobile Safari on iOS"

    async def test_most_recently_active_first(self, manager, admin):
        user_id = uuid7()
        older = (await manager.issue(user_id, LAPTOP)).value
        newer = (await manager.issue(user_id, PHONE)).value
        await manager.refresh(older.refresh_token, older.session_id)

        result = await admin.list_sessions(user_id)

        assert [s.session_id for s in result.value] == [
            older.session_id,
            newer.session_id,
        ]

    async def test_empty_for_unknown_user(self, admin):
        result = await admin.list_sessions(uuid7())

        assert result == Success(value=[])


@pytest.mark.integration
class TestGetSession:
    async def test_owner_can_read(self, manager, admin):
        user_id = uuid7()
        issued = (await manager.issue(user_id, LAPTOP)).value

        result = await admin.get_session(
            user_id, issued.session_id, current_session_id=issued.session_id
        )

        assert isinstance(result, Success)
        assert result.value.session_id == issued.session_id
        assert result.value.is_current is True

    async def test_unknown_session(self, admin):
        result = await admin.get_session(uuid7(), "missing")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SESSION_NOT_FOUND

    async def test_foreign_session(self, manager, admin):
        issued = (await manager.issue(uuid7(), LAPTOP)).value

        result = await admin.get_session(uuid7(), issued.session_id)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RESOURCE_NOT_OWNED


@pytest.mark.integration
class TestRevokeOne:
    async def test_owner_revokes(self, manager, admin, store):
        user_id = uuid7()
        issued = (await manager.issue(user_id, LAPTOP)).value

        result = await admin.revoke_one(user_id, issued.session_id)

        assert result == Success(value=True)
        async with store.transaction(operation="test") as tx:
            session = await tx.sessions.get(issued.session_id)
        assert session is not None
        assert session.is_active is False
        assert session.revoked_reason == "user_revoked"

    async def test_other_user_cannot_revoke(self, manager, admin, store):
        issued = (await manager.issue(uuid7(), LAPTOP)).value

        result = await admin.revoke_one(uuid7(), issued.session_id)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RESOURCE_NOT_OWNED
        async with store.transaction(operation="test") as tx:
            session = await tx.sessions.get(issued.session_id)
        assert session is not None and session.is_active

    async def test_already_revoked(self, manager, admin):
        user_id = uuid7()
        issued = (await manager.issue(user_id, LAPTOP)).value
        await admin.revoke_one(user_id, issued.session_id)

        assert await admin.revoke_one(user_id, issued.session_id) == Success(
            value=False
        )


@pytest.mark.integration
class TestRevokeAllButCurrent:
    async def test_keeps_current(self, manager, admin):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        await manager.issue(user_id, DESKTOP)
        await manager.issue(user_id, PHONE)

        result = await admin.revoke_all_but_current(user_id, current.session_id)

        assert result == Success(value=2)
        listed = (await admin.list_sessions(user_id)).value
        assert [s.session_id for s in listed] == [current.session_id]

    async def test_nothing_to_revoke(self, manager, admin):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value

        result = await admin.revoke_all_but_current(user_id, current.session_id)

        assert result == Success(value=0)


@pytest.mark.integration
async def test_session_stats(manager, admin, store):
    user_id = uuid7()
    await manager.issue(user_id, LAPTOP)
    revoked = (await manager.issue(user_id, PHONE)).value
    await manager.revoke(revoked.session_id)
    async with store.transaction(operation="test") as tx:
        await tx.sessions.add(
            make_session(user_id=user_id, expires_in=timedelta(seconds=-1))
        )

    result = await admin.session_stats(user_id)

    assert isinstance(result, Success)
    stats = result.value
    assert (stats.total, stats.active, stats.expired, stats.inactive) == (3, 1, 1, 1)
