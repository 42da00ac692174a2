"""API tests for session endpoints.

Tests the HTTP request/response cycle of:
- DELETE /api/v1/sessions/current (logout)
- GET /api/v1/sessions (list sessions)
- GET /api/v1/sessions/stats (session counters)
- GET /api/v1/sessions/{id} (get session)
- DELETE /api/v1/sessions/{id} (revoke session)
- DELETE /api/v1/sessions (revoke all but current)

A session owned by someone else must look exactly like a missing one.
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.core.container import get_lifecycle_manager
from src.core.result import Failure
from src.main import app
from tests.factories import (
    DESKTOP,
    LAPTOP,
    PHONE,
    UnavailableStore,
    auth_headers,
)

URL = "/api/v1/sessions"


@pytest.mark.api
class TestAuthentication:
    async def test_missing_bearer(self, client):
        response = await client.get(URL)

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required."
        assert response.json()["type"].endswith("/authentication-required")
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_garbage_bearer(self, client):
        response = await client.get(URL, headers=auth_headers("not-a-jwt"))

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credential."
        assert response.json()["type"].endswith("/invalid-credential")
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_expired_bearer(self, client, token_service):
        with freeze_time(datetime.now(UTC) - timedelta(hours=1)):
            stale = token_service.generate_access_token(
                user_id=uuid7(), session_id="s"
            )

        response = await client.get(URL, headers=auth_headers(stale))

        assert response.status_code == 401
        assert response.json()["detail"] == "Credential has expired."
        assert response.json()["type"].endswith("/expired-credential")

    async def test_store_unavailable(self, client, make_manager, token_service):
        app.dependency_overrides[get_lifecycle_manager] = lambda: make_manager(
            store=UnavailableStore()
        )
        token = token_service.generate_access_token(user_id=uuid7(), session_id="s")

        response = await client.get(URL, headers=auth_headers(token))

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "1"
        assert response.json()["type"].endswith("/store-unavailable")


@pytest.mark.api
class TestListAndGet:
    async def test_list_sessions(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        other = (await manager.issue(user_id, PHONE)).value
        await manager.issue(uuid7(), DESKTOP)

        response = await client.get(URL, headers=auth_headers(current.access_token))

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 2
        by_id = {s["id"]: s for s in data["sessions"]}
        assert set(by_id) == {current.session_id, other.session_id}
        assert by_id[current.session_id]["is_current"] is True
        assert by_id[other.session_id]["is_current"] is False
        assert "device_fingerprint" not in by_id[current.session_id]

    async def test_get_own_session(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        other = (await manager.issue(user_id, PHONE)).value

        response = await client.get(
            f"{URL}/{other.session_id}", headers=auth_headers(current.access_token)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == other.session_id
        assert data["device_label"] == "Mobile Safari on iOS"
        assert data["is_current"] is False

    async def test_foreign_and_missing_look_the_same(self, client, manager):
        caller = (await manager.issue(uuid7(), LAPTOP)).value
        foreign = (await manager.issue(uuid7(), PHONE)).value
        headers = auth_headers(caller.access_token)

        foreign_response = await client.get(
            f"{URL}/{foreign.session_id}", headers=headers
        )
        missing_response = await client.get(f"{URL}/does-not-exist", headers=headers)

        assert foreign_response.status_code == missing_response.status_code == 404
        assert foreign_response.json()["type"].endswith("/session-not-found")
        for key in ("type", "title", "status", "detail"):
            assert foreign_response.json()[key] == missing_response.json()[key]

    async def test_stats(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        revoked = (await manager.issue(user_id, PHONE)).value
        await manager.revoke(revoked.session_id)

        response = await client.get(
            f"{URL}/stats", headers=auth_headers(current.access_token)
        )

        assert response.status_code == 200
        assert response.json() == {"total": 2, "active": 1, "expired": 0, "inactive": 1}


@pytest.mark.api
class TestRevoke:
    async def test_revoke_own_other_session(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        other = (await manager.issue(user_id, PHONE)).value

        response = await client.delete(
            f"{URL}/{other.session_id}", headers=auth_headers(current.access_token)
        )

        assert response.status_code == 204
        refresh = await manager.refresh(other.refresh_token, other.session_id)
        assert isinstance(refresh, Failure)

    async def test_cannot_revoke_foreign_session(self, client, manager):
        caller = (await manager.issue(uuid7(), LAPTOP)).value
        victim = (await manager.issue(uuid7(), PHONE)).value

        response = await client.delete(
            f"{URL}/{victim.session_id}", headers=auth_headers(caller.access_token)
        )

        assert response.status_code == 404
        rotated = await manager.refresh(victim.refresh_token, victim.session_id)
        assert rotated.value.session_id == victim.session_id

    async def test_revoke_all_but_current(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        await manager.issue(user_id, DESKTOP)
        await manager.issue(user_id, PHONE)

        response = await client.delete(URL, headers=auth_headers(current.access_token))

        assert response.status_code == 200
        assert response.json()["revoked_count"] == 2
        listed = await client.get(URL, headers=auth_headers(current.access_token))
        assert [s["id"] for s in listed.json()["sessions"]] == [current.session_id]


@pytest.mark.api
class TestLogout:
    async def test_logout_blacklists_access_token(self, client, manager):
        issued = (await manager.issue(uuid7(), LAPTOP)).value
        headers = auth_headers(issued.access_token)

        response = await client.delete(f"{URL}/current", headers=headers)

        assert response.status_code == 204
        after = await client.get(URL, headers=headers)
        assert after.status_code == 401
        refresh = await manager.refresh(issued.refresh_token, issued.session_id)
        assert isinstance(refresh, Failure)

    async def test_logout_all(self, client, manager):
        user_id = uuid7()
        issued = [
            (await manager.issue(user_id, device)).value
            for device in (LAPTOP, DESKTOP, PHONE)
        ]

        response = await client.request(
            "DELETE",
            f"{URL}/current",
            json={"logout_all": True},
            headers=auth_headers(issued[0].access_token),
        )

        assert response.status_code == 204
        for tokens in issued:
            result = await manager.refresh(tokens.refresh_token, tokens.session_id)
            assert isinstance(result, Failure)

    async def test_logout_of_other_own_session_keeps_bearer(self, client, manager):
        user_id = uuid7()
        current = (await manager.issue(user_id, LAPTOP)).value
        other = (await manager.issue(user_id, PHONE)).value
        headers = auth_headers(current.access_token)

        response = await client.request(
            "DELETE",
            f"{URL}/current",
            json={"session_id": other.session_id},
            headers=headers,
        )

        assert response.status_code == 204
        listed = await client.get(URL, headers=headers)
        assert listed.status_code == 200
        assert [s["id"] for s in listed.json()["sessions"]] == [current.session_id]

    async def test_logout_of_foreign_session_404(self, client, manager):
        caller = (await manager.issue(uuid7(), LAPTOP)).value
        foreign = (await manager.issue(uuid7(), PHONE)).value

        response = await client.request(
            "DELETE",
            f"{URL}/current",
            json={"session_id": foreign.session_id},
            headers=auth_headers(caller.access_token),
        )

        assert response.status_code == 404
        rotated = await manager.refresh(foreign.refresh_token, foreign.session_id)
        assert rotated.value.session_id == foreign.session_id
