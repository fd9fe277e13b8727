"""End-to-end tests through the HTTP API."""

import uuid

import httpx
import pytest
from fastapi import FastAPI

from anihub.config import settings
from anihub.core.handlers import register_exception_handlers
from anihub.main import app
from anihub.services.cache_service import get_cache
from anihub.services.platform_service import PlatformService


def _assert_error(response: httpx.Response, status_code: int) -> None:
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["success"] is False
    assert isinstance(body["message"], str) and body["message"]


# ============================================================================
# AUTH
# ============================================================================

class TestAuthEndpoints:

    async def test_register_returns_token_and_user(self, client: httpx.AsyncClient):
        response = await client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "secret1", "username": "alice"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["username"] == "alice"
        assert "password_hash" not in body["user"]

    async def test_register_conflict(self, client: httpx.AsyncClient, register_user):
        await register_user("a@x.com", "alice")

        response = await client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "secret1", "username": "alice2"},
        )
        _assert_error(response, 409)

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "password": "secret1", "username": "alice"},
            {"email": "a@x.com", "password": "short", "username": "alice"},
            {"email": "a@x.com", "password": "secret1", "username": "al"},
            {"email": "a@x.com", "password": "secret1", "username": "a" * 21},
            {"email": "a@x.com", "password": "secret1"},
        ],
    )
    async def test_register_validation(self, client: httpx.AsyncClient, payload):
        response = await client.post("/api/auth/register", json=payload)
        _assert_error(response, 400)

    async def test_login(self, client: httpx.AsyncClient, register_user):
        await register_user("a@x.com", "alice")

        response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "a@x.com"

    async def test_login_same_message_for_both_failures(self, client: httpx.AsyncClient, register_user):
        await register_user("a@x.com", "alice")

        wrong_password = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
        unknown_email = await client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})

        _assert_error(wrong_password, 401)
        _assert_error(unknown_email, 401)
        assert wrong_password.json()["message"] == unknown_email.json()["message"]

    async def test_me_with_stats(self, client: httpx.AsyncClient, register_user):
        headers = await register_user("a@x.com", "alice")
        await client.post("/api/tracker", json={"animeId": 1, "status": "completed", "progress": 12}, headers=headers)

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["username"] == "alice"
        assert body["stats"]["total_anime"] == 1
        assert body["stats"]["completed"] == 1

    async def test_me_requires_token(self, client: httpx.AsyncClient):
        _assert_error(await client.get("/api/auth/me"), 401)

    async def test_me_rejects_garbage_token(self, client: httpx.AsyncClient):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
        _assert_error(response, 401)


# ============================================================================
# TRACKER
# ============================================================================

class TestTrackerEndpoints:

    async def test_register_then_add_then_duplicate(self, client: httpx.AsyncClient, register_user):
        headers = await register_user("a@x.com", "alice")
        payload = {"animeId": 1, "status": "watching", "progress": 0}

        first = await client.post("/api/tracker", json=payload, headers=headers)
        second = await client.post("/api/tracker", json=payload, headers=headers)

        assert first.status_code == 201
        assert first.json()["data"]["anime_id"] == 1
        _assert_error(second, 409)

        listing = await client.get("/api/tracker", headers=headers)
        assert len(listing.json()["data"]) == 1

    async def test_requires_auth(self, client: httpx.AsyncClient):
        _assert_error(await client.get("/api/tracker"), 401)
        _assert_error(await client.post("/api/tracker", json={"animeId": 1, "status": "watching"}), 401)

    async def test_invalid_status(self, client: httpx.AsyncClient, alice_headers):
        response = await client.post(
            "/api/tracker", json={"animeId": 1, "status": "binging"}, headers=alice_headers
        )
        _assert_error(response, 400)

    async def test_missing_anime_id(self, client: httpx.AsyncClient, alice_headers):
        response = await client.post("/api/tracker", json={"status": "watching"}, headers=alice_headers)
        _assert_error(response, 400)

    async def test_empty_update_moves_entry_to_top(self, client: httpx.AsyncClient, alice_headers):
        first = await client.post("/api/tracker", json={"animeId": 1, "status": "watching"}, headers=alice_headers)
        await client.post("/api/tracker", json={"animeId": 2, "status": "watching"}, headers=alice_headers)
        entry = first.json()["data"]

        response = await client.put(f"/api/tracker/{entry['id']}", json={}, headers=alice_headers)

        assert response.status_code == 200
        listing = await client.get("/api/tracker", headers=alice_headers)
        assert [e["anime_id"] for e in listing.json()["data"]] == [1, 2]

    async def test_update_partial_clears_rating(self, client: httpx.AsyncClient, alice_headers):
        created = await client.post(
            "/api/tracker", json={"animeId": 7, "status": "watching"}, headers=alice_headers
        )
        entry_id = created.json()["data"]["id"]

        rated = await client.put(
            f"/api/tracker/{entry_id}", json={"rating": 8, "notes": "good"}, headers=alice_headers
        )
        assert rated.json()["data"]["rating"] == 8

        response = await client.put(f"/api/tracker/{entry_id}", json={"progress": 5}, headers=alice_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["progress"] == 5
        assert data["status"] == "watching"
        assert data["notes"] == "good"
        assert data["rating"] is None

    @pytest.mark.parametrize("rating", [0, 11])
    async def test_update_rating_out_of_range(self, client: httpx.AsyncClient, alice_headers, rating):
        created = await client.post(
            "/api/tracker", json={"animeId": 7, "status": "watching"}, headers=alice_headers
        )
        entry_id = created.json()["data"]["id"]

        response = await client.put(f"/api/tracker/{entry_id}", json={"rating": rating}, headers=alice_headers)
        _assert_error(response, 400)

    async def test_other_user_cannot_touch_entry(self, client: httpx.AsyncClient, alice_headers, bob_headers):
        created = await client.post(
            "/api/tracker", json={"animeId": 7, "status": "watching"}, headers=alice_headers
        )
        entry_id = created.json()["data"]["id"]

        _assert_error(
            await client.put(f"/api/tracker/{entry_id}", json={"progress": 3}, headers=bob_headers), 404
        )
        _assert_error(await client.delete(f"/api/tracker/{entry_id}", headers=bob_headers), 404)

        deleted = await client.delete(f"/api/tracker/{entry_id}", headers=alice_headers)
        assert deleted.status_code == 200
        assert deleted.json()["success"] is True

    async def test_delete_missing(self, client: httpx.AsyncClient, alice_headers):
        _assert_error(await client.delete(f"/api/tracker/{uuid.uuid4()}", headers=alice_headers), 404)


# ============================================================================
# DISCUSSIONS
# ============================================================================

class TestDiscussionEndpoints:

    async def _create(self, client: httpx.AsyncClient, headers, **extra) -> str:
        payload = {"title": "Best arc?", "content": "Discuss.", **extra}
        response = await client.post("/api/discussions", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["discussion"]["id"]

    async def test_vote_sequence(self, client: httpx.AsyncClient, alice_headers, bob_headers):
        discussion_id = await self._create(client, alice_headers)
        url = f"/api/discussions/{discussion_id}/vote"

        first = await client.post(url, json={"voteType": "agree"}, headers=alice_headers)
        assert first.json()["discussion"]["agree_count"] == 1
        assert first.json()["action"] == "added"

        again = await client.post(url, json={"voteType": "agree"}, headers=alice_headers)
        assert again.json()["discussion"]["agree_count"] == 0
        assert again.json()["discussion"]["user_vote"] is None

        other = await client.post(url, json={"voteType": "disagree"}, headers=bob_headers)
        assert other.json()["discussion"]["disagree_count"] == 1
        assert other.json()["discussion"]["agree_count"] == 0

    async def test_vote_invalid_type(self, client: httpx.AsyncClient, alice_headers):
        discussion_id = await self._create(client, alice_headers)
        response = await client.post(
            f"/api/discussions/{discussion_id}/vote", json={"voteType": "maybe"}, headers=alice_headers
        )
        _assert_error(response, 400)

    async def test_vote_missing_discussion(self, client: httpx.AsyncClient, alice_headers):
        response = await client.post(
            f"/api/discussions/{uuid.uuid4()}/vote", json={"voteType": "agree"}, headers=alice_headers
        )
        _assert_error(response, 404)

    async def test_vote_requires_auth(self, client: httpx.AsyncClient, alice_headers):
        discussion_id = await self._create(client, alice_headers)
        response = await client.post(f"/api/discussions/{discussion_id}/vote", json={"voteType": "agree"})
        _assert_error(response, 401)

    async def test_list_is_public(self, client: httpx.AsyncClient, alice_headers):
        await self._create(client, alice_headers, animeId=21)

        response = await client.get("/api/discussions")

        assert response.status_code == 200
        discussions = response.json()["discussions"]
        assert len(discussions) == 1
        assert discussions[0]["username"] == "alice"
        assert discussions[0]["anime_id"] == 21

    async def test_get_one_with_user_vote(self, client: httpx.AsyncClient, alice_headers):
        discussion_id = await self._create(client, alice_headers)
        await client.post(
            f"/api/discussions/{discussion_id}/vote", json={"voteType": "disagree"}, headers=alice_headers
        )

        anonymous = await client.get(f"/api/discussions/{discussion_id}")
        mine = await client.get(f"/api/discussions/{discussion_id}", headers=alice_headers)

        assert anonymous.json()["discussion"]["user_vote"] is None
        assert mine.json()["discussion"]["user_vote"] == "disagree"

    async def test_title_too_long(self, client: httpx.AsyncClient, alice_headers):
        response = await client.post(
            "/api/discussions", json={"title": "x" * 256, "content": "c"}, headers=alice_headers
        )
        _assert_error(response, 400)

    async def test_comments_flow(self, client: httpx.AsyncClient, alice_headers, bob_headers):
        discussion_id = await self._create(client, alice_headers)
        url = f"/api/discussions/{discussion_id}/comments"

        created = await client.post(url, json={"content": "  Enies Lobby  "}, headers=bob_headers)
        assert created.status_code == 201
        comment = created.json()["comment"]
        assert comment["content"] == "Enies Lobby"
        assert comment["username"] == "bob"

        listing = await client.get(url)
        assert [c["id"] for c in listing.json()["comments"]] == [comment["id"]]

        _assert_error(await client.delete(f"{url}/{comment['id']}", headers=alice_headers), 403)

        deleted = await client.delete(f"{url}/{comment['id']}", headers=bob_headers)
        assert deleted.status_code == 200
        assert (await client.get(url)).json()["comments"] == []

    async def test_blank_comment_rejected(self, client: httpx.AsyncClient, alice_headers):
        discussion_id = await self._create(client, alice_headers)
        response = await client.post(
            f"/api/discussions/{discussion_id}/comments", json={"content": "   "}, headers=alice_headers
        )
        _assert_error(response, 400)

    async def test_comments_missing_discussion(self, client: httpx.AsyncClient):
        _assert_error(await client.get(f"/api/discussions/{uuid.uuid4()}/comments"), 404)


# ============================================================================
# PLATFORMS / MISC
# ============================================================================

class TestPlatformEndpoints:

    async def test_platforms_by_region(self, client: httpx.AsyncClient, session_factory):
        async with session_factory() as session:
            service = PlatformService(session)
            crunchyroll = await service.upsert_platform("crunchyroll", "Crunchyroll", "https://www.crunchyroll.com")
            await service.upsert_platform("netflix", "Netflix", "https://www.netflix.com", region="JP")
            await service.add_anime_platform(21, crunchyroll.id, "available", url="https://cr.example/op")
            await session.commit()

        all_us = await client.get("/api/platforms")
        assert all_us.json()["region"] == "US"
        assert [p["name"] for p in all_us.json()["platforms"]] == ["crunchyroll"]

        all_jp = await client.get("/api/platforms", params={"region": "JP"})
        assert [p["name"] for p in all_jp.json()["platforms"]] == ["netflix"]

        for_anime = await client.get("/api/platforms/21")
        body = for_anime.json()
        assert body["anime_id"] == 21
        assert body["platforms"][0]["direct_url"] == "https://cr.example/op"
        assert body["platforms"][0]["availability_status"] == "available"

    async def test_invalid_anime_id(self, client: httpx.AsyncClient):
        _assert_error(await client.get("/api/platforms/abc"), 400)


class TestErrorShape:

    async def test_unknown_route(self, client: httpx.AsyncClient):
        _assert_error(await client.get("/api/nope"), 404)


class _OfflineCache:
    async def health_check(self) -> bool:
        return False


class TestHealth:

    async def test_degraded_without_redis(self, client: httpx.AsyncClient):
        app.dependency_overrides[get_cache] = lambda: _OfflineCache()
        try:
            response = await client.get("/api/health")
        finally:
            app.dependency_overrides.pop(get_cache, None)

        assert response.status_code == 200
        body = response.json()
        assert body["database"] == "ok"
        assert body["status"] == "degraded"


def _failing_app() -> FastAPI:
    failing = FastAPI()
    register_exception_handlers(failing)

    @failing.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    return failing


class TestUnhandledErrors:

    async def _get_boom(self) -> httpx.Response:
        # ServerErrorMiddleware re-raises after sending the response
        transport = httpx.ASGITransport(app=_failing_app(), raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            return await ac.get("/boom")

    async def test_production_hides_internals(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")

        response = await self._get_boom()

        _assert_error(response, 500)
        assert response.json() == {"success": False, "message": "Internal Server Error"}
        assert "secret internals" not in response.text

    async def test_development_includes_detail_and_stack(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")

        response = await self._get_boom()

        _assert_error(response, 500)
        body = response.json()
        assert body["detail"] == "secret internals"
        assert any("RuntimeError" in line for line in body["stack"])
