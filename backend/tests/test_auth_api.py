"""Session cookie issue/clear and the guard in front of protected routes."""

from datetime import timedelta

import pytest

from api_helpers import login
from livingbook.core.config import settings
from livingbook.core.security import create_session_token


@pytest.mark.asyncio
async def test_root_is_alive(async_client):
    response = await async_client.get("/")

    assert response.status_code == 200
    assert response.text == "Living Book server is running"


@pytest.mark.asyncio
async def test_ping(async_client):
    response = await async_client.get("/ping")

    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_jwt_sets_http_only_cookie(async_client):
    response = await async_client.post("/jwt", json={"email": "a@x.com", "name": "A"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=3600" in set_cookie
    assert async_client.cookies.get("token") == body["token"]


@pytest.mark.asyncio
async def test_jwt_requires_an_email(async_client):
    response = await async_client.post("/jwt", json={"name": "anonymous"})

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["a@localhost", "user@example.test", "not-an-email"])
async def test_jwt_refuses_special_use_and_malformed_addresses(async_client, email):
    response = await async_client.post("/jwt", json={"email": email})

    assert response.status_code == 422
    assert "token" not in async_client.cookies


@pytest.mark.asyncio
async def test_production_cookie_is_secure(async_client, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    response = await async_client.post("/jwt", json={"email": "a@x.com"})

    set_cookie = response.headers["set-cookie"]
    assert "Secure" in set_cookie
    assert "SameSite=none" in set_cookie


@pytest.mark.asyncio
async def test_protected_route_without_cookie_is_unauthorized(async_client):
    response = await async_client.get("/bookings", params={"email": "a@x.com"})

    assert response.status_code == 401
    assert response.json() == {"message": "unauthorized access"}


@pytest.mark.asyncio
async def test_token_in_authorization_header_is_ignored(async_client):
    token = create_session_token({"email": "a@x.com"})

    response = await async_client.get(
        "/bookings",
        params={"email": "a@x.com"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [
        "not-a-token",
        create_session_token({"email": "a@x.com"}, expires_delta=timedelta(seconds=-5)),
    ],
    ids=["garbage", "expired"],
)
async def test_bad_tokens_get_the_same_answer(async_client, token):
    response = await async_client.get(
        "/bookings",
        params={"email": "a@x.com"},
        headers={"Cookie": f"token={token}"},
    )

    assert response.status_code == 401
    assert response.json() == {"message": "unauthorized access"}


@pytest.mark.asyncio
async def test_logout_clears_cookie(async_client):
    await login(async_client, "a@x.com")

    response = await async_client.post("/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert "token" not in async_client.cookies
    follow_up = await async_client.get("/bookings", params={"email": "a@x.com"})
    assert follow_up.status_code == 401


@pytest.mark.asyncio
async def test_logout_without_session_still_succeeds(async_client):
    response = await async_client.post("/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.asyncio
async def test_token_replayed_after_logout_is_rejected(async_client):
    token = await login(async_client, "a@x.com")
    await async_client.post("/logout")

    response = await async_client.get(
        "/bookings",
        params={"email": "a@x.com"},
        headers={"Cookie": f"token={token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_stateless_mode_keeps_token_valid_until_expiry(async_client, monkeypatch):
    monkeypatch.setattr(settings, "SESSION_DENYLIST_ENABLED", False)
    token = await login(async_client, "a@x.com")
    await async_client.post("/logout")

    response = await async_client.get(
        "/bookings",
        params={"email": "a@x.com"},
        headers={"Cookie": f"token={token}"},
    )

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_other_sessions_survive_a_logout(async_client):
    other = create_session_token({"email": "a@x.com"})
    await login(async_client, "a@x.com")
    await async_client.post("/logout")

    response = await async_client.get(
        "/bookings",
        params={"email": "a@x.com"},
        headers={"Cookie": f"token={other}"},
    )

    assert response.status_code == 200
