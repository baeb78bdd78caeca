"""Tests for the error handlers — generic 500s and 400 field detail."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("connection to db-internal.local:5432 refused")

    # The server error middleware re-raises after responding; keep the response.
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/boom")

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "db-internal" not in r.text


@pytest.mark.asyncio
async def test_database_error_keeps_middleware_headers(app, client):
    @app.get("/api/broken")
    async def broken():
        raise OperationalError("SELECT 1", {}, Exception("db-internal.local unreachable"))

    r = await client.get("/api/broken")

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "db-internal" not in r.text
    assert r.headers["X-Request-ID"]
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_malformed_json_is_400(client):
    r = await client.post(
        "/api/auth/signup",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid request"


@pytest.mark.asyncio
async def test_bad_task_id_is_400(client):
    body = (
        await client.post("/api/auth/signup", json={"email": "id@x.com", "password": "secret123"})
    ).json()
    r = await client.get(
        "/api/tasks/not-a-uuid",
        headers={"Authorization": f"Bearer {body['token']}"},
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "task_id"
