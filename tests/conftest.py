"""Test fixtures — a fresh app and in-memory database per test.

Learn: create_app() takes its Settings as an argument, so each test
builds its own app pointed at `sqlite+aiosqlite://` (one shared
in-memory connection via StaticPool), with a known signing secret and
bcrypt cost lowered to 4 so hashing doesn't dominate the run.

httpx's ASGITransport doesn't run the lifespan, so the tables are created
here directly.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tasklist.config import Settings
from tasklist.db.engine import create_tables
from tasklist.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef0123456789"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "jwt_secret": TEST_SECRET,
        "bcrypt_rounds": 4,
        "environment": "test",
        "create_tables": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings():
    return make_settings()


@pytest_asyncio.fixture()
async def app(settings):
    app = create_app(settings)
    await create_tables(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client running requests through the full app, auth included."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def db_session(app):
    """A session on the same database the app uses, for direct inspection."""
    async with app.state.session_factory() as session:
        yield session


async def signup(client, email: str, password: str = "secret123") -> dict:
    """Sign up through the API and return the response body."""
    r = await client.post("/api/auth/signup", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
