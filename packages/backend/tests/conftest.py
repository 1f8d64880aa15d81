"""Test fixtures: a fresh in-memory SQLite database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own engine on sqlite+aiosqlite:///:memory: with the
   schema created from the ORM models.
2. get_db is overridden so every request opens a session on that engine.
3. After the test the engine is disposed and the database vanishes.

bcrypt rounds are dropped to the minimum so signup/login stay fast.
"""

import base64
import os

os.environ.setdefault("COURSEAPI_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("COURSEAPI_BCRYPT_ROUNDS", "4")
os.environ.setdefault("COURSEAPI_CREATE_TABLES_ON_STARTUP", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from courseapi.db.engine import build_engine, get_db, init_models  # noqa: E402
from courseapi.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


def basic_auth(email: str, password: str) -> dict[str, str]:
    """Authorization header for HTTP Basic credentials."""
    token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest_asyncio.fixture()
async def db_engine():
    engine = build_engine(TEST_DB_URL)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the app's get_db pointed at the test database.

    Auth is NOT overridden: every protected request goes through the real
    Basic auth gate, so tests sign users up and send their credentials.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _signup(client, first, last, email, password="s3cret-pass"):
    r = await client.post(
        "/api/users",
        json={
            "firstName": first,
            "lastName": last,
            "emailAddress": email,
            "password": password,
        },
    )
    assert r.status_code == 201, r.text
    return {
        "firstName": first,
        "lastName": last,
        "emailAddress": email,
        "password": password,
        "headers": basic_auth(email, password),
    }


@pytest_asyncio.fixture()
async def alice(client):
    """A signed-up user, with ready-made auth headers."""
    return await _signup(client, "Alice", "Liddell", "alice@mail.com")


@pytest_asyncio.fixture()
async def bob(client):
    return await _signup(client, "Bob", "Builder", "bob@mail.com", password="bobs-pass")
