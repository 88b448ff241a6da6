"""Shared test fixtures.

Tests run against a throwaway SQLite file (aiosqlite). The URL has to be in
the environment before vestiario.core.config is imported.
"""

import os
import tempfile
import uuid
from datetime import timedelta

_TEST_DB_DIR = tempfile.mkdtemp(prefix="vestiario-tests-")
os.environ["VB_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ.setdefault("VB_SECRET_KEY", "test-secret")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from vestiario.core.database import engine  # noqa: E402
from vestiario.main import app  # noqa: E402
from vestiario.models import Base  # noqa: E402
from vestiario.services.availability import venue_now  # noqa: E402

API = "/api/v1"


@pytest.fixture(autouse=True)
async def _fresh_database():
    """Dispose stale pool connections and rebuild every table before each test.

    The global engine is created at import time. When pytest-asyncio creates a new
    event loop for tests, any existing pooled connections are bound to the old loop
    and will fail with 'Future attached to a different loop'.
    """
    await engine.dispose()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def register(client: AsyncClient, role: str = "player", name: str = "Test Player") -> dict:
    """Register a fresh account and return its Authorization header."""
    resp = await client.post(
        f"{API}/auth/register",
        json={
            "email": f"{role}-{uuid.uuid4().hex[:8]}@example.com",
            "password": "secret123",
            "full_name": name,
            "role": role,
        },
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
async def owner_headers(client):
    return await register(client, role="owner", name="Carlos Mendes")


@pytest.fixture
async def player_headers(client):
    return await register(client, role="player", name="João Silva")


@pytest.fixture
async def court(client, owner_headers):
    """A football court at 100.00/hour, open on the default 08:00-22:00 day."""
    resp = await client.post(
        f"{API}/courts",
        json={
            "name": "Quadra Society 1",
            "sport": "Futebol",
            "hourly_rate": "100.00",
            "is_indoor": True,
            "address": "Rua Augusta, 1200",
            "city": "São Paulo",
            "state": "SP",
        },
        headers=owner_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def future_date():
    """A date far enough ahead that no slot on it is past."""
    return venue_now().date() + timedelta(days=30)
