"""Shared fixtures: an app wired to a throwaway SQLite database."""
from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from properties_api.core.config import Settings
from properties_api.db.session import Database
from properties_api.main import create_app

ADMIN_TOKEN = "admin-secret"
USER_TOKEN = "user-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        admin_tokens=[ADMIN_TOKEN],
        user_tokens=[USER_TOKEN],
        cors_allow_origins=[],
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'properties.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}
