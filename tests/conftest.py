"""
Shared fixtures.

The environment is pinned before any application module is imported:
settings are read once at import time.
"""

import asyncio
import os
import tempfile
from pathlib import Path

_DB_PATH = Path(tempfile.gettempdir()) / f"smart-todo-test-{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from database.models import Base
from database.session import async_session_factory, engine


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture()
def client():
    from main import app

    asyncio.run(_reset_schema())
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture()
async def db():
    await _reset_schema()
    async with async_session_factory() as session:
        yield session


def register(client, username="alice", email="alice@example.com", password="secret123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client):
    """Registered user ``alice``: (token, user payload)."""
    body = register(client).json()
    return body["token"], body["user"]


@pytest.fixture()
def bob(client):
    body = register(client, "bob", "bob@example.com", "hunter22").json()
    return body["token"], body["user"]
