"""
Fixtures shared by the service and API tests.

Each test runs against a fresh in-memory MongoDB (mongomock-motor) that is
handed to init_db, so no server is needed.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from bazaar.models import init_db
from bazaar.services import AuthService


@pytest_asyncio.fixture
async def db():
    mongo_client = AsyncMongoMockClient()
    await init_db(mongo_client)
    yield mongo_client


@pytest_asyncio.fixture
async def users(db):
    """Three registered users keyed by username, values are their IDs."""
    result = {}
    for username in ("alice", "bob", "carol"):
        user = await AuthService.register_user(username, f"{username}-password")
        result[username] = str(user.id)
    return result


@pytest_asyncio.fixture
async def client(db):
    from bazaar.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def new_id() -> str:
    return str(ObjectId())


def find_one_misses_once(monkeypatch, model):
    """
    Make the next model.find_one come back empty, as if another request
    inserted the matching document right after the lookup.
    """
    original = model.find_one
    calls = []

    async def _missing():
        return None

    def find_one(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return _missing()
        return original(*args, **kwargs)

    monkeypatch.setattr(model, "find_one", staticmethod(find_one))
