"""
Pytest fixtures for the fake database, HTTP client and seed records.

Unit tests never open a real MongoDB connection: the get_database dependency
is overridden with an in-memory FakeDatabase that implements the small
subset of the Motor collection API the services use. Tests marked
``integration`` (test_mongo_integration.py) run against a real server.
"""

import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/eventbook_test")
os.environ.setdefault("MONGODB_DB_NAME", "eventbook_test")

import copy
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo import ASCENDING, DESCENDING

from eventbook.db.connection import get_database
from eventbook.main import app
from eventbook.models.event import Event
from eventbook.schemas.event import EventCreate
from eventbook.services.event_service import create_event


def _matches(document: dict, query: dict) -> bool:
    return all(document.get(key) == value for key, value in query.items())


def _check_key_direction(key, direction) -> None:
    if not isinstance(key, str):
        raise TypeError(f"key must be a field name, not {key!r}")
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"direction must be ASCENDING or DESCENDING, not {direction!r}")


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self._documents = documents

    def sort(self, key: str, direction: int = ASCENDING) -> "FakeCursor":
        _check_key_direction(key, direction)
        self._documents.sort(key=lambda d: d.get(key), reverse=direction == DESCENDING)
        return self

    def __aiter__(self):
        self._iter = iter(self._documents)
        return self

    async def __anext__(self) -> dict:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict] = []
        self.indexes: dict[str, list] = {}
        self.find_one_calls = 0
        self.fail_with: Exception | None = None

    async def insert_one(self, document: dict):
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, query: dict):
        self.find_one_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: dict) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.documents if _matches(d, query)])

    async def update_one(self, query: dict, update: dict):
        for document in self.documents:
            if _matches(document, query):
                document.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: dict):
        for i, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, keys, name=None, **kwargs):
        """Accepts the same key list shape Motor does: [(field, direction), ...]."""
        keys = list(keys)
        if not keys or not isinstance(name, str):
            raise ValueError(f"create_index needs keys and a name, got {keys!r}, {name!r}")
        for key, direction in keys:
            _check_key_direction(key, direction)
        self.indexes[name] = keys
        return name


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def command(self, name: str):
        return {"ok": 1.0}


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest_asyncio.fixture
async def client(db: FakeDatabase) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the database dependency with the fake."""

    async def override_get_database():
        return db

    app.dependency_overrides[get_database] = override_get_database

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_event(db: FakeDatabase) -> Event:
    return await create_event(
        db,
        EventCreate(title="Test Concert", description="A test event", location="Test Venue"),
    )
