"""
FixNexus Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No real MongoDB: collections and stores are AsyncMock/MagicMock
       objects, injected into the app through FastAPI dependency_overrides.

Fixtures:
    ├── mock_collection: pymongo AsyncCollection stand-in (find cursor chain included)
    ├── memory_collection: mongomock collection behind the async collection API
    ├── services_store / booked_services_store: DocumentStore stand-ins
    ├── mock_database: MongoDatabase stand-in exposing both stores
    ├── token_service: real TokenService bound to the test secret
    ├── auth_header: builds a Cookie header carrying a token for an email
    └── test_client: HTTPX AsyncClient talking to the app over ASGI
"""

import os

# Must be set before the application (and its settings singleton) is imported
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret-that-is-long-enough-for-hs256-keys"
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["NODE_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import mongomock
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fixnexus.database import (
    MongoDatabase,
    get_booked_services_store,
    get_database,
    get_services_store,
)
from fixnexus.services.document_store import DocumentStore
from fixnexus.services.token_service import get_token_service

STORE_METHODS = (
    "find_many",
    "find_one",
    "count",
    "insert_one",
    "replace_or_insert",
    "merge_fields",
    "delete_one",
)


def _mock_store(name: str):
    store = MagicMock(spec=DocumentStore)
    store.name = name
    for method in STORE_METHODS:
        setattr(store, method, AsyncMock())
    return store


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    find() returns a cursor whose skip()/limit() chain back to itself and
    whose to_list() is awaitable. Set ``collection.cursor.to_list.return_value``
    to control the documents returned.
    """
    collection = MagicMock()
    collection.name = "services"

    cursor = MagicMock()
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    collection.cursor = cursor

    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


class _AsyncCursor:
    def __init__(self, cursor):
        self._cursor = cursor

    def skip(self, count):
        self._cursor = self._cursor.skip(count)
        return self

    def limit(self, count):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        return list(self._cursor)


class AsyncMemoryCollection:
    """Awaitable facade over a mongomock collection, matching the calls DocumentStore makes."""

    def __init__(self, collection):
        self._collection = collection

    @property
    def name(self):
        return self._collection.name

    def find(self, filter):
        return _AsyncCursor(self._collection.find(filter))

    async def find_one(self, filter):
        return self._collection.find_one(filter)

    async def count_documents(self, filter):
        return self._collection.count_documents(filter)

    async def insert_one(self, document):
        return self._collection.insert_one(document)

    async def update_one(self, filter, update, upsert=False):
        return self._collection.update_one(filter, update, upsert=upsert)

    async def delete_one(self, filter):
        return self._collection.delete_one(filter)


@pytest.fixture
def memory_collection():
    """A fresh in-memory ``services`` collection per test."""
    return AsyncMemoryCollection(mongomock.MongoClient()["fixnexus"]["services"])


@pytest.fixture
def services_store():
    return _mock_store("services")


@pytest.fixture
def booked_services_store():
    return _mock_store("bookedServices")


@pytest.fixture
def mock_database(services_store, booked_services_store):
    database = MagicMock(spec=MongoDatabase)
    database.services = services_store
    database.booked_services = booked_services_store
    database.ping = AsyncMock()
    return database


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def auth_header(token_service):
    """
    Usage:
        headers = auth_header("provider@example.com")
        await test_client.get("/manage-services/provider@example.com", headers=headers)
    """

    def _build(email: str) -> dict:
        return {"Cookie": f"token={token_service.issue({'email': email})}"}

    return _build


@pytest_asyncio.fixture
async def test_client(mock_database, services_store, booked_services_store):
    """
    HTTPX AsyncClient bound to the FastAPI app with mocked stores.

    ASGITransport does not run the lifespan, so no MongoDB client is created.
    """
    from fixnexus.main import app

    app.dependency_overrides[get_database] = lambda: mock_database
    app.dependency_overrides[get_services_store] = lambda: services_store
    app.dependency_overrides[get_booked_services_store] = lambda: booked_services_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
