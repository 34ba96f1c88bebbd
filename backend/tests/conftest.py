"""
Mflix API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   No MongoDB is needed. Resource services and routes receive in-memory
       Store fakes, injected through `app.dependency_overrides[get_store]`.

Fixture Hierarchy:
    ├── memory_store:     InMemoryStore, a working dict-backed Store
    ├── untouchable_store: fails the test if any store method is awaited
    ├── broken_store:     every operation raises like a dropped connection
    ├── sample_movie / sample_comment / sample_theater: request bodies
    └── client / untouchable_client / broken_client:
                          fresh FastAPI app + HTTPX AsyncClient bound to a store
"""

import os

# Test settings, set BEFORE any application import
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "mflix_test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENFORCE_COMMENT_PARENT"] = "false"

from typing import Any, Dict, List, Optional

import bson
import pytest
import pytest_asyncio
from bson import ObjectId
from bson.codec_options import CodecOptions
from httpx import ASGITransport, AsyncClient

from mflix_api.database import get_store
from mflix_api.services.store_base import Document, Store

# Same decoding as the application client (tz_aware=True)
STORE_CODEC_OPTIONS = CodecOptions(tz_aware=True)


# ══════════════════════════════════════════════════════════════════════════
# Store Fakes
# ══════════════════════════════════════════════════════════════════════════


def bson_round_trip(document: Document) -> Document:
    """What the driver would hand back after storing `document`."""
    return bson.decode(bson.encode(document), codec_options=STORE_CODEC_OPTIONS)


class InMemoryStore(Store):
    """
    Dict-backed Store with MongoDB-like equality filters.

    Documents go through BSON on the way in and out, like with a real server:
    datetimes come back UTC-aware and truncated to milliseconds, and tests
    cannot alias stored state. `calls` records (operation, collection).
    """

    def __init__(self):
        self.collections: Dict[str, List[Document]] = {}
        self.calls: List[tuple] = []

    @staticmethod
    def _matches(document: Document, filter: Document) -> bool:
        return all(document.get(key) == value for key, value in filter.items())

    def seed(self, collection: str, document: Document) -> ObjectId:
        doc = dict(document)
        doc.setdefault("_id", ObjectId())
        doc = bson_round_trip(doc)
        self.collections.setdefault(collection, []).append(doc)
        return doc["_id"]

    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        self.calls.append(("find_one", collection))
        for document in self.collections.get(collection, []):
            if self._matches(document, filter):
                return bson_round_trip(document)
        return None

    async def find(self, collection: str, filter: Document, limit: int) -> List[Document]:
        self.calls.append(("find", collection))
        found = [
            bson_round_trip(d) for d in self.collections.get(collection, []) if self._matches(d, filter)
        ]
        return found[:limit]

    async def insert_one(self, collection: str, document: Document) -> ObjectId:
        self.calls.append(("insert_one", collection))
        return self.seed(collection, document)

    async def replace_one(self, collection: str, filter: Document, document: Document) -> int:
        self.calls.append(("replace_one", collection))
        documents = self.collections.get(collection, [])
        for index, existing in enumerate(documents):
            if self._matches(existing, filter):
                replacement = dict(document)
                replacement["_id"] = existing["_id"]
                documents[index] = bson_round_trip(replacement)
                return 1
        return 0

    async def delete_one(self, collection: str, filter: Document) -> int:
        self.calls.append(("delete_one", collection))
        documents = self.collections.get(collection, [])
        for index, existing in enumerate(documents):
            if self._matches(existing, filter):
                del documents[index]
                return 1
        return 0

    async def ping(self) -> bool:
        return True


class UntouchableStore(Store):
    """Any store access fails the test: used to prove requests stop early."""

    def _fail(self, operation: str) -> Any:
        pytest.fail(f"store.{operation} must not be called")

    async def find_one(self, collection, filter):
        self._fail("find_one")

    async def find(self, collection, filter, limit):
        self._fail("find")

    async def insert_one(self, collection, document):
        self._fail("insert_one")

    async def replace_one(self, collection, filter, document):
        self._fail("replace_one")

    async def delete_one(self, collection, filter):
        self._fail("delete_one")

    async def ping(self):
        self._fail("ping")


class BrokenStore(Store):
    """Every operation raises, like a driver that lost its connection."""

    message = "connection closed by server"

    async def find_one(self, collection, filter):
        raise ConnectionError(self.message)

    async def find(self, collection, filter, limit):
        raise ConnectionError(self.message)

    async def insert_one(self, collection, document):
        raise ConnectionError(self.message)

    async def replace_one(self, collection, filter, document):
        raise ConnectionError(self.message)

    async def delete_one(self, collection, filter):
        raise ConnectionError(self.message)

    async def ping(self):
        return False


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def untouchable_store():
    return UntouchableStore()


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def sample_movie():
    return {
        "title": "Warhammer New Days",
        "year": 2026,
        "director": "Arbi Tazeur",
        "genre": ["action", "drame"],
        "plot": "...The last day of Humanity has come",
    }


@pytest.fixture
def sample_comment():
    return {
        "name": "Arbi Tazeur",
        "email": "arbi.tazeur@fqdn.com",
        "text": "Film incroyable, un lore de qualité totalement respecté.",
        "date": "2025-04-11T08:57:05Z",
    }


@pytest.fixture
def sample_theater():
    return {
        "theaterId": 1000,
        "location": {
            "address": {
                "street1": "340 W Market",
                "city": "Bloomington",
                "state": "MN",
                "zipcode": "55425",
            },
            "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]},
        },
    }


def build_app(store: Store):
    """Fresh application whose routes all receive `store`."""
    from mflix_api.main import create_app

    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    return app


@pytest_asyncio.fixture
async def client(memory_store):
    """
    HTTPX AsyncClient talking to an app backed by `memory_store`.

    Usage:
        async def test_list(client, memory_store):
            response = await client.get("/api/movies")
    """
    transport = ASGITransport(app=build_app(memory_store))
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def untouchable_client(untouchable_store):
    transport = ASGITransport(app=build_app(untouchable_store))
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def broken_client(broken_store):
    transport = ASGITransport(app=build_app(broken_store))
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
