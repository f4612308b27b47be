"""
NeoLayer Store API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_store:      StoreContext over three in-memory collections
    ├── test_client:     HTTPX AsyncClient talking to create_app(store=fake_store)
    ├── failing_collection: AsyncMock collection whose calls raise PyMongoError
    └── sample_product_payload / sample_order_payload

The in-memory collection implements only the slice of the pymongo async
collection API the services call: find().sort().to_list(), find_one,
insert_one, update_one ($set, upsert) and delete_one, with equality filters.
"""

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "neolayer-store-test"
os.environ["LOG_LEVEL"] = "WARNING"

from store_api.database import StoreContext  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection double
# ══════════════════════════════════════════════════════════════════════════

def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        present = [d for d in self._docs if key in d]
        missing = [d for d in self._docs if key not in d]
        present.sort(key=lambda d: d[key], reverse=direction < 0)
        # MongoDB orders a missing field as the lowest value
        self._docs = present + missing if direction < 0 else missing + present
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = [dict(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query: Dict[str, Any], projection: Any = None):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc: Dict[str, Any]):
        doc.setdefault("_id", ObjectId())
        if any(d["_id"] == doc["_id"] for d in self.docs):
            raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}")
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any], upsert: bool = False):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)
        if upsert:
            new_doc = {**query, **update.get("$set", {})}
            new_doc.setdefault("_id", ObjectId())
            self.docs.append(new_doc)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=new_doc["_id"])
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

    async def delete_one(self, query: Dict[str, Any]):
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_store() -> StoreContext:
    return StoreContext(
        products=FakeCollection("products"),
        orders=FakeCollection("orders"),
        settings=FakeCollection("settings"),
    )


@pytest.fixture
def failing_collection():
    """
    A collection whose every call fails like an unreachable server.

    find() is synchronous in pymongo (it returns a cursor), so the failure
    surfaces from the awaited to_list().
    """
    error = ServerSelectionTimeoutError("localhost:27017: connection refused")
    collection = MagicMock()
    collection.find.return_value.sort.return_value.to_list = AsyncMock(side_effect=error)
    collection.find.return_value.to_list = AsyncMock(side_effect=error)
    collection.find_one = AsyncMock(side_effect=error)
    collection.insert_one = AsyncMock(side_effect=error)
    collection.update_one = AsyncMock(side_effect=error)
    collection.delete_one = AsyncMock(side_effect=error)
    return collection


@pytest.fixture
def sample_product_payload():
    return {"name": "Mug", "description": "Ceramic", "price": "9.99"}


@pytest.fixture
def sample_order_payload():
    return {
        "customerName": "Ada Lovelace",
        "items": [{"name": "Mug", "price": 9.99, "quantity": 2}],
        "total": 19.98,
        "status": "pending",
        "createdAt": datetime(2024, 3, 14, 10, 0, tzinfo=timezone.utc).isoformat(),
    }


@pytest.fixture
def timestamps():
    """Three strictly increasing ISO timestamps."""
    base = datetime(2024, 3, 14, 10, 0, tzinfo=timezone.utc)
    return [(base + timedelta(minutes=i)).isoformat() for i in range(3)]


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient wired to a fresh app over the in-memory store.

    ASGITransport does not run the lifespan, so no MongoDB connection is made.
    """
    from store_api.main import create_app

    app = create_app(store=fake_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
