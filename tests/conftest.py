from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from shop_api.config import Settings
from shop_api.main import create_app

API_KEY = "test-secret"


def _matches(doc: dict, filter: dict) -> bool:
    for key, cond in filter.items():
        value = doc.get(key)
        if isinstance(cond, dict):
            for op, arg in cond.items():
                if op != "$gte":
                    raise NotImplementedError(op)
                if value is None or value < arg:
                    return False
        elif value != cond:
            return False
    return True


def _project(doc: dict, projection: dict | None) -> dict:
    if not projection:
        return dict(doc)
    out = {"_id": doc["_id"]}
    for name in projection:
        if name in doc:
            out[name] = doc[name]
    return out


class FakeCursor:
    def __init__(self, docs, projection):
        self.docs = docs
        self.projection = projection

    def sort(self, keys):
        for key, direction in reversed(keys):
            self.docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length):
        return [_project(doc, self.projection) for doc in self.docs]


class FakeCollection:
    """In-memory stand-in for a motor collection; records every call."""

    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}
        self.calls: list[str] = []
        self.error: Exception | None = None

    def _record(self, name):
        self.calls.append(name)
        if self.error:
            raise self.error

    def find(self, filter=None, projection=None):
        self._record("find")
        docs = [dict(d) for d in self.docs.values() if _matches(d, filter or {})]
        return FakeCursor(docs, projection)

    async def find_one(self, filter):
        self._record("find_one")
        for doc in self.docs.values():
            if _matches(doc, filter):
                return dict(doc)
        return None

    async def insert_one(self, doc):
        self._record("insert_one")
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = dict(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, filter, update):
        self._record("update_one")
        for doc in self.docs.values():
            if _matches(doc, filter):
                doc.update(update["$set"])
                return SimpleNamespace(matched_count=1)
        return SimpleNamespace(matched_count=0)

    async def delete_one(self, filter):
        self._record("delete_one")
        for _id, doc in list(self.docs.items()):
            if _matches(doc, filter):
                del self.docs[_id]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeStore:
    def __init__(self):
        self.products = FakeCollection()
        self.items = FakeCollection()

    @property
    def calls(self) -> list[str]:
        return self.products.calls + self.items.calls

    def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(MONGO_URI="mongodb://localhost:27017", API_KEY=API_KEY, _env_file=None)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(settings, store):
    with TestClient(create_app(settings, store)) as c:
        yield c


@pytest.fixture
def auth():
    return {"X-API-Key": API_KEY}


@pytest.fixture
def seed():
    """Put a document straight into a fake collection, bypassing the API."""
    def _seed(collection: FakeCollection, **fields) -> ObjectId:
        _id = ObjectId()
        collection.docs[_id] = {"_id": _id, **fields}
        return _id
    return _seed
