import asyncio

from shop_api.config import Settings
from shop_api.database import mongo


class RecordingClient:
    def __init__(self, uri, **kwargs):
        self.uri = uri
        self.kwargs = kwargs

    def __getitem__(self, name):
        return {"products": "products", "items": "items"}


def test_connect_returns_timezone_aware_client(monkeypatch):
    pinged = []

    async def ping(self):
        pinged.append(self)

    monkeypatch.setattr(mongo, "AsyncIOMotorClient", RecordingClient)
    monkeypatch.setattr(mongo.MongoStore, "ping", ping)

    settings = Settings(MONGO_URI="mongodb://db:27017", MONGO_DB="shop_test", _env_file=None)
    store = asyncio.run(mongo.connect(settings))

    assert store.client.uri == "mongodb://db:27017"
    # stored UTC timestamps must come back with their offset
    assert store.client.kwargs["tz_aware"] is True
    assert pinged == [store]
    assert store.products == "products"
    assert store.items == "items"
