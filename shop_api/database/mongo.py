import logging

from motor.motor_asyncio import AsyncIOMotorClient

from shop_api.config import Settings

logger = logging.getLogger(__name__)

PRODUCTS_COLLECTION = "products"
ITEMS_COLLECTION = "items"


class MongoStore:
    """
    Holds the single motor client for the process and the two collections
    the API works with. Built once at startup and handed to the app.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str):
        self.client = client
        self.db = client[db_name]
        self.products = self.db[PRODUCTS_COLLECTION]
        self.items = self.db[ITEMS_COLLECTION]

    async def ping(self) -> None:
        await self.client.admin.command("ping")

    def close(self) -> None:
        self.client.close()


async def connect(settings: Settings) -> MongoStore:
    store = MongoStore(AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True), settings.MONGO_DB)
    # motor connects lazily; ping so a bad URI fails startup instead of the first request
    await store.ping()
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB)
    return store
