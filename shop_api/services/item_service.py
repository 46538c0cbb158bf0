import logging
from datetime import datetime, timezone

from bson import ObjectId

from shop_api.database.mongo import MongoStore
from shop_api.models import ItemCreate, ItemUpdate, serialize_document

logger = logging.getLogger(__name__)


async def list_items(store: MongoStore) -> list[dict]:
    docs = await store.items.find().to_list(None)
    return [serialize_document(doc) for doc in docs]


async def get_item(store: MongoStore, item_id: ObjectId) -> dict | None:
    doc = await store.items.find_one({"_id": item_id})
    return serialize_document(doc) if doc else None


async def create_item(store: MongoStore, data: ItemCreate) -> dict:
    doc = {**data.changes(), "createdAt": datetime.now(timezone.utc)}
    result = await store.items.insert_one(doc)
    logger.info("Created item %s", result.inserted_id)
    return serialize_document({"_id": result.inserted_id, **doc})


async def update_item(store: MongoStore, item_id: ObjectId, data: ItemCreate | ItemUpdate) -> bool:
    result = await store.items.update_one({"_id": item_id}, {"$set": data.changes()})
    return result.matched_count > 0


async def delete_item(store: MongoStore, item_id: ObjectId) -> bool:
    result = await store.items.delete_one({"_id": item_id})
    if result.deleted_count:
        logger.info("Deleted item %s", item_id)
    return result.deleted_count > 0
