import logging
from datetime import datetime, timezone

from bson import ObjectId

from shop_api.database.mongo import MongoStore
from shop_api.models import ProductCreate, ProductUpdate, serialize_document
from shop_api.services.query_builder import ProductQuery

logger = logging.getLogger(__name__)


async def list_products(store: MongoStore, query: ProductQuery) -> list[dict]:
    cursor = store.products.find(query.filter, query.projection)
    if query.sort:
        cursor = cursor.sort(query.sort)
    docs = await cursor.to_list(None)
    return [serialize_document(doc) for doc in docs]


async def get_product(store: MongoStore, product_id: ObjectId) -> dict | None:
    doc = await store.products.find_one({"_id": product_id})
    return serialize_document(doc) if doc else None


async def create_product(store: MongoStore, data: ProductCreate) -> dict:
    doc = {
        **data.changes(),
        "createdAt": datetime.now(timezone.utc),
    }
    result = await store.products.insert_one(doc)
    logger.info("Created product %s", result.inserted_id)
    return serialize_document({"_id": result.inserted_id, **doc})


async def update_product(store: MongoStore, product_id: ObjectId, data: ProductCreate | ProductUpdate) -> bool:
    """
    $set whatever the body carries. A ProductCreate body replaces all three
    fields, a ProductUpdate only the supplied ones; createdAt is never touched.
    Returns False when no product has that id.
    """
    result = await store.products.update_one({"_id": product_id}, {"$set": data.changes()})
    return result.matched_count > 0


async def delete_product(store: MongoStore, product_id: ObjectId) -> bool:
    result = await store.products.delete_one({"_id": product_id})
    if result.deleted_count:
        logger.info("Deleted product %s", product_id)
    return result.deleted_count > 0
