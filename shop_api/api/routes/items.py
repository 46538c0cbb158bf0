from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Response

from shop_api.api.deps import get_store, parse_object_id, require_api_key
from shop_api.database.mongo import MongoStore
from shop_api.models import ItemCreate, ItemUpdate
from shop_api.services import item_service

router = APIRouter()

NOT_FOUND = "Item not found"

# Reads are public, every mutation needs the shared secret
protected = [Depends(require_api_key)]


@router.get("")
async def list_items(store: MongoStore = Depends(get_store)):
    return await item_service.list_items(store)


@router.get("/{id}")
async def get_item(item_id: ObjectId = Depends(parse_object_id), store: MongoStore = Depends(get_store)):
    item = await item_service.get_item(store, item_id)
    if not item:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return item


@router.post("", status_code=201, dependencies=protected)
async def create_item(body: ItemCreate, store: MongoStore = Depends(get_store)):
    item = await item_service.create_item(store, body)
    return {"message": "Item created", "item": item}


@router.put("/{id}", dependencies=protected)
async def replace_item(
    body: ItemCreate,
    item_id: ObjectId = Depends(parse_object_id),
    store: MongoStore = Depends(get_store),
):
    if not await item_service.update_item(store, item_id, body):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Item fully updated"}


@router.patch("/{id}", dependencies=protected)
async def patch_item(
    body: ItemUpdate,
    item_id: ObjectId = Depends(parse_object_id),
    store: MongoStore = Depends(get_store),
):
    if not await item_service.update_item(store, item_id, body):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Item partially updated"}


@router.delete("/{id}", status_code=204, dependencies=protected)
async def delete_item(item_id: ObjectId = Depends(parse_object_id), store: MongoStore = Depends(get_store)):
    if not await item_service.delete_item(store, item_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)
