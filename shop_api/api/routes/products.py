from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Query

from shop_api.api.deps import get_store, parse_object_id
from shop_api.database.mongo import MongoStore
from shop_api.models import ProductCreate, ProductUpdate
from shop_api.services import product_service
from shop_api.services.query_builder import InvalidQueryParameter, build_product_query

router = APIRouter()

NOT_FOUND = "Product not found"


@router.get("")
async def list_products(
    category: str | None = None,
    min_price: str | None = Query(None, alias="minPrice"),
    sort: str | None = None,
    fields: str | None = None,
    store: MongoStore = Depends(get_store),
):
    try:
        query = build_product_query(category, min_price, sort, fields)
    except InvalidQueryParameter as e:
        raise HTTPException(status_code=400, detail=str(e))

    products = await product_service.list_products(store, query)
    return {"count": len(products), "products": products}


@router.get("/{id}")
async def get_product(product_id: ObjectId = Depends(parse_object_id), store: MongoStore = Depends(get_store)):
    product = await product_service.get_product(store, product_id)
    if not product:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return product


@router.post("", status_code=201)
async def create_product(body: ProductCreate, store: MongoStore = Depends(get_store)):
    product = await product_service.create_product(store, body)
    return {"message": "Product created", "product": product}


@router.put("/{id}")
async def replace_product(
    body: ProductCreate,
    product_id: ObjectId = Depends(parse_object_id),
    store: MongoStore = Depends(get_store),
):
    if not await product_service.update_product(store, product_id, body):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Product updated"}


@router.patch("/{id}")
async def patch_product(
    body: ProductUpdate,
    product_id: ObjectId = Depends(parse_object_id),
    store: MongoStore = Depends(get_store),
):
    if not await product_service.update_product(store, product_id, body):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Product updated"}


@router.delete("/{id}")
async def delete_product(product_id: ObjectId = Depends(parse_object_id), store: MongoStore = Depends(get_store)):
    if not await product_service.delete_product(store, product_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Product deleted"}
