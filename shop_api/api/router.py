from fastapi import APIRouter
from shop_api.api.routes import items, products

api_router = APIRouter()

api_router.include_router(products.router, prefix="/api/products", tags=["Products"])
api_router.include_router(items.router, prefix="/api/items", tags=["Items"])
