from bson import ObjectId
from fastapi import Depends, Header, HTTPException, Request

from shop_api.config import Settings
from shop_api.database.mongo import MongoStore
from shop_api.services.access import API_KEY_HEADER, AccessDecision, check_api_key


def get_store(request: Request) -> MongoStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_object_id(id: str) -> ObjectId:
    # Reject before any store round trip
    if not ObjectId.is_valid(id):
        raise HTTPException(status_code=400, detail="Invalid id")
    return ObjectId(id)


def require_api_key(
    api_key: str | None = Header(None, alias=API_KEY_HEADER),
    settings: Settings = Depends(get_app_settings),
):
    decision = check_api_key(api_key, settings.API_KEY)
    if decision is AccessDecision.UNAUTHENTICATED:
        raise HTTPException(status_code=401, detail="API key is missing")
    if decision is AccessDecision.FORBIDDEN:
        raise HTTPException(status_code=403, detail="Invalid API key")
