import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shop_api.api.router import api_router
from shop_api.config import Settings, get_settings
from shop_api.database.mongo import MongoStore, connect

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc if part != "body") or "body"


def create_app(settings: Settings | None = None, store: MongoStore | None = None) -> FastAPI:
    """
    Build the Shop API.

    `store` is injected by callers that already hold a connection (tests);
    otherwise one is opened from `settings` during startup and closed on
    shutdown. Either way it is set exactly once on app.state.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if app.state.store is None:
            try:
                owned = await connect(settings)
            except Exception:
                logger.exception("Failed to connect to MongoDB")
                raise
            app.state.store = owned
        logger.info("Shop API ready")
        yield
        if owned is not None:
            owned.close()

    app = FastAPI(title="Shop API", version=settings.API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = [{"field": _field_name(err["loc"]), "message": err["msg"]} for err in exc.errors()]
        return JSONResponse({"error": "Invalid request", "details": details}, status_code=400)

    @app.exception_handler(PyMongoError)
    async def database_error(request: Request, exc: PyMongoError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Database error"}, status_code=500)

    @app.get("/")
    def root():
        return {
            "message": "Shop API",
            "endpoints": {
                "products": "/api/products",
                "items": "/api/items",
                "version": "/version",
            },
        }

    @app.get("/version")
    def version():
        return {"version": settings.API_VERSION, "updatedAt": settings.API_UPDATED_AT}

    app.include_router(api_router)

    # Registered last: anything that reaches here matched no real route
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    def route_not_found(path: str):
        return JSONResponse({"error": "API endpoint not found"}, status_code=404)

    return app


def run():
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging()
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)
    logger.info("Server starting on port %s", settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
