"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.op_common.errors import AppError, InternalError
from src.op_common.logging_setup import configure_logging
from src.op_common.redis_client import close_redis, get_redis
from src.op_common.response import error_response
from src.op_gateway.middleware.request_log import RequestLogMiddleware
from src.op_labels.api.router import router as labels_router
from src.op_orders.api.catalog_router import router as catalog_router
from src.op_orders.api.router import router as orders_router
from src.op_overrides.api.router import router as overrides_router
from src.op_shopify.infrastructure.client import close_shopify_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging + verify Redis (when used). Shutdown: close pools."""
    # Startup
    configure_logging(settings.LOG_LEVEL)
    if settings.OVERRIDE_BACKEND == "redis":
        redis = await get_redis()
        await redis.ping()
    logger.info(
        "Started for shop %s (override backend: %s)",
        settings.SHOPIFY_SHOP,
        settings.OVERRIDE_BACKEND,
    )
    yield
    # Shutdown
    await close_shopify_client()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


app.include_router(orders_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(overrides_router, prefix="/api/v1")
app.include_router(labels_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
