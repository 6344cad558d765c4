"""FastAPI app factory"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vessel_tracker import __version__
from vessel_tracker.core.config import settings
from vessel_tracker.core.logging import logger
from vessel_tracker.crawlers.http_client import shutdown_shared_http_client
from vessel_tracker.api import (
    cache_router,
    cors_middleware,
    get_lookup_service,
    health_router,
    vessel_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    logger.info("Starting application...")
    # the cache lives for the whole process, create it up front
    get_lookup_service()
    logger.info(
        f"Application started (provider={settings.provider_base_url}, "
        f"cache_ttl={settings.cache_ttl_seconds}s)"
    )
    yield
    logger.info("Shutting down application...")
    try:
        await shutdown_shared_http_client()
    except Exception as e:
        # shutdown hook errors must not block process exit
        logger.warning(f"HTTP client shutdown failed: {e}")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (404/405) in the API's error format"""
    if exc.status_code == 405:
        error = "Method not allowed"
        error_code = "METHOD_NOT_ALLOWED"
    else:
        error = str(exc.detail)
        error_code = f"HTTP_{exc.status_code}"

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": error,
            "error_code": error_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """
    Create the FastAPI app (factory pattern)

    Returns:
        FastAPI app instance
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=__version__,
        lifespan=lifespan
    )

    # CORS: answers every OPTIONS itself, tags every other response
    app.middleware("http")(cors_middleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # routers
    app.include_router(health_router)
    app.include_router(vessel_router)
    app.include_router(cache_router)

    return app

# app instance for uvicorn (uvicorn vessel_tracker.app:app)
app = create_app()
