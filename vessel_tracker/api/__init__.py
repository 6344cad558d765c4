"""API endpoint package - export only."""

from .cors import CORS_HEADERS, cors_middleware
from .routes import (
    vessel_router,
    cache_router,
    health_router,
    get_lookup_service,
)

__all__ = [
    "vessel_router",
    "cache_router",
    "health_router",
    "get_lookup_service",
    "CORS_HEADERS",
    "cors_middleware",
]
