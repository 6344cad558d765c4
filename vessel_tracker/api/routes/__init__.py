"""API routes package."""

from .vessel_routes import router as vessel_router, get_lookup_service
from .cache_routes import router as cache_router
from .health_routes import router as health_router

__all__ = [
    "vessel_router",
    "cache_router",
    "health_router",
    "get_lookup_service",
]
