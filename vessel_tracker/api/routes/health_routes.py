"""Health check and API documentation endpoints"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from vessel_tracker import __version__
from vessel_tracker.core.config import settings
from vessel_tracker.core.logging import logger
from vessel_tracker.engine import VesselLookupService
from vessel_tracker.api.routes.vessel_routes import get_lookup_service
from vessel_tracker.schemas.vessel_schema import ApiInfoResponse, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(service: VesselLookupService = Depends(get_lookup_service)):
    """
    Health check

    - server status
    - cache size
    - fetcher counters per request profile
    """
    try:
        fetch_stats = service.stats()
    except Exception as e:
        logger.error(f"[API] Failed to read fetch stats: {e}")
        fetch_stats = None

    return HealthResponse(
        status="OK",
        cache_size=service.cache_size(),
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        fetch_stats=fetch_stats,
    )


@router.get("/", response_model=ApiInfoResponse)
async def root():
    """API documentation"""
    return ApiInfoResponse(
        name=settings.api_title,
        version=__version__,
        description=settings.api_description,
        endpoints={
            "GET /vessel?imo={imo}": "Get vessel position by IMO number",
            "GET /vessel/{imo}": "Get vessel position by IMO number",
            "DELETE /cache": "Clear the vessel cache",
            "GET /health": "Health check",
        },
        example="/vessel?imo=1234567",
        parameters={"imo": "Required. 7-digit IMO number"},
        timestamp=datetime.now(timezone.utc),
    )
