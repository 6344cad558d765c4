"""Cache administration endpoint"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from vessel_tracker.core.logging import logger
from vessel_tracker.engine import VesselLookupService
from vessel_tracker.api.routes.vessel_routes import get_lookup_service
from vessel_tracker.schemas.vessel_schema import CacheClearResponse

router = APIRouter(tags=["cache"])


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(service: VesselLookupService = Depends(get_lookup_service)):
    """Drop every cached vessel payload"""
    cleared = service.clear_cache()
    logger.info(f"[API] Cache cleared ({cleared} entries)")
    return CacheClearResponse(
        message="Cache cleared",
        cleared=cleared,
        timestamp=datetime.now(timezone.utc),
    )
