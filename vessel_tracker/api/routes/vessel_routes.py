"""Vessel Routes - HTTP translator for the lookup engine

The HTTP layer only delegates to VesselLookupService and maps the LookupResult
onto a status code and a JSON body.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from vessel_tracker.core.config import settings
from vessel_tracker.core.logging import logger, sanitize_for_log
from vessel_tracker.crawlers.http_client import get_shared_http_client
from vessel_tracker.engine import (
    LookupResult,
    LookupStatus,
    ResilientFetcher,
    TTLCache,
    VesselLookupService,
)
from vessel_tracker.schemas.vessel_schema import ErrorResponse, VesselResponse

router = APIRouter(tags=["vessel"])

# singleton service (process-scoped cache lives inside)
_lookup_service: Optional[VesselLookupService] = None

_STATUS_CODES = {
    LookupStatus.SUCCESS: 200,
    LookupStatus.INVALID_INPUT: 400,
    LookupStatus.NOT_FOUND: 404,
    LookupStatus.BLOCKED: 503,
    LookupStatus.TRANSIENT_ERROR: 500,
}


def get_lookup_service() -> VesselLookupService:
    """VesselLookupService singleton"""
    global _lookup_service
    if _lookup_service is None:
        _lookup_service = VesselLookupService(
            cache=TTLCache(ttl=timedelta(seconds=settings.cache_ttl_seconds)),
            fetcher=ResilientFetcher(get_shared_http_client()),
        )
    return _lookup_service


def error_response(
    status_code: int,
    error: str,
    error_code: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        error_code=error_code,
        details=details,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


def to_response(result: LookupResult) -> JSONResponse:
    """LookupResult -> HTTP response"""
    status_code = _STATUS_CODES.get(result.status, 500)

    if result.is_success:
        body = VesselResponse(
            data=result.payload or {},
            cached=result.from_cache,
            imo=result.imo or "",
            profile=result.profile_name,
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

    return error_response(
        status_code,
        result.error_message or "Failed to fetch vessel data",
        result.error_code or result.status.value.upper(),
        details=result.details or None,
    )


async def _lookup(imo: Optional[str], service: VesselLookupService) -> JSONResponse:
    logger.info(f"[API] Vessel request: imo='{sanitize_for_log(imo)}'")
    try:
        result = await asyncio.wait_for(
            service.lookup(imo),
            timeout=settings.api_lookup_timeout_s,
        )
    except asyncio.TimeoutError:
        logger.error(f"[API] Timeout: imo='{sanitize_for_log(imo)}'")
        return error_response(
            503,
            "Vessel lookup timed out. Try again later.",
            "TIMEOUT",
            details={"timeout_s": settings.api_lookup_timeout_s},
        )
    except Exception as e:
        logger.error(f"[API] Lookup failed: imo='{sanitize_for_log(imo)}'", exc_info=True)
        return error_response(500, "Internal server error", "INTERNAL_ERROR",
                              details={"message": str(e)})

    logger.info(
        f"[API] Vessel response: imo='{sanitize_for_log(imo)}', status={result.status.value}, "
        f"cached={result.from_cache}, attempts={result.attempts}"
    )
    return to_response(result)


@router.get(
    "/vessel",
    response_model=VesselResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse},
               503: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_vessel_by_query(
    imo: Optional[str] = Query(None, description="7-digit IMO number"),
    service: VesselLookupService = Depends(get_lookup_service),
):
    """Vessel position by IMO number (query parameter): /vessel?imo=1234567"""
    return await _lookup(imo, service)


@router.get(
    "/vessel/{imo}",
    response_model=VesselResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse},
               503: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_vessel_by_path(
    imo: str,
    service: VesselLookupService = Depends(get_lookup_service),
):
    """Vessel position by IMO number (path segment): /vessel/1234567"""
    return await _lookup(imo, service)
