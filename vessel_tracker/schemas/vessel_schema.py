"""Pydantic schemas for the HTTP surface"""
from typing import Any, Optional
from pydantic import BaseModel, Field
from datetime import datetime


class VesselResponse(BaseModel):
    """Vessel lookup success"""
    success: bool = Field(True, description="always true")
    data: dict[str, Any] = Field(..., description="Vessel position payload from the AIS provider")
    cached: bool = Field(..., description="Served from the cache")
    imo: str = Field(..., min_length=7, max_length=7, description="IMO number")
    profile: str | None = Field(None, description="Request profile that fetched the data (None when cached)")
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error body shared by every failing route"""
    success: bool = Field(False, description="always false")
    error: str = Field(..., description="Human-readable error")
    error_code: str = Field(..., description="Machine-readable error kind")
    details: dict[str, Any] | None = Field(None, description="Diagnostic details")
    timestamp: datetime


class CacheClearResponse(BaseModel):
    """DELETE /cache response"""
    success: bool = True
    message: str
    cleared: int = Field(..., ge=0, description="Number of entries removed")
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    cache_size: int = Field(..., ge=0)
    timestamp: datetime
    version: str
    fetch_stats: Optional[dict[str, Any]] = None


class ApiInfoResponse(BaseModel):
    """GET / documentation"""
    name: str
    version: str
    description: str
    endpoints: dict[str, str]
    example: str
    parameters: dict[str, str]
    timestamp: datetime
