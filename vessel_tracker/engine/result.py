"""Lookup Result - standardized engine outcome

Every lookup, whatever path it took (cache / fetch / failure), returns this.
The HTTP layer only translates it into a status code and a JSON body.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LookupStatus(str, Enum):
    """Lookup status"""

    SUCCESS = "success"
    NOT_FOUND = "not_found"  # authoritative 404 from the provider
    BLOCKED = "blocked"  # every profile rejected or failed
    TRANSIENT_ERROR = "transient_error"  # unexpected fault inside the engine
    INVALID_INPUT = "invalid_input"  # bad identifier


@dataclass
class LookupResult:
    """Outcome of one lookup

    Attributes:
        status: lookup status
        imo: identifier as received (raw value for INVALID_INPUT)
        payload: vessel JSON object on SUCCESS
        from_cache: served from the cache without a remote attempt
        profile_name: profile that fetched the payload
        attempts: remote attempts made by this lookup
        elapsed_ms: lookup duration (milliseconds)
        error_code: machine-readable error kind
        error_message: human-readable error
        details: diagnostic details (last transport error, ...)
    """

    status: LookupStatus
    imo: Optional[str] = None
    payload: Optional[dict[str, Any]] = None
    from_cache: bool = False

    # metadata
    profile_name: Optional[str] = None
    attempts: int = 0
    elapsed_ms: Optional[float] = None

    # error info
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == LookupStatus.SUCCESS

    @classmethod
    def success(
        cls,
        imo: str,
        payload: dict[str, Any],
        from_cache: bool,
        elapsed_ms: float,
        profile_name: Optional[str] = None,
        attempts: int = 0,
    ) -> "LookupResult":
        return cls(
            status=LookupStatus.SUCCESS,
            imo=imo,
            payload=payload,
            from_cache=from_cache,
            profile_name=profile_name,
            attempts=attempts,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def not_found(cls, imo: str, elapsed_ms: float, attempts: int = 0) -> "LookupResult":
        return cls(
            status=LookupStatus.NOT_FOUND,
            imo=imo,
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            error_code="VESSEL_NOT_FOUND",
            error_message="Vessel not found",
            details={"imo": imo},
        )

    @classmethod
    def blocked(
        cls, imo: str, elapsed_ms: float, attempts: int, last_error: Optional[str]
    ) -> "LookupResult":
        """Every profile failed; surfaced as service unavailable"""
        return cls(
            status=LookupStatus.BLOCKED,
            imo=imo,
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            error_code="ALL_PROFILES_EXHAUSTED",
            error_message="All request profiles failed - the remote service is blocking requests",
            details={"tried_profiles": attempts, "last_error": last_error},
        )

    @classmethod
    def transient_error(cls, imo: Optional[str], elapsed_ms: float, detail: str) -> "LookupResult":
        return cls(
            status=LookupStatus.TRANSIENT_ERROR,
            imo=imo,
            elapsed_ms=elapsed_ms,
            error_code="INTERNAL_ERROR",
            error_message="Failed to fetch vessel data",
            details={"detail": detail},
        )

    @classmethod
    def invalid_input(
        cls, value: Optional[str], reason: str, elapsed_ms: float = 0.0
    ) -> "LookupResult":
        return cls(
            status=LookupStatus.INVALID_INPUT,
            imo=value,
            elapsed_ms=elapsed_ms,
            error_code="INVALID_IMO",
            error_message=reason,
            details={"provided": value, "example": "1234567"},
        )
