"""Engine Layer - validation, profile fallback and caching

This package provides the lookup engine:
- VesselLookupService: main entry point (Validator -> Cache -> Fetcher)
- ResilientFetcher: ordered request-profile fallback
- TTLCache: in-process cache with a fixed TTL
- RequestProfile / DEFAULT_PROFILES: fingerprint profile table
- LookupResult: standardized outcome
"""

from .cache import CacheEntry, TTLCache, cache_key
from .classification import AttemptOutcome, AttemptResult, classify_response
from .fetcher import FetchOutcome, ResilientFetcher
from .lookup import VesselLookupService
from .metrics import FetchMetrics
from .profiles import DEFAULT_PROFILES, RequestProfile
from .result import LookupResult, LookupStatus
from .validator import VesselIdentifier, validate_imo

__all__ = [
    "VesselLookupService",
    "ResilientFetcher",
    "FetchOutcome",
    "FetchMetrics",
    "TTLCache",
    "CacheEntry",
    "cache_key",
    "AttemptOutcome",
    "AttemptResult",
    "classify_response",
    "RequestProfile",
    "DEFAULT_PROFILES",
    "LookupResult",
    "LookupStatus",
    "VesselIdentifier",
    "validate_imo",
]
