"""Vessel Lookup Service - engine entry point

Validator -> Cache -> Fetcher -> Cache write, returning a LookupResult.

The cache is injected and owned by the service for the process lifetime; the
service is its only reader and writer.
"""

from datetime import datetime, timedelta, timezone
from time import perf_counter
from typing import Any, Callable, Optional

from vessel_tracker.core.exceptions import (
    AllProfilesExhaustedException,
    InvalidImoException,
    VesselNotFoundException,
)
from vessel_tracker.core.logging import logger, sanitize_for_log

from .cache import TTLCache, cache_key
from .fetcher import ResilientFetcher
from .result import LookupResult
from .validator import validate_imo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VesselLookupService:
    """Vessel position lookup

    Usage:
        service = VesselLookupService(cache=TTLCache(), fetcher=ResilientFetcher(client))
        result = await service.lookup("9811000")
        if result.is_success:
            result.payload, result.from_cache
    """

    def __init__(
        self,
        cache: TTLCache,
        fetcher: ResilientFetcher,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            cache: process-wide TTL cache
            fetcher: resilient fetcher
            clock: current-time source, used when lookup() gets no `now`
        """
        if cache is None:
            raise ValueError("cache must not be None")
        if fetcher is None:
            raise ValueError("fetcher must not be None")

        self.cache = cache
        self.fetcher = fetcher
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self.cache.ttl

    async def lookup(self, raw_input: Optional[str], now: Optional[datetime] = None) -> LookupResult:
        """Look up a vessel position

        Args:
            raw_input: identifier as received
            now: lookup time (default: clock())

        Returns:
            LookupResult: SUCCESS / NOT_FOUND / BLOCKED / TRANSIENT_ERROR / INVALID_INPUT
        """
        started = perf_counter()

        def _elapsed_ms() -> float:
            return (perf_counter() - started) * 1000

        # 1. validation (no cache access, no remote call on failure)
        try:
            imo = validate_imo(raw_input)
        except InvalidImoException as e:
            logger.info(f"[LOOKUP] Invalid IMO '{sanitize_for_log(raw_input)}': {e.reason}")
            return LookupResult.invalid_input(e.value, e.reason, elapsed_ms=_elapsed_ms())

        imo_str = str(imo)
        now = now or self._clock()
        key = cache_key(imo)

        try:
            # 2. cache
            entry = self.cache.get(key)
            if entry is not None and self.cache.is_fresh(entry, now):
                logger.info(f"[LOOKUP] Returning cached data for IMO: {imo_str}")
                return LookupResult.success(
                    imo=imo_str,
                    payload=entry.payload,
                    from_cache=True,
                    elapsed_ms=_elapsed_ms(),
                )
            if entry is not None:
                logger.debug(f"[LOOKUP] Stale cache entry for IMO: {imo_str}")

            # 3. remote fetch
            logger.info(f"[LOOKUP] Fetching fresh data for IMO: {imo_str}")
            outcome = await self.fetcher.fetch(imo)

        except VesselNotFoundException as e:
            return LookupResult.not_found(
                imo=imo_str,
                elapsed_ms=_elapsed_ms(),
                attempts=int(e.details.get("attempts", 0)),
            )
        except AllProfilesExhaustedException as e:
            return LookupResult.blocked(
                imo=imo_str,
                elapsed_ms=_elapsed_ms(),
                attempts=len(e.attempts),
                last_error=e.last_error,
            )
        except Exception as e:
            logger.error(f"[LOOKUP] Lookup failed: imo={imo_str}, error={type(e).__name__}", exc_info=True)
            return LookupResult.transient_error(
                imo=imo_str,
                elapsed_ms=_elapsed_ms(),
                detail=f"{type(e).__name__}: {e}",
            )

        # 4. cache write (success only)
        self.cache.put(key, outcome.payload, now)
        return LookupResult.success(
            imo=imo_str,
            payload=outcome.payload,
            from_cache=False,
            elapsed_ms=_elapsed_ms(),
            profile_name=outcome.profile_name,
            attempts=outcome.attempt_count,
        )

    def clear_cache(self) -> int:
        return self.cache.clear()

    def cache_size(self) -> int:
        return self.cache.size()

    def stats(self) -> dict[str, Any]:
        return self.fetcher.metrics.snapshot()
