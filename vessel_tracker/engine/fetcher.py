"""Resilient Fetcher - ordered profile fallback against the AIS provider

Tries each request profile in turn until one yields a vessel payload. A 404 is
authoritative and stops the loop; every other failure moves on to the next
profile after a short pause.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, Sequence

from vessel_tracker.core.config import settings
from vessel_tracker.core.exceptions import (
    AllProfilesExhaustedException,
    NetworkException,
    VesselNotFoundException,
)
from vessel_tracker.core.logging import logger
from vessel_tracker.crawlers.http_client import HttpResponse

from .classification import (
    AttemptOutcome,
    AttemptResult,
    classify_response,
    classify_transport_error,
)
from .metrics import FetchMetrics
from .profiles import RequestProfile, get_default_profiles
from .validator import VesselIdentifier


class HttpGetter(Protocol):
    """Transport interface used by the fetcher (SharedHttpClient implements it)."""

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout_s: float,
        impersonate: Optional[str] = None,
    ) -> HttpResponse:
        ...


@dataclass(frozen=True)
class FetchOutcome:
    """Successful fetch

    Attributes:
        payload: vessel JSON object returned by the provider
        profile_name: profile that succeeded
        attempts: every attempt made, the successful one last
    """

    payload: dict[str, Any]
    profile_name: str
    attempts: tuple[AttemptResult, ...] = field(default_factory=tuple)

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)


class ResilientFetcher:
    """Profile-by-profile fetcher

    Usage:
        fetcher = ResilientFetcher(get_shared_http_client())
        outcome = await fetcher.fetch(validate_imo("9811000"))
        outcome.payload["name"]
    """

    def __init__(
        self,
        http_client: HttpGetter,
        profiles: Optional[Sequence[RequestProfile]] = None,
        endpoint_template: Optional[str] = None,
        attempt_delay_s: Optional[float] = None,
        metrics: Optional[FetchMetrics] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            http_client: transport (get(url, headers=, timeout_s=, impersonate=))
            profiles: ordered profile table (default: DEFAULT_PROFILES)
            endpoint_template: URL with an {imo} placeholder (default: settings)
            attempt_delay_s: pause between attempts (default: settings)
            metrics: shared counters (default: new FetchMetrics)
            sleep: awaitable used for the pause
        """
        if http_client is None:
            raise ValueError("http_client must not be None")

        self.http_client = http_client
        self.profiles: tuple[RequestProfile, ...] = tuple(
            profiles if profiles is not None else get_default_profiles()
        )
        if not self.profiles:
            raise ValueError("profiles must not be empty")

        self.endpoint_template = endpoint_template or settings.provider_position_template
        if "{imo}" not in self.endpoint_template:
            raise ValueError(f"endpoint_template has no {{imo}} placeholder: {self.endpoint_template}")

        self.attempt_delay_s = (
            settings.fetch_attempt_delay_s if attempt_delay_s is None else attempt_delay_s
        )
        self.metrics = metrics or FetchMetrics()
        self._sleep = sleep

    def build_url(self, imo: VesselIdentifier) -> str:
        return self.endpoint_template.format(imo=imo)

    async def fetch(self, imo: VesselIdentifier) -> FetchOutcome:
        """Fetch the vessel position payload

        Returns:
            FetchOutcome: payload of the first successful profile

        Raises:
            VesselNotFoundException: provider answered 404
            AllProfilesExhaustedException: no profile succeeded
        """
        url = self.build_url(imo)
        total = len(self.profiles)
        attempts: list[AttemptResult] = []

        self.metrics.record_fetch_started()
        logger.info(f"[FETCHER] Fetching IMO {imo}: {url}")

        for idx, profile in enumerate(self.profiles, start=1):
            logger.info(
                f"[FETCHER] Attempt {idx}/{total} profile={profile.name} "
                f"(timeout={profile.timeout_s:.1f}s)"
            )
            attempt = await self._attempt(url, profile)
            attempts.append(attempt)
            self.metrics.record_attempt(attempt)

            if attempt.is_success:
                self.metrics.record_fetch_success()
                vessel_name = (attempt.payload or {}).get("name") or "Unknown vessel"
                logger.info(f"[FETCHER] Success on attempt {idx}/{total} ({profile.name}): {vessel_name}")
                return FetchOutcome(
                    payload=attempt.payload or {},
                    profile_name=profile.name,
                    attempts=tuple(attempts),
                )

            if attempt.outcome is AttemptOutcome.DEFINITIVE_NOT_FOUND:
                self.metrics.record_not_found()
                logger.info(f"[FETCHER] IMO {imo} not found (attempt {idx}/{total}, {profile.name})")
                raise VesselNotFoundException(
                    str(imo),
                    details={"imo": str(imo), "profile": profile.name, "attempts": len(attempts)},
                )

            logger.info(
                f"[FETCHER] Attempt {idx}/{total} failed: {attempt.outcome.value} - {attempt.detail}"
            )

            if idx < total and self.attempt_delay_s > 0:
                logger.debug(f"[FETCHER] Waiting {self.attempt_delay_s:.1f}s before next attempt")
                await self._sleep(self.attempt_delay_s)

        self.metrics.record_exhausted()
        logger.warning(f"[FETCHER] All {total} profiles failed for IMO {imo}")
        raise AllProfilesExhaustedException(str(imo), attempts)

    async def _attempt(self, url: str, profile: RequestProfile) -> AttemptResult:
        try:
            response = await self.http_client.get(
                url,
                headers=profile.headers,
                timeout_s=profile.timeout_s,
                impersonate=profile.impersonate,
            )
        except NetworkException as e:
            return classify_transport_error(profile.name, e)

        return classify_response(profile.name, response)
