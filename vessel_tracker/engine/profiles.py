"""Fingerprint Profile Table

Ordered request "personas" tried one after another by the fetcher. The order is
the fallback order: the first profile looks most like a real browser session on
the provider's own site, later ones degrade toward a bare command-line client.
Timeouts escalate along the table so late, patient attempts get more time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class RequestProfile:
    """One request fingerprint

    Attributes:
        name: identifier used in logs and metrics
        headers: request headers (read-only)
        timeout_ms: per-attempt timeout in milliseconds
        impersonate: curl_cffi TLS/HTTP2 fingerprint target, None for plain libcurl
    """

    name: str
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout_ms: int = 15000
    impersonate: Optional[str] = None

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive: {self.timeout_ms}")
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


_PROVIDER_ORIGIN = "https://www.aisfriends.com"

DEFAULT_PROFILES: Tuple[RequestProfile, ...] = (
    # Desktop Chrome on Windows, same-origin XHR from the provider's site
    RequestProfile(
        name="desktop_chrome_windows",
        headers={
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "application/json, text/plain, */*",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate, br",
            "Connection": "keep-alive",
            "Referer": f"{_PROVIDER_ORIGIN}/",
            "Origin": _PROVIDER_ORIGIN,
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-origin",
            "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
            "Sec-Ch-Ua-Mobile": "?0",
            "Sec-Ch-Ua-Platform": '"Windows"',
        },
        timeout_ms=15000,
        impersonate="chrome120",
    ),
    # Mobile Safari on iPhone
    RequestProfile(
        name="mobile_safari_ios",
        headers={
            "User-Agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1",
            "Accept": "application/json",
            "Accept-Language": "en-US,en;q=0.9",
            "Connection": "keep-alive",
        },
        timeout_ms=18000,
        impersonate="safari17_2_ios",
    ),
    # Desktop Chrome on macOS, no site context
    RequestProfile(
        name="desktop_chrome_mac",
        headers={
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "*/*",
            "Accept-Language": "en-US,en;q=0.5",
            "Connection": "keep-alive",
        },
        timeout_ms=22000,
        impersonate="chrome119",
    ),
    # Desktop Chrome on Linux, JSON only
    RequestProfile(
        name="desktop_chrome_linux",
        headers={
            "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "application/json",
        },
        timeout_ms=26000,
        impersonate="chrome110",
    ),
    # Bare client
    RequestProfile(
        name="curl_minimal",
        headers={
            "User-Agent": "curl/7.68.0",
            "Accept": "*/*",
        },
        timeout_ms=30000,
        impersonate=None,
    ),
)


def get_default_profiles() -> Tuple[RequestProfile, ...]:
    return DEFAULT_PROFILES
