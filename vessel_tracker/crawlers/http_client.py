"""Shared HTTP client (curl_cffi)

- One AsyncSession per process: creating a session per attempt adds TLS and
  connection overhead on every profile switch.
- Headers, timeout and the TLS impersonation target are chosen per request so
  each profile presents its own fingerprint on the shared session.
- close() is called from the app lifespan on shutdown.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from curl_cffi import CurlECode
from curl_cffi.requests import AsyncSession, RequestsError

from vessel_tracker.core.config import settings
from vessel_tracker.core.exceptions import ConnectionFailedException, NetworkTimeoutException
from vessel_tracker.core.logging import logger


@dataclass(frozen=True)
class HttpResponse:
    """Transport-neutral view of a completed HTTP exchange."""

    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                allow_redirects=True,
                max_clients=int(settings.http_max_clients),
                trust_env=False,
            )
            return self._session

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout_s: float,
        impersonate: Optional[str] = None,
    ) -> HttpResponse:
        """GET a URL and return the response whatever its status code.

        Raises:
            NetworkTimeoutException: the request exceeded timeout_s
            ConnectionFailedException: no response (refused, DNS, TLS...)
        """
        sess = await self._ensure_session()
        try:
            resp = await sess.get(
                url,
                headers=dict(headers or {}),
                timeout=timeout_s,
                impersonate=impersonate,
                allow_redirects=True,
            )
        except asyncio.TimeoutError as e:
            logger.info(f"[HTTP_CLIENT] GET timed out: {type(e).__name__}")
            raise NetworkTimeoutException(url, timeout_s) from e
        except RequestsError as e:
            code = getattr(e, "code", None)
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: code={code} {e!r}")
            if code == CurlECode.OPERATION_TIMEDOUT:
                raise NetworkTimeoutException(url, timeout_s) from e
            raise ConnectionFailedException(url, str(e) or type(e).__name__) from e

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        resp_headers = {str(k): str(v) for k, v in dict(getattr(resp, "headers", None) or {}).items()}
        return HttpResponse(status_code=status, text=text, headers=resp_headers)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.info(f"[HTTP_CLIENT] Session close failed: {type(e).__name__}: {e!r}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
