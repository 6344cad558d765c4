"""Shared HTTP client unit tests (curl_cffi session mocked)."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from curl_cffi import CurlECode
from curl_cffi.requests import RequestsError

import vessel_tracker.crawlers.http_client as http_client_module
from vessel_tracker.core.exceptions import ConnectionFailedException, NetworkTimeoutException
from vessel_tracker.crawlers.http_client import HttpResponse, SharedHttpClient

URL = "https://ais.example.test/api/vessel/position/imo:1234567"


@pytest.fixture
def fake_session(monkeypatch):
    session = MagicMock()
    session.get = AsyncMock(return_value=SimpleNamespace(
        status_code=200,
        text='{"name": "MSC OSCAR"}',
        headers={"Content-Type": "application/json"},
    ))
    session.close = AsyncMock()
    factory = MagicMock(return_value=session)
    monkeypatch.setattr(http_client_module, "AsyncSession", factory)
    session.factory = factory
    return session


class TestGet:
    @pytest.mark.asyncio
    async def test_returns_transport_neutral_response(self, fake_session):
        client = SharedHttpClient()

        resp = await client.get(URL, headers={"User-Agent": "ua"}, timeout_s=15.0, impersonate="chrome120")

        assert isinstance(resp, HttpResponse)
        assert resp.status_code == 200
        assert json.loads(resp.text) == {"name": "MSC OSCAR"}
        assert resp.headers == {"Content-Type": "application/json"}

        fake_session.get.assert_awaited_once_with(
            URL,
            headers={"User-Agent": "ua"},
            timeout=15.0,
            impersonate="chrome120",
            allow_redirects=True,
        )

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_raised(self, fake_session):
        fake_session.get.return_value = SimpleNamespace(status_code=404, text="", headers={})
        client = SharedHttpClient()

        resp = await client.get(URL, timeout_s=1.0)

        assert resp.status_code == 404
        assert resp.text == ""
        assert resp.headers == {}

    @pytest.mark.asyncio
    async def test_session_is_created_once(self, fake_session):
        client = SharedHttpClient()

        await client.get(URL, timeout_s=1.0)
        await client.get(URL, timeout_s=1.0)

        assert fake_session.factory.call_count == 1
        assert fake_session.get.await_count == 2


class TestErrors:
    @pytest.mark.asyncio
    async def test_curl_timeout_maps_to_network_timeout(self, fake_session):
        fake_session.get.side_effect = RequestsError("Operation timed out", code=CurlECode.OPERATION_TIMEDOUT)
        client = SharedHttpClient()

        with pytest.raises(NetworkTimeoutException) as exc_info:
            await client.get(URL, timeout_s=15.0)

        assert exc_info.value.error_code == "NETWORK_TIMEOUT"
        assert exc_info.value.details["timeout_s"] == 15.0

    @pytest.mark.asyncio
    async def test_asyncio_timeout_maps_to_network_timeout(self, fake_session):
        fake_session.get.side_effect = asyncio.TimeoutError()
        client = SharedHttpClient()

        with pytest.raises(NetworkTimeoutException):
            await client.get(URL, timeout_s=15.0)

    @pytest.mark.asyncio
    async def test_other_curl_errors_map_to_connection_failed(self, fake_session):
        fake_session.get.side_effect = RequestsError("Could not resolve host", code=CurlECode.COULDNT_RESOLVE_HOST)
        client = SharedHttpClient()

        with pytest.raises(ConnectionFailedException) as exc_info:
            await client.get(URL, timeout_s=15.0)

        assert exc_info.value.error_code == "CONNECTION_FAILED"
        assert "Could not resolve host" in exc_info.value.message


class TestClose:
    @pytest.mark.asyncio
    async def test_close_releases_session(self, fake_session):
        client = SharedHttpClient()
        await client.get(URL, timeout_s=1.0)

        await client.close()
        await client.close()

        fake_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_session_is_noop(self, fake_session):
        client = SharedHttpClient()

        await client.close()

        fake_session.factory.assert_not_called()
