"""HTTP surface tests (FastAPI TestClient, scripted transport)"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from vessel_tracker import __version__
from vessel_tracker.app import create_app
from vessel_tracker.api import get_lookup_service
from vessel_tracker.core.config import settings
from vessel_tracker.engine import TTLCache, VesselLookupService
from vessel_tracker.engine.profiles import DEFAULT_PROFILES

from tests.fakes import T0, FakeHttpClient, html_response, json_response, make_service
from tests.fixtures import CHALLENGE_PAGES, VESSEL_PAYLOADS


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def serve(app):
    """Install a lookup service and return a TestClient bound to it"""

    def _serve(service) -> TestClient:
        app.dependency_overrides[get_lookup_service] = lambda: service
        return TestClient(app)

    yield _serve
    app.dependency_overrides.clear()


class TestVesselLookup:
    def test_success_then_cached(self, serve):
        client_http = FakeHttpClient([json_response(VESSEL_PAYLOADS["msc_oscar"])])
        api = serve(make_service(client_http))

        first = api.get("/vessel", params={"imo": "1234567"})
        second = api.get("/vessel/1234567")

        assert first.status_code == 200
        body = first.json()
        assert body["success"] is True
        assert body["data"] == VESSEL_PAYLOADS["msc_oscar"]
        assert body["cached"] is False
        assert body["imo"] == "1234567"
        assert body["profile"] == DEFAULT_PROFILES[0].name
        assert "timestamp" in body

        assert second.status_code == 200
        assert second.json()["cached"] is True
        assert second.json()["data"] == VESSEL_PAYLOADS["msc_oscar"]
        assert client_http.call_count == 1

    @pytest.mark.parametrize(
        "path, params, error",
        [
            ("/vessel", {}, "IMO parameter is required"),
            ("/vessel", {"imo": ""}, "IMO parameter is required"),
            ("/vessel", {"imo": "123"}, "IMO must be exactly 7 digits"),
            ("/vessel/abcdefg", None, "IMO must be exactly 7 digits"),
            ("/vessel/12345678", None, "IMO must be exactly 7 digits"),
        ],
    )
    def test_invalid_identifier_is_400(self, serve, path, params, error):
        client_http = FakeHttpClient()
        api = serve(make_service(client_http))

        resp = api.get(path, params=params)

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == error
        assert body["error_code"] == "INVALID_IMO"
        assert body["details"]["example"] == "1234567"
        assert client_http.call_count == 0

    def test_not_found_is_404(self, serve):
        client_http = FakeHttpClient([json_response({}, status=404)])
        api = serve(make_service(client_http))

        resp = api.get("/vessel/9999999")

        assert resp.status_code == 404
        assert resp.json()["error"] == "Vessel not found"
        assert resp.json()["error_code"] == "VESSEL_NOT_FOUND"
        assert client_http.call_count == 1

    def test_blocked_is_503(self, serve):
        client_http = FakeHttpClient([
            html_response(CHALLENGE_PAGES["cloudflare_just_a_moment"]) for _ in DEFAULT_PROFILES
        ])
        service = make_service(client_http)
        api = serve(service)

        resp = api.get("/vessel?imo=1234567")

        assert resp.status_code == 503
        body = resp.json()
        assert body["success"] is False
        assert body["error_code"] == "ALL_PROFILES_EXHAUSTED"
        assert body["details"]["tried_profiles"] == len(DEFAULT_PROFILES)
        assert service.cache_size() == 0

    def test_engine_fault_is_500(self, serve):
        class ExplodingFetcher:
            async def fetch(self, imo):
                raise RuntimeError("boom")

        api = serve(VesselLookupService(cache=TTLCache(), fetcher=ExplodingFetcher(), clock=lambda: T0))

        resp = api.get("/vessel/1234567")

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch vessel data"
        assert resp.json()["error_code"] == "INTERNAL_ERROR"

    def test_service_crash_is_500(self, serve):
        class CrashingService:
            async def lookup(self, raw_input, now=None):
                raise RuntimeError("crash")

        api = serve(CrashingService())

        resp = api.get("/vessel/1234567")

        assert resp.status_code == 500
        assert resp.json()["error_code"] == "INTERNAL_ERROR"

    def test_lookup_timeout_is_503(self, serve, monkeypatch):
        class SlowService:
            async def lookup(self, raw_input, now=None):
                await asyncio.sleep(1.0)

        monkeypatch.setattr(settings, "api_lookup_timeout_s", 0.05)
        api = serve(SlowService())

        resp = api.get("/vessel/1234567")

        assert resp.status_code == 503
        assert resp.json()["error_code"] == "TIMEOUT"


class TestCache:
    def test_delete_cache_forces_refetch(self, serve):
        client_http = FakeHttpClient([
            json_response(VESSEL_PAYLOADS["msc_oscar"]),
            json_response(VESSEL_PAYLOADS["msc_oscar"]),
        ])
        api = serve(make_service(client_http))

        api.get("/vessel/1234567")
        cleared = api.delete("/cache")
        again = api.get("/vessel/1234567")

        assert cleared.status_code == 200
        assert cleared.json()["success"] is True
        assert cleared.json()["cleared"] == 1
        assert again.json()["cached"] is False
        assert client_http.call_count == 2


class TestHealthAndDocs:
    def test_health(self, serve):
        client_http = FakeHttpClient([json_response(VESSEL_PAYLOADS["msc_oscar"])])
        api = serve(make_service(client_http))
        api.get("/vessel/1234567")

        resp = api.get("/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "OK"
        assert body["cache_size"] == 1
        assert body["fetch_stats"]["fetch_successes"] == 1
        assert body["version"] == __version__

    def test_root_documents_endpoints(self, serve):
        api = serve(make_service(FakeHttpClient()))

        resp = api.get("/")

        assert resp.status_code == 200
        body = resp.json()
        assert body["version"] == __version__
        assert body["example"] == "/vessel?imo=1234567"
        assert "GET /vessel/{imo}" in body["endpoints"]
        assert "imo" in body["parameters"]


class TestCorsAndMethods:
    EXPECTED_CORS = {
        "access-control-allow-origin": "*",
        "access-control-allow-methods": "GET, OPTIONS",
        "access-control-allow-headers": "Content-Type",
    }

    def _assert_preflight(self, resp):
        assert resp.status_code == 200
        assert resp.content == b""
        for name, value in self.EXPECTED_CORS.items():
            assert resp.headers[name] == value
        assert "access-control-max-age" not in resp.headers

    @pytest.mark.parametrize("path", ["/vessel", "/vessel/1234567", "/cache", "/anything/else"])
    def test_bare_options_is_empty_200(self, serve, path):
        api = serve(make_service(FakeHttpClient()))

        self._assert_preflight(api.options(path))

    @pytest.mark.parametrize(
        "path, method",
        [
            ("/vessel/1234567", "GET"),
            ("/vessel?imo=1234567", "GET"),
            ("/cache", "DELETE"),
        ],
    )
    def test_browser_preflight_is_empty_200(self, serve, path, method):
        client_http = FakeHttpClient()
        api = serve(make_service(client_http))

        resp = api.options(path, headers={
            "Origin": "https://map.example.test",
            "Access-Control-Request-Method": method,
        })

        self._assert_preflight(resp)
        assert client_http.call_count == 0

    def test_preflight_with_non_safelisted_header_is_empty_200(self, serve):
        api = serve(make_service(FakeHttpClient()))

        resp = api.options("/vessel/1234567", headers={
            "Origin": "https://map.example.test",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "authorization",
        })

        self._assert_preflight(resp)

    def test_preflight_does_not_clear_cache(self, serve):
        client_http = FakeHttpClient([json_response(VESSEL_PAYLOADS["msc_oscar"])])
        service = make_service(client_http)
        api = serve(service)
        api.get("/vessel/1234567")

        api.options("/cache", headers={
            "Origin": "https://map.example.test",
            "Access-Control-Request-Method": "DELETE",
        })

        assert service.cache_size() == 1

    def test_cross_origin_get_carries_cors_headers(self, serve):
        client_http = FakeHttpClient([json_response(VESSEL_PAYLOADS["msc_oscar"])])
        api = serve(make_service(client_http))

        resp = api.get("/vessel/1234567", headers={"Origin": "https://map.example.test"})

        assert resp.status_code == 200
        for name, value in self.EXPECTED_CORS.items():
            assert resp.headers[name] == value

    def test_error_responses_carry_cors_headers(self, serve):
        api = serve(make_service(FakeHttpClient()))

        resp = api.get("/vessel/123", headers={"Origin": "https://map.example.test"})

        assert resp.status_code == 400
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_delete_cache_carries_cors_headers(self, serve):
        api = serve(make_service(FakeHttpClient()))

        resp = api.delete("/cache", headers={"Origin": "https://map.example.test"})

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    def test_non_get_is_405(self, serve, method):
        client_http = FakeHttpClient()
        api = serve(make_service(client_http))

        resp = getattr(api, method)("/vessel/1234567")

        assert resp.status_code == 405
        assert resp.json()["success"] is False
        assert resp.json()["error"] == "Method not allowed"
        assert resp.headers["access-control-allow-origin"] == "*"
        assert client_http.call_count == 0

    def test_unknown_path_is_json_404(self, serve):
        api = serve(make_service(FakeHttpClient()))

        resp = api.get("/nowhere")

        assert resp.status_code == 404
        assert resp.json()["success"] is False
        assert resp.json()["error_code"] == "HTTP_404"
