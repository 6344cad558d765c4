"""Global test setup

Role:
- test environment
- shared fakes injected as fixtures
- global state reset

Forbidden:
- real network access
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


# project root on the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("VESSEL_TRACKER_LOG_LEVEL", "INFO")

from tests.fakes import CountingCache, FakeHttpClient, RecordingSleep  # noqa: E402


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def counting_cache() -> CountingCache:
    return CountingCache()


@pytest.fixture
def fake_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture(autouse=True)
def reset_lookup_singleton():
    """Each test gets a fresh process-scoped lookup service"""
    import vessel_tracker.api.routes.vessel_routes as vessel_routes

    vessel_routes._lookup_service = None
    yield
    vessel_routes._lookup_service = None
