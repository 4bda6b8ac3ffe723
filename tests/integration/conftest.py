# ==============================
# Integration fixtures
# ==============================
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gateway.api import deps as gateway_deps
from gateway.api.http_app import create_app
from remote_use.access.local_backend import LocalAccessClient

DEMO = "py:/remote_use/demo/arith/"


@pytest.fixture
def demo_url() -> str:
    return DEMO


@pytest.fixture
def local_client() -> LocalAccessClient:
    return LocalAccessClient()


@pytest.fixture
def api_client() -> TestClient:
    """FastAPI test client serving local packages with every action enabled."""
    gateway_deps.get_settings.cache_clear()
    gateway_deps.get_local_client.cache_clear()
    app = create_app()
    app.dependency_overrides[gateway_deps.get_local_client] = lambda: LocalAccessClient()
    return TestClient(app)
