"""Test configuration and fixtures for Health Prober."""

import logging
from typing import Callable

import httpx
import pytest
import structlog

from health_prober.core.config import ProberSettings, Settings
from health_prober.prober import BatchCoordinator, ProberEngine


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any logging configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_health_prober", False):
            root.removeHandler(handler)


@pytest.fixture
def settings() -> Settings:
    """Default settings for testing."""
    return Settings()


@pytest.fixture
def prober_settings() -> ProberSettings:
    """Prober settings with a short deadline so timeout tests stay fast."""
    return ProberSettings(timeout_ms=300)


@pytest.fixture
def status_transport() -> Callable[[int], httpx.MockTransport]:
    """Build a transport that answers every request with ``status``."""
    def build(status: int) -> httpx.MockTransport:
        return httpx.MockTransport(lambda request: httpx.Response(status))
    return build


@pytest.fixture
def routed_transport() -> httpx.MockTransport:
    """Transport whose answer depends on the host.

    - ``up.test``       → 200
    - ``missing.test``  → 404
    - ``moved.test``    → 301
    - ``broken.test``   → 503
    - ``refused.test``  → connection refused
    """
    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host == "refused.test":
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        codes = {
            "up.test": 200,
            "missing.test": 404,
            "moved.test": 301,
            "broken.test": 503,
        }
        headers = {"location": "https://elsewhere.test/"} if host == "moved.test" else {}
        return httpx.Response(codes.get(host, 200), headers=headers)

    return httpx.MockTransport(handler)


@pytest.fixture
def prober(prober_settings: ProberSettings, routed_transport: httpx.MockTransport) -> ProberEngine:
    return ProberEngine(prober_settings, transport=routed_transport)


@pytest.fixture
def coordinator(prober: ProberEngine) -> BatchCoordinator:
    return BatchCoordinator(prober)
