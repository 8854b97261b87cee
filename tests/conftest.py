"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from config import Config
from shortlink.backend import BackendClient, BackendConfig
from shortlink.common.logging_config import setup_logging
from shortlink.resolver import SlugResolver

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """Routes requests to canned responses and records what it received."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method: str, path: str, handler):
        """Register ``handler`` (a Response, an exception, or a callable) for a route."""
        self.routes[(method.upper(), path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(request)
        return handler

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def backend_config():
    return BackendConfig(base_url=BACKEND_URL, timeout_ms=2000)


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def resolver(backend_config, fake_backend, logger):
    return SlugResolver(backend_config, logger=logger, transport=fake_backend.transport)


@pytest.fixture
def backend(backend_config, fake_backend, logger):
    return BackendClient(backend_config, logger=logger, transport=fake_backend.transport)


@pytest.fixture
def config():
    return Config(
        backend_url=BACKEND_URL,
        backend_timeout_ms=2000,
        frontend_url="http://short.test",
        top_limit=3,
    )


@pytest.fixture
def sample_rows():
    """Usage rows mixing current and legacy counter names."""
    return [
        {"slug": "Ab3Z", "url": "https://example.com/a", "hitsToday": 2, "hitsIn7d": 10, "hitsTotal": 40},
        {"slug": "Cd4Y", "url": "https://example.com/b", "hits_in_range": 5, "hits_total": 7},
        {"slug": "Ef5X", "url": "https://github.com/user/repo", "hitsToday": 5, "hitsTotal": 100},
        {"slug": "Gh6W", "targetUrl": "https://stackoverflow.com/q/1"},
    ]
