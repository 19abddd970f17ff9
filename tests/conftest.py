"""
Shared fixtures: an in-memory cache store, a scripted upstream, and an
API client wired to both.
"""

from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from site_analysis.api.app import create_app
from site_analysis.repositories import MemoryCacheRepository
from site_analysis.services import CheckService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeUpstream:
    """Scripted stand-in for every upstream host, used as a MockTransport handler.

    Routes are keyed by method and ``scheme://host/path`` (query ignored).
    Unrouted requests fail like an unreachable host.
    """

    def __init__(self) -> None:
        self.routes = {}
        self.calls: list[httpx.Request] = []

    def add(self, method, url, status=200, json=None, text=None, headers=None, handler=None):
        def respond(request: httpx.Request) -> httpx.Response:
            if handler is not None:
                return handler(request)
            if json is not None:
                return httpx.Response(status, json=json, headers=headers)
            return httpx.Response(status, text=text or "", headers=headers)

        self.routes[(method, url)] = respond

    def fail(self, method, url):
        def respond(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, url)] = respond

    def calls_to(self, url):
        return [c for c in self.calls if f"{c.url.scheme}://{c.url.host}{c.url.path}" == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = (request.method, f"{request.url.scheme}://{request.url.host}{request.url.path}")
        route = self.routes.get(key)
        if route is None:
            raise httpx.ConnectError(f"unreachable: {key[1]}", request=request)
        return route(request)


@pytest.fixture
def upstream():
    """Create a scripted upstream."""
    return FakeUpstream()


@pytest.fixture
def store():
    """Create an empty in-memory cache store."""
    return MemoryCacheRepository()


@pytest.fixture
def service(upstream, store):
    """Create a check service over the fake upstream and memory store."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return CheckService(
        repository=store,
        http_client=http_client,
        coalesce=False,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def client(service):
    """Create a test client for an app using the fixture service."""
    app = create_app()
    app.state.check_service = service
    with TestClient(app) as test_client:
        yield test_client
