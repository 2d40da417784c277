"""Shared fixtures for unit and integration tests."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from lru_playground.api.app import create_app
from lru_playground.core.session import CacheSession
from lru_playground.monitoring.metrics import cache_requests_total, http_request_latency_seconds


class FakeClock:
    """Manually advanced clock for deterministic expiry."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return CacheSession(default_ttl_seconds=60, clock=clock)


@pytest.fixture
def app(session):
    return create_app(session=session)


@pytest_asyncio.fixture
async def http_client(app):
    """httpx client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture(autouse=True)
def reset_metrics():
    cache_requests_total.reset()
    http_request_latency_seconds.reset()
    yield
