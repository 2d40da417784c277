"""Store fixtures for unit tests."""

from __future__ import annotations

import pytest

from lru_playground.cache.expiring_store import ExpiringRecencyStore
from lru_playground.cache.recency_store import RecencyStore


@pytest.fixture
def lru_store():
    """Plain LRU store with capacity 3."""
    return RecencyStore(capacity=3)


@pytest.fixture
def ttl_store(clock):
    """TTL store with capacity 3 driven by the fake clock."""
    return ExpiringRecencyStore(capacity=3, default_ttl_seconds=60, clock=clock)
