"""lru_playground

Bounded, recency-ordered key-value stores (plain LRU and LRU with per-entry
TTL) behind a small HTTP API that the playground UI drives.
"""

from .cache import ExpiringRecencyStore, RecencyList, RecencyStore
from .client import AsyncCacheClient
from .core import (
    MISS,
    CacheError,
    CacheVariant,
    Entry,
    InvalidCapacity,
    InvalidRequest,
    InvalidTTL,
    Miss,
    NotConfigured,
    StoreStats,
)
from .core.session import CacheSession

__all__ = [
    "RecencyStore",
    "ExpiringRecencyStore",
    "RecencyList",
    "CacheSession",
    "AsyncCacheClient",
    "CacheVariant",
    "Entry",
    "StoreStats",
    "Miss",
    "MISS",
    "CacheError",
    "InvalidCapacity",
    "InvalidTTL",
    "NotConfigured",
    "InvalidRequest",
]

__version__ = "0.1.0"
