"""Core module for cache models and errors.

The per-variant ``CacheSession`` lives in ``lru_playground.core.session`` and is
not re-exported here because it depends on the cache package.
"""

from .errors import CacheError, InvalidCapacity, InvalidRequest, InvalidTTL, NotConfigured
from .models import MISS, CacheVariant, Entry, Miss, StoreStats

__all__ = [
    # Errors
    "CacheError",
    "InvalidCapacity",
    "InvalidTTL",
    "NotConfigured",
    "InvalidRequest",
    # Models
    "CacheVariant",
    "Entry",
    "StoreStats",
    "Miss",
    "MISS",
]
