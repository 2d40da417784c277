from __future__ import annotations

import logging
import threading
import typing as t

from ..cache.expiring_store import Clock, ExpiringRecencyStore
from ..cache.recency_store import RecencyStore, validate_capacity
from .errors import NotConfigured
from .models import CacheVariant

_logger = logging.getLogger(__name__)

Store = t.Union[RecencyStore, ExpiringRecencyStore]


class CacheSession:
    """Holds at most one live store per cache variant.

    ``configure`` builds a fresh store and swaps it in only after the new
    capacity has been accepted, so a rejected reset leaves the previous store
    (and its contents) in place.
    """

    def __init__(self, default_ttl_seconds: float = 60.0, clock: t.Optional[Clock] = None) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._stores: t.Dict[CacheVariant, Store] = {}
        self._lock = threading.Lock()

    def configure(self, variant: t.Union[CacheVariant, str], capacity: int) -> Store:
        variant = CacheVariant(variant)
        capacity = validate_capacity(capacity)
        store: Store
        if variant is CacheVariant.LRU_TTL:
            store = ExpiringRecencyStore(capacity, default_ttl_seconds=self._default_ttl, clock=self._clock)
        else:
            store = RecencyStore(capacity)
        with self._lock:
            self._stores[variant] = store
        _logger.info("Configured %s cache capacity=%d", variant.value, capacity)
        return store

    def store(self, variant: t.Union[CacheVariant, str]) -> Store:
        variant = CacheVariant(variant)
        with self._lock:
            store = self._stores.get(variant)
        if store is None:
            raise NotConfigured(f"{variant.value} cache is not initialized")
        return store

