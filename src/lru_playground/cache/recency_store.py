from __future__ import annotations

import logging
import threading
import typing as t

from ..core.errors import InvalidCapacity, NotConfigured
from ..core.models import MISS, CacheVariant, Entry, StoreStats
from .linked import Node, RecencyList

_logger = logging.getLogger(__name__)


def validate_capacity(capacity: t.Any) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidCapacity(f"capacity must be an integer, got {capacity!r}")
    if capacity <= 0:
        raise InvalidCapacity(f"capacity must be positive, got {capacity}")
    return capacity


class RecencyStore:
    """Bounded LRU mapping from key to value.

    Hash map plus intrusive doubly-linked list, so get and put are O(1).
    Every successful get or put moves the key to the most-recently-used end;
    inserting a new key into a full store evicts the least-recently-used one.

    A store created without a capacity rejects every operation with
    ``NotConfigured`` until ``configure`` is called.
    """

    variant = CacheVariant.LRU

    def __init__(self, capacity: t.Optional[int] = None) -> None:
        self._lock = threading.Lock()
        self._capacity: t.Optional[int] = None
        self._index: t.Dict[str, Node] = {}
        self._order = RecencyList()
        self._evictions = 0
        if capacity is not None:
            self.configure(capacity)

    def configure(self, capacity: int) -> None:
        capacity = validate_capacity(capacity)
        with self._lock:
            self._capacity = capacity
            self._index = {}
            self._order = RecencyList()
            self._evictions = 0
        _logger.debug("%s store configured capacity=%d", self.variant.value, capacity)

    @property
    def capacity(self) -> int:
        return self._require_capacity()

    @property
    def size(self) -> int:
        with self._lock:
            self._require_capacity()
            return len(self._index)

    @property
    def evictions(self) -> int:
        return self._evictions

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        with self._lock:
            self._require_capacity()
            return key in self._index

    def put(self, key: str, value: t.Any) -> None:
        with self._lock:
            capacity = self._require_capacity()
            node = self._index.get(key)
            if node is not None:
                node.value = value
                self._order.move_to_back(node)
                return
            if len(self._index) >= capacity:
                self._evict_lru()
            node = Node(key=key, value=value)
            self._index[key] = node
            self._order.push_back(node)

    def get(self, key: str) -> t.Any:
        with self._lock:
            self._require_capacity()
            node = self._index.get(key)
            if node is None:
                return MISS
            # mark as recently used
            self._order.move_to_back(node)
            return node.value

    def peek(self, key: str) -> t.Any:
        with self._lock:
            self._require_capacity()
            node = self._index.get(key)
            return MISS if node is None else node.value

    def snapshot(self, newest_first: bool = False) -> t.List[Entry]:
        """Return live entries oldest to newest (or reversed) without touching recency."""
        with self._lock:
            self._require_capacity()
            nodes = reversed(self._order) if newest_first else iter(self._order)
            return [Entry(key=node.key, value=node.value) for node in nodes]

    def stats(self) -> StoreStats:
        with self._lock:
            capacity = self._require_capacity()
            return StoreStats(
                variant=self.variant,
                capacity=capacity,
                size=len(self._index),
                evictions=self._evictions,
            )

    def _require_capacity(self) -> int:
        if self._capacity is None:
            raise NotConfigured(f"{self.variant.value} cache is not initialized")
        return self._capacity

    def _evict_lru(self) -> None:
        victim = self._order.pop_front()
        if victim is None:
            return
        del self._index[victim.key]
        self._evictions += 1
        _logger.debug("%s store evicted key=%r", self.variant.value, victim.key)
