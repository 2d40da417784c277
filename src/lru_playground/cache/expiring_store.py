from __future__ import annotations

import logging
import math
import threading
import time
import typing as t

from ..core.errors import InvalidTTL, NotConfigured
from ..core.models import MISS, CacheVariant, Entry, StoreStats
from .linked import Node, RecencyList
from .recency_store import validate_capacity

_logger = logging.getLogger(__name__)

Clock = t.Callable[[], float]


def validate_ttl(ttl_seconds: t.Any) -> float:
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float)):
        raise InvalidTTL(f"ttl must be a number of seconds, got {ttl_seconds!r}")
    if math.isnan(ttl_seconds) or ttl_seconds < 0:
        raise InvalidTTL(f"ttl must be non-negative, got {ttl_seconds}")
    return float(ttl_seconds)


class ExpiringRecencyStore:
    """LRU store whose entries carry an absolute expiration instant.

    Expiry is lazy: an entry at or past ``expires_at`` is treated as absent
    and removed by whichever operation finds it. Only live entries count
    toward capacity, so a full store purges expired entries before it evicts
    a live one. Timestamps come from the injected ``clock``.
    """

    variant = CacheVariant.LRU_TTL

    def __init__(
        self,
        capacity: t.Optional[int] = None,
        *,
        default_ttl_seconds: float = 60.0,
        clock: t.Optional[Clock] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._clock: Clock = clock or time.monotonic
        self._default_ttl = validate_ttl(default_ttl_seconds)
        self._capacity: t.Optional[int] = None
        self._index: t.Dict[str, Node] = {}
        self._order = RecencyList()
        self._evictions = 0
        self._expirations = 0
        if capacity is not None:
            self.configure(capacity)

    def configure(self, capacity: int) -> None:
        capacity = validate_capacity(capacity)
        with self._lock:
            self._capacity = capacity
            self._index = {}
            self._order = RecencyList()
            self._evictions = 0
            self._expirations = 0
        _logger.debug("%s store configured capacity=%d", self.variant.value, capacity)

    @property
    def capacity(self) -> int:
        return self._require_capacity()

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    @property
    def size(self) -> int:
        with self._lock:
            self._require_capacity()
            self._purge_expired(self._clock())
            return len(self._index)

    @property
    def evictions(self) -> int:
        return self._evictions

    @property
    def expirations(self) -> int:
        return self._expirations

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        with self._lock:
            self._require_capacity()
            return self._live_node(key, self._clock()) is not None

    def put(self, key: str, value: t.Any, ttl_seconds: t.Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else validate_ttl(ttl_seconds)
        with self._lock:
            capacity = self._require_capacity()
            now = self._clock()
            expires_at = now + ttl
            node = self._live_node(key, now)
            if expires_at <= now:
                # dead on arrival: nothing may observe it, so only the old entry goes
                if node is not None:
                    self._remove(node)
                    self._expirations += 1
                return
            if node is not None:
                node.value = value
                node.expires_at = expires_at
                self._order.move_to_back(node)
                return
            if len(self._index) >= capacity:
                self._purge_expired(now)
            if len(self._index) >= capacity:
                self._evict_lru()
            node = Node(key=key, value=value, expires_at=expires_at)
            self._index[key] = node
            self._order.push_back(node)

    def get(self, key: str) -> t.Any:
        with self._lock:
            self._require_capacity()
            node = self._live_node(key, self._clock())
            if node is None:
                return MISS
            self._order.move_to_back(node)
            return node.value

    def peek(self, key: str) -> t.Any:
        with self._lock:
            self._require_capacity()
            node = self._live_node(key, self._clock())
            return MISS if node is None else node.value

    def snapshot(self, newest_first: bool = False) -> t.List[Entry]:
        """Return live entries oldest to newest (or reversed).

        Expired entries met on the way are purged; the relative order of live
        entries is left as it was.
        """
        with self._lock:
            self._require_capacity()
            self._purge_expired(self._clock())
            nodes = reversed(self._order) if newest_first else iter(self._order)
            return [Entry(key=node.key, value=node.value, expires_at=node.expires_at) for node in nodes]

    def stats(self) -> StoreStats:
        with self._lock:
            capacity = self._require_capacity()
            self._purge_expired(self._clock())
            return StoreStats(
                variant=self.variant,
                capacity=capacity,
                size=len(self._index),
                evictions=self._evictions,
                expirations=self._expirations,
            )

    def _require_capacity(self) -> int:
        if self._capacity is None:
            raise NotConfigured(f"{self.variant.value} cache is not initialized")
        return self._capacity

    def _live_node(self, key: object, now: float) -> t.Optional[Node]:
        node = self._index.get(key)  # type: ignore[arg-type]
        if node is None:
            return None
        if node.expires_at <= now:
            self._remove(node)
            self._expirations += 1
            _logger.debug("%s store expired key=%r", self.variant.value, node.key)
            return None
        return node

    def _purge_expired(self, now: float) -> None:
        for node in self._order:
            if node.expires_at <= now:
                self._remove(node)
                self._expirations += 1
                _logger.debug("%s store expired key=%r", self.variant.value, node.key)

    def _remove(self, node: Node) -> None:
        self._order.unlink(node)
        del self._index[node.key]

    def _evict_lru(self) -> None:
        victim = self._order.pop_front()
        if victim is None:
            return
        del self._index[victim.key]
        self._evictions += 1
        _logger.debug("%s store evicted key=%r", self.variant.value, victim.key)
