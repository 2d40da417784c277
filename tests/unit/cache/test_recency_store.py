"""Unit tests for RecencyStore."""

import random
import threading

import pytest

from lru_playground.cache.recency_store import RecencyStore
from lru_playground.core.errors import InvalidCapacity, NotConfigured
from lru_playground.core.models import MISS, CacheVariant, Entry


def _keys(store, newest_first=False):
    return [entry.key for entry in store.snapshot(newest_first=newest_first)]


class TestRecencyStore:
    """Test plain LRU behaviour."""

    def test_get_miss(self, lru_store):
        assert lru_store.get("nonexistent") is MISS
        assert not lru_store.get("nonexistent")

    def test_put_and_get(self, lru_store):
        lru_store.put("a", "1")
        assert lru_store.get("a") == "1"
        assert lru_store.size == 1
        assert "a" in lru_store
        assert len(lru_store) == 1

    def test_put_existing_key_updates_without_eviction(self, lru_store):
        lru_store.put("a", "1")
        lru_store.put("b", "2")
        lru_store.put("c", "3")

        lru_store.put("a", "updated")

        assert lru_store.size == 3
        assert lru_store.evictions == 0
        assert lru_store.peek("a") == "updated"
        assert _keys(lru_store) == ["b", "c", "a"]

    def test_get_refresh_protects_from_eviction(self, lru_store):
        """A, B, C at capacity 3; get A; put D evicts B."""
        for key in "ABC":
            lru_store.put(key, key.lower())

        assert lru_store.get("A") == "a"
        lru_store.put("D", "d")

        assert lru_store.get("B") is MISS
        assert lru_store.get("A") == "a"
        assert lru_store.get("C") == "c"
        assert lru_store.get("D") == "d"
        assert lru_store.evictions == 1

    def test_overflow_evicts_least_recently_used(self):
        store = RecencyStore(capacity=2)
        store.put("a", "1")
        store.put("b", "2")
        store.put("c", "3")

        assert _keys(store) == ["b", "c"]
        store.put("d", "4")
        assert _keys(store) == ["c", "d"]
        assert store.evictions == 2

    def test_repeated_get_is_stable(self, lru_store):
        lru_store.put("a", "1")
        lru_store.put("b", "2")
        lru_store.put("c", "3")

        for _ in range(3):
            assert lru_store.get("b") == "2"
            assert _keys(lru_store) == ["a", "c", "b"]
        assert lru_store.size == 3

    def test_snapshot_order_and_no_promotion(self, lru_store):
        lru_store.put("a", "1")
        lru_store.put("b", "2")
        lru_store.put("c", "3")

        assert lru_store.snapshot() == [Entry("a", "1"), Entry("b", "2"), Entry("c", "3")]
        assert _keys(lru_store, newest_first=True) == ["c", "b", "a"]

        # snapshot is not a use: "a" is still the eviction victim
        lru_store.put("d", "4")
        assert "a" not in lru_store

    def test_peek_does_not_promote(self, lru_store):
        lru_store.put("a", "1")
        lru_store.put("b", "2")
        assert lru_store.peek("a") == "1"
        assert _keys(lru_store) == ["a", "b"]
        assert lru_store.peek("zz") is MISS

    def test_empty_string_key(self, lru_store):
        lru_store.put("", "empty")
        assert lru_store.get("") == "empty"
        assert _keys(lru_store) == [""]

    def test_capacity_one(self):
        store = RecencyStore(capacity=1)
        store.put("a", "1")
        store.put("b", "2")
        assert store.get("a") is MISS
        assert store.get("b") == "2"

    def test_configure_then_fill(self):
        store = RecencyStore()
        store.configure(4)
        assert store.snapshot() == []

        for key in "wxyz":
            store.put(key, key)
        assert _keys(store) == ["w", "x", "y", "z"]

    def test_configure_resets_contents(self, lru_store):
        lru_store.put("a", "1")
        lru_store.put("b", "2")
        lru_store.put("c", "3")
        lru_store.put("d", "4")

        lru_store.configure(5)

        assert lru_store.capacity == 5
        assert lru_store.size == 0
        assert lru_store.evictions == 0
        assert lru_store.get("b") is MISS

    @pytest.mark.parametrize("capacity", [0, -1, 2.5, "3", None, True])
    def test_invalid_capacity_leaves_store_unchanged(self, lru_store, capacity):
        lru_store.put("a", "1")

        with pytest.raises(InvalidCapacity):
            lru_store.configure(capacity)

        assert lru_store.capacity == 3
        assert lru_store.get("a") == "1"

    def test_invalid_capacity_on_construction(self):
        with pytest.raises(InvalidCapacity):
            RecencyStore(capacity=0)

    def test_not_configured(self):
        store = RecencyStore()
        with pytest.raises(NotConfigured):
            store.put("a", "1")
        with pytest.raises(NotConfigured):
            store.get("a")
        with pytest.raises(NotConfigured):
            store.snapshot()
        with pytest.raises(NotConfigured):
            _ = store.size

    def test_stats(self, lru_store):
        for key in "abcd":
            lru_store.put(key, key)

        stats = lru_store.stats()
        assert stats.variant is CacheVariant.LRU
        assert stats.capacity == 3
        assert stats.size == 3
        assert stats.evictions == 1
        assert stats.to_dict()["variant"] == "lru"

    def test_random_operations_match_reference_model(self):
        """Compare against a list-based model over a random operation sequence."""
        rng = random.Random(7)
        store = RecencyStore(capacity=4)
        model = []  # oldest first
        values = {}

        for step in range(500):
            key = f"k{rng.randrange(8)}"
            if rng.random() < 0.6:
                value = f"v{step}"
                store.put(key, value)
                if key in model:
                    model.remove(key)
                elif len(model) == 4:
                    evicted = model.pop(0)
                    values.pop(evicted)
                model.append(key)
                values[key] = value
            else:
                result = store.get(key)
                if key in model:
                    assert result == values[key]
                    model.remove(key)
                    model.append(key)
                else:
                    assert result is MISS

            assert store.size <= 4
            assert _keys(store) == model

    def test_concurrent_puts_respect_capacity(self):
        store = RecencyStore(capacity=10)

        def worker(offset):
            for i in range(200):
                store.put(f"{offset}-{i % 25}", str(i))
                store.get(f"{offset}-{(i * 7) % 25}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = store.snapshot()
        assert store.size == 10
        assert len({entry.key for entry in snapshot}) == 10
