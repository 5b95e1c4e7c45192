# SPDX-License-Identifier: Apache-2.0
"""Tests for the LRU result cache."""

import pytest

from json_translator.core.cache import (
    DEFAULT_CACHE_CAPACITY,
    ResultCache,
    make_fingerprint,
)


class TestMakeFingerprint:
    """Tests for make_fingerprint."""

    def test_stable(self) -> None:
        """Same request should give the same fingerprint."""
        assert make_fingerprint({"a": "b"}, ["fr"]) == make_fingerprint({"a": "b"}, ["fr"])

    def test_object_key_order_ignored(self) -> None:
        """Object key order should not change the fingerprint."""
        first = make_fingerprint({"a": "1", "b": "2"}, ["fr"])
        second = make_fingerprint({"b": "2", "a": "1"}, ["fr"])
        assert first == second

    def test_language_order_matters(self) -> None:
        """Reordering languages should give a different fingerprint."""
        assert make_fingerprint({"a": "b"}, ["fr", "de"]) != make_fingerprint(
            {"a": "b"}, ["de", "fr"]
        )

    def test_input_matters(self) -> None:
        """Different input should give a different fingerprint."""
        assert make_fingerprint({"a": "b"}, ["fr"]) != make_fingerprint({"a": "c"}, ["fr"])


class TestResultCache:
    """Tests for ResultCache."""

    def test_default_capacity(self) -> None:
        """Default capacity should be 100."""
        assert DEFAULT_CACHE_CAPACITY == 100
        assert ResultCache().capacity == 100

    def test_invalid_capacity(self) -> None:
        """Capacity below 1 should be rejected."""
        with pytest.raises(ValueError):
            ResultCache(capacity=0)

    def test_get_missing(self) -> None:
        """Unknown fingerprint should return None."""
        assert ResultCache().get("missing") is None

    def test_put_and_get_same_object(self) -> None:
        """Stored result should come back as the same object."""
        cache = ResultCache()
        result = {"fr": {"a": "b"}}
        cache.put("key", result)
        assert cache.get("key") is result
        assert "key" in cache
        assert len(cache) == 1

    def test_evicts_least_recently_used(self) -> None:
        """Inserting entry 101 should evict the oldest entry."""
        cache = ResultCache(capacity=100)
        for i in range(100):
            cache.put(f"key-{i}", {"fr": {"i": str(i)}})

        cache.put("key-100", {"fr": {"i": "100"}})

        assert len(cache) == 100
        assert cache.get("key-0") is None
        assert cache.get("key-1") is not None
        assert cache.get("key-100") is not None

    def test_get_refreshes_recency(self) -> None:
        """A lookup should protect the entry from the next eviction."""
        cache = ResultCache(capacity=2)
        cache.put("a", {"fr": {}})
        cache.put("b", {"fr": {}})
        cache.get("a")
        cache.put("c", {"fr": {}})

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_put_existing_key_refreshes(self) -> None:
        """Overwriting a key should update the value and its recency."""
        cache = ResultCache(capacity=2)
        cache.put("a", {"v": 1})
        cache.put("b", {"v": 2})
        cache.put("a", {"v": 3})
        cache.put("c", {"v": 4})

        assert cache.get("a") == {"v": 3}
        assert "b" not in cache

    def test_clear(self) -> None:
        """clear should remove every entry."""
        cache = ResultCache()
        cache.put("a", {})
        cache.clear()
        assert len(cache) == 0
