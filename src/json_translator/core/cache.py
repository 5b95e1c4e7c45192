# SPDX-License-Identifier: Apache-2.0
"""In-memory LRU cache of translation results."""

from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any

DEFAULT_CACHE_CAPACITY = 100


def make_fingerprint(input: dict[str, Any], languages: Sequence[str]) -> str:
    """Build the cache key for a request.

    Object keys are sorted; language order is kept, so reordering the
    language list yields a different key.
    """
    canonical = json.dumps(
        {"input": input, "languages": list(languages)},
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ResultCache:
    """Size-bounded least-recently-used cache.

    Created once by the owner of the engine and kept for the life of the
    process. Entries never expire; they are dropped only on eviction.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._entries: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, fingerprint: str) -> dict[str, Any] | None:
        """Return the cached result and mark it most recently used."""
        with self._lock:
            result = self._entries.get(fingerprint)
            if result is not None:
                self._entries.move_to_end(fingerprint)
            return result

    def put(self, fingerprint: str, result: dict[str, Any]) -> None:
        """Store a result, evicting the least recently used entry if full."""
        with self._lock:
            self._entries[fingerprint] = result
            self._entries.move_to_end(fingerprint)
            while len(self._entries) > self._capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, fingerprint: object) -> bool:
        with self._lock:
            return fingerprint in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
