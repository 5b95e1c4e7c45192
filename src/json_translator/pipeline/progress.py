# SPDX-License-Identifier: Apache-2.0
"""Chunk progress reporting."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChunkProgressCallback(Protocol):
    """Called after each language chunk of a split retry completes.

    ``current`` counts finished chunks (1-based), ``total`` is the chunk
    count and ``languages`` are the languages the chunk translated.
    """

    def __call__(self, current: int, total: int, languages: list[str]) -> None: ...
