# SPDX-License-Identifier: Apache-2.0
"""Translation orchestration package."""

from .chunking import (
    DEFAULT_BATCH_SIZE,
    ChunkedRetryController,
    chunk_languages,
    resolve_batch_size,
)
from .engine import ModelClient, TranslationEngine
from .progress import ChunkProgressCallback

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "ChunkProgressCallback",
    "ChunkedRetryController",
    "ModelClient",
    "TranslationEngine",
    "chunk_languages",
    "resolve_batch_size",
]
