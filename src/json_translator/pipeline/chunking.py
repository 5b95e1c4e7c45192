# SPDX-License-Identifier: Apache-2.0
"""Retry-by-splitting when model output is truncated."""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from json_translator.errors import ClassifiedError, ErrorKind, ShapeError
from json_translator.pipeline.progress import ChunkProgressCallback

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 4
BATCH_SIZE_ENV_VAR = "GEMINI_BATCH_SIZE"

# (input, languages) -> validated result for exactly those languages
CallFn = Callable[[dict[str, Any], list[str]], Awaitable[dict[str, Any]]]


def resolve_batch_size(batch_size: int | None = None) -> int:
    """Resolve the chunk size (argument > GEMINI_BATCH_SIZE env > default).

    Non-numeric environment values fall back to DEFAULT_BATCH_SIZE; the
    result is always at least 1.
    """
    if batch_size is None:
        env_value = os.environ.get(BATCH_SIZE_ENV_VAR)
        try:
            batch_size = int(env_value) if env_value else DEFAULT_BATCH_SIZE
        except ValueError:
            logger.warning(
                "Ignoring invalid %s=%r", BATCH_SIZE_ENV_VAR, env_value
            )
            batch_size = DEFAULT_BATCH_SIZE
    return max(1, int(batch_size))


def chunk_languages(languages: Sequence[str], size: int) -> list[list[str]]:
    """Split languages into consecutive chunks of at most size items."""
    size = max(1, int(size))
    return [list(languages[i : i + size]) for i in range(0, len(languages), size)]


class ChunkedRetryController:
    """Translate all languages at once, splitting once on truncation.

    Splitting is a single level deep: a chunk that fails is not split
    again, so one translation makes at most
    ``1 + ceil(len(languages) / batch_size)`` calls. Chunks run
    sequentially.

    Chunk results are merged by taking only the languages each chunk
    requested, not the union of every key the model returned. Extra
    keys in a chunk response are dropped so a later chunk can never
    overwrite a language an earlier chunk translated. A response to the
    first, unsplit call is returned as-is.
    """

    def __init__(
        self,
        batch_size: int | None = None,
        progress_callback: ChunkProgressCallback | None = None,
    ) -> None:
        self._batch_size = resolve_batch_size(batch_size)
        self._progress_callback = progress_callback

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def translate_with_retry(
        self,
        input: dict[str, Any],
        languages: Sequence[str],
        call_fn: CallFn,
        batch_size: int | None = None,
    ) -> dict[str, Any]:
        """Run call_fn for all languages, falling back to chunks on truncation.

        Args:
            input: Source JSON object.
            languages: Target languages.
            call_fn: Coroutine function performing one model call.
            batch_size: Chunk size override.

        Returns:
            Merged translation result.

        Raises:
            ClassifiedError: LIMIT_REACHED or REQUEST_FAILED. Truncation is
                never raised; it becomes REQUEST_FAILED when splitting
                cannot recover it.
        """
        languages = list(languages)

        try:
            return await call_fn(input, languages)
        except ClassifiedError as e:
            if not e.is_truncated:
                raise
            if len(languages) <= 1:
                raise ClassifiedError(
                    ErrorKind.REQUEST_FAILED,
                    f"Model output was truncated for language: {', '.join(languages)}",
                    status=e.status,
                ) from e

        chunks = chunk_languages(languages, batch_size or self._batch_size)
        logger.info(
            "Output truncated for %d languages, retrying in %d chunks",
            len(languages),
            len(chunks),
        )

        merged: dict[str, Any] = {}
        for index, chunk in enumerate(chunks, 1):
            try:
                partial = await call_fn(input, chunk)
            except ClassifiedError as e:
                if not e.is_truncated:
                    raise
                raise ClassifiedError(
                    ErrorKind.REQUEST_FAILED,
                    f"Model output was truncated for languages: {', '.join(chunk)}",
                    status=e.status,
                ) from e

            for lang in chunk:
                if lang not in partial:
                    raise ShapeError(
                        f"Missing language in response: {lang}", language=lang
                    )
                merged[lang] = partial[lang]
            self._notify(index, len(chunks), chunk)

        return merged

    def _notify(self, current: int, total: int, chunk: list[str]) -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(current, total, chunk)
