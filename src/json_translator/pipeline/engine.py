# SPDX-License-Identifier: Apache-2.0
"""Translation engine: cache, prompt, model call, parse and validate."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from json_translator.core.cache import ResultCache, make_fingerprint
from json_translator.core.parser import parse_json_response
from json_translator.core.prompt import build_prompt
from json_translator.core.validator import validate_request, validate_shape
from json_translator.llm.client import ModelResponse
from json_translator.pipeline.chunking import ChunkedRetryController
from json_translator.pipeline.progress import ChunkProgressCallback

logger = logging.getLogger(__name__)


@runtime_checkable
class ModelClient(Protocol):
    """Protocol for the model client used by the engine."""

    async def generate(self, prompt: str) -> ModelResponse:
        """Generate text for a prompt.

        Raises:
            ClassifiedError: On upstream failure or truncated output.
        """
        ...


class TranslationEngine:
    """Translate a JSON object of UI strings into several languages.

    The cache is owned by the caller and injected here, so several
    engines can share one cache or tests can start from an empty one.
    Concurrent calls with the same request share one in-flight model
    call.
    """

    def __init__(
        self,
        client: ModelClient,
        cache: ResultCache | None = None,
        batch_size: int | None = None,
        progress_callback: ChunkProgressCallback | None = None,
    ) -> None:
        """Initialize TranslationEngine.

        Args:
            client: Model client.
            cache: Result cache. A private cache is created if None.
            batch_size: Languages per chunk after truncation.
            progress_callback: Optional chunk progress callback.
        """
        self._client = client
        self._cache = cache if cache is not None else ResultCache()
        self._controller = ChunkedRetryController(batch_size, progress_callback)
        self._pending: dict[str, asyncio.Future[dict[str, Any]]] = {}

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def __aenter__(self) -> TranslationEngine:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def translate(
        self,
        input: dict[str, Any],
        languages: Sequence[str],
    ) -> dict[str, Any]:
        """Translate input into every requested language.

        Args:
            input: Nested JSON object of English UI strings.
            languages: Target language identifiers.

        Returns:
            Mapping of language identifier to translated object. A cache
            hit returns the cached object itself.

        Raises:
            ValidationError: On malformed input, before any network call.
            ParseError: If the model output is not JSON.
            ShapeError: If a requested language is missing.
            ClassifiedError: LIMIT_REACHED or REQUEST_FAILED.
            asyncio.CancelledError: If the calling task is cancelled.
        """
        cleaned = validate_request(input, languages)
        fingerprint = make_fingerprint(input, cleaned)

        while True:
            cached = self._cache.get(fingerprint)
            if cached is not None:
                logger.debug("Cache hit for %s", ", ".join(cleaned))
                return cached

            pending = self._pending.get(fingerprint)
            if pending is None:
                return await self._translate_owned(fingerprint, input, cleaned)

            logger.debug("Joining in-flight request for %s", ", ".join(cleaned))
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                # Only the owner was cancelled: claim the request ourselves
                if not pending.cancelled() or _cancel_requested():
                    raise
                logger.debug("In-flight request was cancelled, retrying")

    async def _translate_owned(
        self,
        fingerprint: str,
        input: dict[str, Any],
        languages: list[str],
    ) -> dict[str, Any]:
        """Run the request and publish its outcome to any waiters."""
        future: asyncio.Future[dict[str, Any]] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending[fingerprint] = future
        try:
            result = await self._controller.translate_with_retry(
                input, languages, self._request_translation
            )
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved; waiters (if any) re-raise it themselves
            future.exception()
            raise
        else:
            self._cache.put(fingerprint, result)
            future.set_result(result)
            return result
        finally:
            if not future.done():
                future.cancel()
            if self._pending.get(fingerprint) is future:
                del self._pending[fingerprint]

    async def _request_translation(
        self,
        input: dict[str, Any],
        languages: list[str],
    ) -> dict[str, Any]:
        """Issue one model call for the given languages."""
        prompt = build_prompt(input, languages)
        response = await self._client.generate(prompt)
        parsed = parse_json_response(response.text)
        validate_shape(parsed, languages)
        return parsed

    async def close(self) -> None:
        """Close the underlying client, if it supports closing."""
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()


def _cancel_requested() -> bool:
    """Return True if the current task has a pending cancellation request."""
    task = asyncio.current_task()
    # Task.cancelling() exists on Python 3.11+
    cancelling = getattr(task, "cancelling", None)
    return bool(cancelling and cancelling())
