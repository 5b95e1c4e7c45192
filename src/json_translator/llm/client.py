# SPDX-License-Identifier: Apache-2.0
"""Gemini REST client built on aiohttp."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import aiohttp

from json_translator.errors import ConfigurationError
from json_translator.llm.classifier import (
    classify_exception,
    classify_finish_reason,
    classify_http_error,
)

logger = logging.getLogger(__name__)


@dataclass
class GeminiConfig:
    """Configuration for the Gemini generateContent API.

    Attributes:
        api_key: API key. If None, read from GEMINI_API_KEY.
        model: Model name. If None, read from GEMINI_MODEL or use DEFAULT_MODEL.
        api_version: API version. If None, read from GEMINI_API_VERSION.
        api_base: Base URL of the Generative Language API.
        temperature: Sampling temperature.
        top_p: Nucleus sampling threshold.
        max_output_tokens: Output token limit per call.
    """

    api_key: str | None = None
    model: str | None = None  # None = GEMINI_MODEL env or DEFAULT_MODEL
    api_version: str | None = None
    api_base: str = "https://generativelanguage.googleapis.com"
    temperature: float = 0.2
    top_p: float = 0.9
    max_output_tokens: int = 8192

    DEFAULT_MODEL: ClassVar[str] = "gemini-2.5-flash"
    DEFAULT_API_VERSION: ClassVar[str] = "v1beta"

    API_KEY_ENV_VAR: ClassVar[str] = "GEMINI_API_KEY"
    MODEL_ENV_VAR: ClassVar[str] = "GEMINI_MODEL"
    API_VERSION_ENV_VAR: ClassVar[str] = "GEMINI_API_VERSION"

    @property
    def effective_api_key(self) -> str:
        """Get API key (argument first, then environment)."""
        return self.api_key or os.environ.get(self.API_KEY_ENV_VAR, "")

    @property
    def effective_model(self) -> str:
        """Get model name (argument > GEMINI_MODEL env > default)."""
        return self.model or os.environ.get(self.MODEL_ENV_VAR) or self.DEFAULT_MODEL

    @property
    def effective_api_version(self) -> str:
        """Get API version (argument > GEMINI_API_VERSION env > default)."""
        return (
            self.api_version
            or os.environ.get(self.API_VERSION_ENV_VAR)
            or self.DEFAULT_API_VERSION
        )

    @property
    def endpoint(self) -> str:
        """Get the generateContent endpoint URL."""
        base = self.api_base.rstrip("/")
        return (
            f"{base}/{self.effective_api_version}/models/"
            f"{self.effective_model}:generateContent"
        )

    def generation_config(self) -> dict[str, Any]:
        """Get the generationConfig request block."""
        return {
            "temperature": self.temperature,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


@dataclass
class ModelResponse:
    """Successful generateContent response."""

    text: str
    finish_reason: str | None = None
    status: int = 200


def extract_candidate(body: Any) -> tuple[str, str | None]:
    """Get (text, finishReason) of the first candidate.

    Missing fields yield an empty text and a None finish reason.
    """
    if not isinstance(body, Mapping):
        return "", None
    candidates = body.get("candidates") or []
    if not candidates or not isinstance(candidates[0], Mapping):
        return "", None

    candidate = candidates[0]
    finish_reason = candidate.get("finishReason")
    parts = (candidate.get("content") or {}).get("parts") or []
    text = parts[0].get("text") if parts and isinstance(parts[0], Mapping) else None
    return (text if isinstance(text, str) else ""), finish_reason


class GeminiClient:
    """Async client for the Gemini generateContent REST API.

    The API key is forwarded in the ``x-goog-api-key`` header. No request
    timeout is applied; cancel the calling task to abort a request.

    Attributes:
        name: Backend identifier ("gemini").
    """

    def __init__(
        self,
        config: GeminiConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize GeminiClient.

        Args:
            config: Client configuration (defaults read from environment).
            session: Existing aiohttp session. If None, one is created on
                first use and closed by close().

        Raises:
            ConfigurationError: If no API key is available.
        """
        self._config = config or GeminiConfig()
        self._api_key = self._config.effective_api_key
        if not self._api_key:
            raise ConfigurationError(
                f"Gemini API key is required (set {GeminiConfig.API_KEY_ENV_VAR})"
            )
        self._session = session
        self._owns_session = session is None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "gemini"

    @property
    def config(self) -> GeminiConfig:
        return self._config

    async def __aenter__(self) -> GeminiClient:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=None)
            )
            self._owns_session = True
        return self._session

    def _build_payload(
        self,
        prompt: str,
        generation_config: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
            "generationConfig": generation_config or self._config.generation_config(),
        }

    async def _post(
        self, payload: dict[str, Any]
    ) -> tuple[int, Any, Mapping[str, str]]:
        """POST a payload and return (status, decoded body, headers).

        Raises:
            ClassifiedError: On transport failure.
        """
        session = await self._ensure_session()
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

        try:
            async with session.post(
                self._config.endpoint, json=payload, headers=headers
            ) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                return response.status, body, response.headers
        except aiohttp.ClientError as e:
            raise classify_exception(e) from e

    async def generate(
        self,
        prompt: str,
        generation_config: dict[str, Any] | None = None,
    ) -> ModelResponse:
        """Generate text for a single user prompt.

        Args:
            prompt: Prompt text.
            generation_config: Override for the generationConfig block.

        Returns:
            Model response with text and finish reason.

        Raises:
            ClassifiedError: LIMIT_REACHED or REQUEST_FAILED on upstream
                failure, OUTPUT_TRUNCATED when the output hit its length
                limit.
        """
        logger.debug(
            "Requesting %s (%d prompt chars)", self._config.effective_model, len(prompt)
        )
        status, body, headers = await self._post(
            self._build_payload(prompt, generation_config)
        )

        if not 200 <= status < 300:
            raise classify_http_error(status, body, headers)

        text, finish_reason = extract_candidate(body)
        truncated = classify_finish_reason(finish_reason)
        if truncated is not None:
            raise truncated

        return ModelResponse(text=text, finish_reason=finish_reason, status=status)

    async def validate_api_key(self) -> bool:
        """Check the API key with a minimal request.

        Returns:
            True if the provider accepted the request.

        Raises:
            ClassifiedError: If the provider rejected it.
        """
        status, body, headers = await self._post(
            self._build_payload(
                'Reply with JSON: {"ok":true}',
                {"temperature": 0, "maxOutputTokens": 32},
            )
        )
        if not 200 <= status < 300:
            raise classify_http_error(status, body, headers)
        return True

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None
