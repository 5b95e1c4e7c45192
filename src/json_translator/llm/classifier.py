# SPDX-License-Identifier: Apache-2.0
"""Classification of failed model calls."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from json_translator.errors import ClassifiedError, ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60
DEFAULT_FAILURE_MESSAGE = "Gemini request failed"

# Case-insensitive markers of quota exhaustion in upstream messages
RATE_LIMIT_MARKERS = ("quota", "rate limit", "429")

# finishReason values meaning generation stopped at the output length limit
TRUNCATION_FINISH_REASONS = frozenset({"MAX_TOKENS"})


def parse_retry_after(value: Any) -> int:
    """Convert a Retry-After header value to seconds.

    Falls back to DEFAULT_RETRY_AFTER_SECONDS when the value is absent,
    non-numeric or negative.
    """
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = float(str(value).strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    if not math.isfinite(seconds) or seconds < 0:
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(seconds)


def is_rate_limit_message(message: str | None) -> bool:
    """Check whether an upstream message reports rate limiting."""
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def extract_error_message(body: Any) -> str | None:
    """Pull the upstream error message out of a response body.

    Accepts both ``{"error": {"message": ...}}`` and ``{"error": "..."}``.
    """
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    if isinstance(error, Mapping):
        message = error.get("message")
        return message if isinstance(message, str) and message else None
    if isinstance(error, str) and error:
        return error
    return None


def _get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; aiohttp's CIMultiDict is not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def classify_http_error(
    status: int,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
) -> ClassifiedError:
    """Classify a non-2xx response from the model provider.

    Rate limiting (status 429 or a quota/rate-limit message) wins over
    generic failure.

    Args:
        status: HTTP status code.
        body: Decoded JSON body, or None if it was not JSON.
        headers: Response headers.

    Returns:
        LIMIT_REACHED or REQUEST_FAILED error.
    """
    message = extract_error_message(body)

    if status == 429 or is_rate_limit_message(message):
        retry_after = parse_retry_after(_get_header(headers, "Retry-After"))
        logger.warning(
            "Model provider rate limit reached (status %d), retry after %ds",
            status,
            retry_after,
        )
        return ClassifiedError(
            ErrorKind.LIMIT_REACHED,
            message or "Limit reached",
            retry_after_seconds=retry_after,
            status=status,
        )

    return ClassifiedError(
        ErrorKind.REQUEST_FAILED,
        message or DEFAULT_FAILURE_MESSAGE,
        status=status,
    )


def classify_exception(error: BaseException) -> ClassifiedError:
    """Classify a transport-level failure (connection errors, etc.)."""
    message = str(error) or error.__class__.__name__
    if is_rate_limit_message(message):
        return ClassifiedError(
            ErrorKind.LIMIT_REACHED,
            message,
            retry_after_seconds=DEFAULT_RETRY_AFTER_SECONDS,
        )
    return ClassifiedError(
        ErrorKind.REQUEST_FAILED,
        f"{DEFAULT_FAILURE_MESSAGE}: {message}",
    )


def classify_finish_reason(finish_reason: str | None) -> ClassifiedError | None:
    """Classify the finish reason of a successful (2xx) response.

    Returns:
        OUTPUT_TRUNCATED error when generation hit the output limit,
        otherwise None.
    """
    if finish_reason in TRUNCATION_FINISH_REASONS:
        return ClassifiedError(
            ErrorKind.OUTPUT_TRUNCATED,
            "Model output was truncated at the output token limit",
        )
    return None
