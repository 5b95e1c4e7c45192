# SPDX-License-Identifier: Apache-2.0
"""Model provider integration.

This module provides the Gemini REST client and the classification of
failed model calls into LIMIT_REACHED, OUTPUT_TRUNCATED and REQUEST_FAILED.
"""

from json_translator.llm.classifier import (
    DEFAULT_RETRY_AFTER_SECONDS,
    classify_exception,
    classify_finish_reason,
    classify_http_error,
    parse_retry_after,
)
from json_translator.llm.client import GeminiClient, GeminiConfig, ModelResponse

__all__ = [
    "DEFAULT_RETRY_AFTER_SECONDS",
    "GeminiClient",
    "GeminiConfig",
    "ModelResponse",
    "classify_exception",
    "classify_finish_reason",
    "classify_http_error",
    "parse_retry_after",
]
