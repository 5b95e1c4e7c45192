# SPDX-License-Identifier: Apache-2.0
"""JSON Translator - translate JSON UI strings into many languages with Gemini.

Usage:
    from json_translator import GeminiClient, ResultCache, TranslationEngine

    async with TranslationEngine(GeminiClient(), cache=ResultCache()) as engine:
        result = await engine.translate({"greeting": "Hello {name}"}, ["fr", "de"])
"""

from json_translator.api import BoundaryResponse, handle_translate_request
from json_translator.core.cache import ResultCache
from json_translator.errors import (
    ClassifiedError,
    ConfigurationError,
    ErrorKind,
    ParseError,
    ShapeError,
    TranslatorError,
    ValidationError,
)
from json_translator.llm.client import GeminiClient, GeminiConfig
from json_translator.pipeline.engine import TranslationEngine

__version__ = "0.1.0"

__all__ = [
    "BoundaryResponse",
    "ClassifiedError",
    "ConfigurationError",
    "ErrorKind",
    "GeminiClient",
    "GeminiConfig",
    "ParseError",
    "ResultCache",
    "ShapeError",
    "TranslationEngine",
    "TranslatorError",
    "ValidationError",
    "__version__",
    "handle_translate_request",
]
