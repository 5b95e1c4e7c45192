# SPDX-License-Identifier: Apache-2.0
"""Core building blocks: prompt, parser, validators and cache."""

from json_translator.core.cache import DEFAULT_CACHE_CAPACITY, ResultCache, make_fingerprint
from json_translator.core.parser import parse_json_response
from json_translator.core.prompt import build_prompt
from json_translator.core.validator import (
    clean_languages,
    validate_request,
    validate_shape,
)

__all__ = [
    "DEFAULT_CACHE_CAPACITY",
    "ResultCache",
    "build_prompt",
    "clean_languages",
    "make_fingerprint",
    "parse_json_response",
    "validate_request",
    "validate_shape",
]
