# SPDX-License-Identifier: Apache-2.0
"""Lenient JSON parsing of model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from json_translator.errors import ParseError

logger = logging.getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```json", re.IGNORECASE)


def extract_brace_span(text: str) -> str | None:
    """Return the substring from the first '{' to the last '}' inclusive.

    Args:
        text: Raw model text.

    Returns:
        The candidate JSON object text, or None if no such span exists.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return None
    return text[first : last + 1]


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers (```json and ```)."""
    return _JSON_FENCE_RE.sub("", text).replace("```", "").strip()


def parse_json_response(raw_text: Any) -> Any:
    """Parse model output into a JSON value, tolerating surrounding noise.

    Tries, in order: a strict parse of the trimmed text, the span between
    the first '{' and the last '}', and the text with code fences removed.
    Brace extraction comes first because fence stripping does not help
    when prose surrounds a fenced block.

    Args:
        raw_text: Text returned by the model.

    Returns:
        Parsed JSON value.

    Raises:
        ParseError: If the text is empty or no JSON can be recovered.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise ParseError("Empty response from model")

    trimmed = raw_text.strip()

    try:
        return json.loads(trimmed)
    except json.JSONDecodeError:
        logger.debug("Strict JSON parse failed, trying brace extraction")

    extracted = extract_brace_span(trimmed)
    if extracted is not None:
        try:
            return json.loads(extracted)
        except json.JSONDecodeError:
            logger.debug("Brace extraction failed, trying fence stripping")

    try:
        return json.loads(strip_code_fences(trimmed))
    except json.JSONDecodeError as e:
        raise ParseError(f"Model response is not valid JSON: {e}") from e
