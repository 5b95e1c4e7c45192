# SPDX-License-Identifier: Apache-2.0
"""Request and response shape checks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from json_translator.errors import ShapeError, ValidationError


def clean_languages(languages: Iterable[Any]) -> list[str]:
    """Trim language identifiers and drop empty or non-string entries.

    Order is kept and duplicates are not removed.
    """
    cleaned: list[str] = []
    for lang in languages:
        if not isinstance(lang, str):
            continue
        lang = lang.strip()
        if lang:
            cleaned.append(lang)
    return cleaned


def validate_request(input: Any, languages: Any) -> list[str]:
    """Check a translation request before any network call.

    Args:
        input: Source JSON object.
        languages: Target language identifiers.

    Returns:
        Cleaned language list.

    Raises:
        ValidationError: If input is not a non-empty object or no
            language identifiers remain after cleaning.
    """
    if not isinstance(input, dict) or not input:
        raise ValidationError("Invalid input JSON.")

    if isinstance(languages, (str, bytes)) or not isinstance(languages, Iterable):
        raise ValidationError("Languages array is required.")

    cleaned = clean_languages(languages)
    if not cleaned:
        raise ValidationError("Languages array is empty.")
    return cleaned


def validate_shape(parsed: Any, languages: Sequence[str]) -> None:
    """Check that every requested language is a top-level key of parsed.

    Only top-level presence is checked; nested keys and leaf values are
    not compared with the source input.

    Raises:
        ShapeError: If parsed is not an object or a language is missing.
    """
    if not isinstance(parsed, dict):
        raise ShapeError("Invalid AI response format")

    for lang in languages:
        if not parsed.get(lang):
            raise ShapeError(f"Missing language in response: {lang}", language=lang)
