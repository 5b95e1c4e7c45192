# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the JSON translator."""

from __future__ import annotations

from enum import Enum


class TranslatorError(Exception):
    """Base exception for the translator package."""

    pass


class ValidationError(TranslatorError):
    """Malformed caller input (empty input object, empty language list).

    Raised before any network call is made.
    """

    pass


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, invalid parameters, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


class ParseError(TranslatorError):
    """Model output could not be recovered as JSON."""

    pass


class ShapeError(TranslatorError):
    """Parsed model output does not have the expected top-level shape.

    Attributes:
        language: The missing language identifier, or None when the
            parsed value is not an object at all.
    """

    def __init__(self, message: str, language: str | None = None) -> None:
        super().__init__(message)
        self.language = language


class ErrorKind(str, Enum):
    """Classification of a failed model call."""

    LIMIT_REACHED = "LIMIT_REACHED"
    OUTPUT_TRUNCATED = "OUTPUT_TRUNCATED"
    REQUEST_FAILED = "REQUEST_FAILED"


class ClassifiedError(TranslatorError):
    """Failure of an upstream model call, tagged with its kind.

    Attributes:
        kind: Error classification.
        message: Human-readable message (upstream message when available).
        retry_after_seconds: Backoff hint, only set for LIMIT_REACHED.
        status: Upstream HTTP status code, if any.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        retry_after_seconds: int | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.retry_after_seconds = (
            retry_after_seconds if kind is ErrorKind.LIMIT_REACHED else None
        )
        self.status = status

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(kind={self.kind.value}, message={self.message!r}, "
            f"retry_after_seconds={self.retry_after_seconds})"
        )

    @property
    def is_rate_limited(self) -> bool:
        """Whether the caller should back off and retry later."""
        return self.kind is ErrorKind.LIMIT_REACHED

    @property
    def is_truncated(self) -> bool:
        """Whether the model stopped at its output length limit."""
        return self.kind is ErrorKind.OUTPUT_TRUNCATED
