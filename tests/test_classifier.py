# SPDX-License-Identifier: Apache-2.0
"""Tests for model call failure classification."""

import aiohttp
import pytest

from json_translator.errors import ClassifiedError, ErrorKind, TranslatorError
from json_translator.llm.classifier import (
    DEFAULT_RETRY_AFTER_SECONDS,
    classify_exception,
    classify_finish_reason,
    classify_http_error,
    extract_error_message,
    parse_retry_after,
)


class TestParseRetryAfter:
    """Tests for parse_retry_after."""

    def test_numeric(self) -> None:
        """Numeric header values should be used as seconds."""
        assert parse_retry_after("30") == 30

    def test_fractional(self) -> None:
        """Fractional seconds should be truncated to whole seconds."""
        assert parse_retry_after("12.7") == 12

    @pytest.mark.parametrize("value", [None, "", "soon", "-5", "nan", "inf"])
    def test_defaults(self, value: object) -> None:
        """Absent or unusable values should fall back to 60 seconds."""
        assert parse_retry_after(value) == DEFAULT_RETRY_AFTER_SECONDS == 60


class TestClassifyHttpError:
    """Tests for classify_http_error."""

    def test_429_with_retry_after(self) -> None:
        """429 with Retry-After: 30 should be LIMIT_REACHED with 30 seconds."""
        error = classify_http_error(429, None, {"Retry-After": "30"})
        assert error.kind is ErrorKind.LIMIT_REACHED
        assert error.retry_after_seconds == 30
        assert error.status == 429
        assert error.is_rate_limited

    def test_429_without_retry_after(self) -> None:
        """Missing Retry-After should default to 60 seconds."""
        error = classify_http_error(429, None, {})
        assert error.kind is ErrorKind.LIMIT_REACHED
        assert error.retry_after_seconds == 60

    def test_retry_after_header_case_insensitive(self) -> None:
        """Header lookup should ignore case on plain dicts."""
        error = classify_http_error(429, None, {"retry-after": "5"})
        assert error.retry_after_seconds == 5

    @pytest.mark.parametrize(
        "message",
        [
            "Resource has been exhausted (e.g. check quota).",
            "Rate Limit exceeded for this project",
            "Error 429: too many requests",
        ],
    )
    def test_rate_limit_message_on_other_status(self, message: str) -> None:
        """Quota or rate-limit messages should win over the status code."""
        error = classify_http_error(403, {"error": {"message": message}}, {})
        assert error.kind is ErrorKind.LIMIT_REACHED
        assert error.retry_after_seconds == 60

    def test_request_failed_with_upstream_message(self) -> None:
        """Other failures should carry the upstream message."""
        body = {"error": {"message": "API key not valid. Please pass a valid API key."}}
        error = classify_http_error(400, body, {})
        assert error.kind is ErrorKind.REQUEST_FAILED
        assert error.message == "API key not valid. Please pass a valid API key."
        assert error.retry_after_seconds is None
        assert error.status == 400

    def test_request_failed_generic_message(self) -> None:
        """Missing body should give the generic message."""
        error = classify_http_error(500, None, {})
        assert error.kind is ErrorKind.REQUEST_FAILED
        assert error.message == "Gemini request failed"

    def test_string_error_body(self) -> None:
        """A string error field should be used as the message."""
        error = classify_http_error(502, {"error": "Bad gateway"}, {})
        assert error.message == "Bad gateway"


class TestClassifyException:
    """Tests for classify_exception."""

    def test_connection_error(self) -> None:
        """Transport errors should be REQUEST_FAILED."""
        error = classify_exception(aiohttp.ClientError("Connection reset"))
        assert error.kind is ErrorKind.REQUEST_FAILED
        assert "Connection reset" in error.message

    def test_quota_in_exception(self) -> None:
        """Quota text in an exception should be LIMIT_REACHED."""
        error = classify_exception(RuntimeError("quota exceeded"))
        assert error.kind is ErrorKind.LIMIT_REACHED
        assert error.retry_after_seconds == 60


class TestClassifyFinishReason:
    """Tests for classify_finish_reason."""

    def test_max_tokens(self) -> None:
        """MAX_TOKENS should be OUTPUT_TRUNCATED."""
        error = classify_finish_reason("MAX_TOKENS")
        assert error is not None
        assert error.kind is ErrorKind.OUTPUT_TRUNCATED
        assert error.is_truncated
        assert error.retry_after_seconds is None

    @pytest.mark.parametrize("reason", ["STOP", None, "SAFETY"])
    def test_not_truncated(self, reason: object) -> None:
        """Other finish reasons should not be classified."""
        assert classify_finish_reason(reason) is None


class TestClassifiedError:
    """Tests for the ClassifiedError type."""

    def test_inherits_from_translator_error(self) -> None:
        """ClassifiedError should inherit from TranslatorError."""
        assert issubclass(ClassifiedError, TranslatorError)

    def test_retry_hint_only_for_limit_reached(self) -> None:
        """retry_after_seconds should be dropped for other kinds."""
        error = ClassifiedError(ErrorKind.REQUEST_FAILED, "boom", retry_after_seconds=10)
        assert error.retry_after_seconds is None

    def test_str(self) -> None:
        """str() should be the message."""
        assert str(ClassifiedError(ErrorKind.REQUEST_FAILED, "boom")) == "boom"


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_not_a_mapping(self) -> None:
        """Non-dict bodies have no message."""
        assert extract_error_message(["error"]) is None
        assert extract_error_message(None) is None
