# SPDX-License-Identifier: Apache-2.0
"""Framework-agnostic request handler for translation endpoints.

Web or RPC layers call ``handle_translate_request`` with the decoded
request body and send back ``BoundaryResponse.status_code`` and
``BoundaryResponse.body`` as JSON. Rate limiting gets its own status and
``type`` marker so clients can back off using ``retry_after_seconds``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from json_translator.errors import (
    ClassifiedError,
    ErrorKind,
    TranslatorError,
    ValidationError,
)
from json_translator.pipeline.engine import TranslationEngine

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Translation failed."


class TranslateRequest(BaseModel):
    """Structure of an inbound translation request."""

    input: dict[str, Any]
    languages: list[Any]


@dataclass
class BoundaryResponse:
    """Status code and JSON body to send back to the caller."""

    status_code: int
    body: dict[str, Any]

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))


def _describe_payload_error(error: PydanticValidationError) -> str:
    errors = error.errors()
    location = errors[0]["loc"] if errors else ()
    if location and location[0] == "languages":
        return "Languages array is required."
    return "Invalid input JSON."


def success_response(data: dict[str, Any]) -> BoundaryResponse:
    return BoundaryResponse(200, {"success": True, "data": data})


def error_response(error: Exception) -> BoundaryResponse:
    """Map a translation failure to a boundary response."""
    if isinstance(error, ValidationError):
        return BoundaryResponse(400, {"success": False, "error": str(error)})

    if isinstance(error, ClassifiedError) and error.kind is ErrorKind.LIMIT_REACHED:
        return BoundaryResponse(
            429,
            {
                "success": False,
                "type": ErrorKind.LIMIT_REACHED.value,
                "retry_after_seconds": error.retry_after_seconds,
            },
        )

    return BoundaryResponse(500, {"success": False, "error": GENERIC_FAILURE_MESSAGE})


async def handle_translate_request(
    payload: Any,
    engine: TranslationEngine,
) -> BoundaryResponse:
    """Validate a raw payload, translate it and build the response.

    Args:
        payload: Decoded JSON body, expected ``{"input": {...}, "languages": [...]}``.
        engine: Translation engine to use.

    Returns:
        200 with ``{"success": true, "data": ...}`` on success, 400 for
        invalid payloads, 429 with ``type: "LIMIT_REACHED"`` when rate
        limited, 500 for any other failure.
    """
    try:
        request = TranslateRequest.model_validate(payload)
    except PydanticValidationError as e:
        return BoundaryResponse(
            400, {"success": False, "error": _describe_payload_error(e)}
        )

    try:
        result = await engine.translate(request.input, request.languages)
    except TranslatorError as e:
        logger.warning("Translation failed: %r", e)
        return error_response(e)
    except Exception as e:
        logger.exception("Unexpected error during translation")
        return error_response(e)

    return success_response(result)
