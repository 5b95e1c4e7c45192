# SPDX-License-Identifier: Apache-2.0
"""Prompt construction for JSON UI string translation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

# Placeholder tokens the model must copy verbatim
PLACEHOLDER_EXAMPLES = ("X", "{name}", ":count", "%s", "{{variable}}")

PROMPT_TEMPLATE = """You are a professional SaaS UI translator.

Translate the JSON values from English into ALL of the target languages listed below.

Rules:
- Keep JSON keys unchanged.
- Translate only the values.
- Preserve placeholders exactly as-is: {placeholders}.
- Use a professional, concise SaaS UI tone.
- You MUST include every single target language as provided.
- Return ONLY valid JSON. No prose, no markdown, no code fences, no extra text.

Input JSON:
{input_json}

Target languages (include ALL of these exactly as written):
{languages}

Output format (strict JSON, one object per target language, same keys as the input):
{{
  "fr": {{ "key": "..." }},
  "de": {{ "key": "..." }}
}}
"""


def serialize_input(value: Any) -> str:
    """Serialize input JSON with stable, human-readable indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def build_prompt(input: dict[str, Any], languages: Sequence[str]) -> str:
    """Build the translation instruction sent to the model.

    The result depends only on the arguments, so identical requests
    always produce identical prompts.

    Args:
        input: Nested JSON object of English UI strings.
        languages: Target language identifiers, in request order.

    Returns:
        Prompt text.
    """
    return PROMPT_TEMPLATE.format(
        placeholders=", ".join(PLACEHOLDER_EXAMPLES),
        input_json=serialize_input(input),
        languages=", ".join(languages),
    )
