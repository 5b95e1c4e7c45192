#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""JSON translation sample script

Shows basic use of json-ui-translator. Change the settings below to try
different options.

Usage:
    cd examples
    python translate_json.py

Environment variables (loaded automatically from .env):
    GEMINI_API_KEY: Required
    GEMINI_MODEL: Model name (default: gemini-2.5-flash)
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project src to path (development use)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

# Load .env file from project root (GEMINI_API_KEY, etc.)
load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings
# =============================================================================

# Target languages, in output order
LANGUAGES = ["fr", "de", "es", "ja", "pt-BR"]

# Languages per request when output is truncated
BATCH_SIZE = 2

# UI strings to translate
INPUT = {
    "nav": {"home": "Home", "settings": "Settings", "logout": "Log out"},
    "greeting": "Hello {name}",
    "inbox": "You have :count new messages",
    "trial": "Your trial ends in X days",
    "footer": "Made with %s by {{company}}",
}

OUTPUT_DIR = Path(__file__).parent / "output"


def on_progress(current: int, total: int, languages: list[str]) -> None:
    print(f"  [chunk] {current}/{total} {', '.join(languages)}")


async def main() -> int:
    from json_translator import (
        ClassifiedError,
        ErrorKind,
        GeminiClient,
        ResultCache,
        TranslationEngine,
        TranslatorError,
    )

    cache = ResultCache()
    engine = TranslationEngine(
        GeminiClient(),
        cache=cache,
        batch_size=BATCH_SIZE,
        progress_callback=on_progress,
    )

    print(f"Translating into: {', '.join(LANGUAGES)}")
    try:
        async with engine:
            result = await engine.translate(INPUT, LANGUAGES)
            # Second call is served from the cache
            await engine.translate(INPUT, LANGUAGES)
    except ClassifiedError as e:
        if e.kind is ErrorKind.LIMIT_REACHED:
            print(f"Limit reached, retry in {e.retry_after_seconds}s")
            return 1
        print(f"Request failed: {e}")
        return 1
    except TranslatorError as e:
        print(f"Translation failed: {e}")
        return 1

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for lang, strings in result.items():
        path = OUTPUT_DIR / f"{lang}.json"
        path.write_text(json.dumps(strings, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"  Wrote {path}")
    print(f"Cached entries: {len(cache)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
