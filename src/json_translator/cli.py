# SPDX-License-Identifier: Apache-2.0
"""
JSON Translator - CLI Tool

Translates a JSON file of English UI strings into several languages with
Gemini. Outputs one JSON document keyed by language, or one file per
language.

Usage:
    translate-json <strings.json> -l <lang,lang,...> [options]

Examples:
    translate-json en.json -l fr,de,es                 # Print to stdout
    translate-json en.json -l fr,de -o translations.json
    translate-json en.json -l fr,de,es,it,pt --output-dir ./locales/
    translate-json --check-key                         # Validate API key
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

from dotenv import load_dotenv

from json_translator.core.cache import ResultCache
from json_translator.core.validator import clean_languages
from json_translator.errors import (
    ClassifiedError,
    ConfigurationError,
    ErrorKind,
    TranslatorError,
)
from json_translator.llm.client import GeminiClient, GeminiConfig
from json_translator.pipeline.engine import TranslationEngine

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="translate-json",
        description="JSON UI string translator - Translates JSON values into multiple languages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s en.json -l fr,de,es                    # Print result to stdout
  %(prog)s en.json -l fr,de -o out.json           # Write one JSON document
  %(prog)s en.json -l fr,de --output-dir locales  # Write locales/<lang>.json
  %(prog)s en.json -l fr,de --batch-size 2        # Smaller chunks on truncation
  %(prog)s --check-key                            # Validate the API key only

Environment Variables:
  GEMINI_API_KEY      Gemini API key (required)
  GEMINI_MODEL        Model name (default: gemini-2.5-flash)
  GEMINI_API_VERSION  API version (default: v1beta)
  GEMINI_BATCH_SIZE   Languages per request after truncation (default: 4)
""",
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Path to JSON file of English UI strings",
    )
    parser.add_argument(
        "-l",
        "--languages",
        help="Comma-separated target language codes (e.g. fr,de,es)",
    )

    # Output options
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file for the combined result (default: stdout)",
    )
    output_group.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to write one <lang>.json file per language",
    )

    # Gemini options
    gemini_group = parser.add_argument_group("Gemini options")
    gemini_group.add_argument(
        "--api-key",
        help="Gemini API key (or set GEMINI_API_KEY)",
    )
    gemini_group.add_argument(
        "--model",
        help=f"Gemini model (default: GEMINI_MODEL or {GeminiConfig.DEFAULT_MODEL})",
    )
    gemini_group.add_argument(
        "--batch-size",
        type=int,
        help="Languages per request when output is truncated (default: 4)",
    )
    gemini_group.add_argument(
        "--check-key",
        action="store_true",
        help="Only check that the API key is accepted",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def load_input(path: Path) -> Any:
    """Read and decode the input JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def check_language_filenames(languages: list[str]) -> None:
    """Ensure each language can be used as a file name inside the output dir.

    Raises:
        ValueError: If a language is empty, a relative path component or
            contains a path separator.
    """
    for lang in languages:
        if lang in ("", ".", "..") or "/" in lang or "\\" in lang:
            raise ValueError(f"Language cannot be used as a file name: {lang!r}")


def write_output(result: dict[str, Any], args: argparse.Namespace) -> list[Path]:
    """Write the translation result according to the output options.

    Returns:
        Paths written (empty when printing to stdout).

    Raises:
        ValueError: If a language key is not a safe file name.
    """
    if args.output_dir:
        check_language_filenames(list(result))
        args.output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for lang, translated in result.items():
            path = args.output_dir / f"{lang}.json"
            path.write_text(dump_json(translated), encoding="utf-8")
            written.append(path)
        return written

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(dump_json(result), encoding="utf-8")
        return [args.output]

    sys.stdout.write(dump_json(result))
    return []


def print_progress(current: int, total: int, languages: list[str]) -> None:
    print(f"  chunk {current}/{total}: {', '.join(languages)}", file=sys.stderr)


def report_error(error: TranslatorError) -> None:
    if isinstance(error, ClassifiedError) and error.kind is ErrorKind.LIMIT_REACHED:
        print(
            f"Error: Limit reached. Try again in {error.retry_after_seconds} seconds.",
            file=sys.stderr,
        )
        return
    print(f"Error: Translation failed: {error}", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    """Execute translation.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    config = GeminiConfig(api_key=args.api_key, model=args.model)
    try:
        client = GeminiClient(config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.check_key:
        try:
            async with client:
                await client.validate_api_key()
        except TranslatorError as e:
            report_error(e)
            return 1
        print("API key OK")
        return 0

    input_path: Path | None = args.input
    if input_path is None:
        print("Error: Input file is required", file=sys.stderr)
        return 1
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        source = load_input(input_path)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {input_path}: {e}", file=sys.stderr)
        return 1

    languages = clean_languages((args.languages or "").split(","))
    if not languages:
        print("Error: At least one target language is required (-l)", file=sys.stderr)
        return 1
    if args.output_dir:
        try:
            check_language_filenames(languages)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print(f"Input: {input_path}", file=sys.stderr)
    print(f"Model: {config.effective_model}", file=sys.stderr)
    print(f"Languages: {', '.join(languages)}", file=sys.stderr)

    engine = TranslationEngine(
        client,
        cache=ResultCache(),
        batch_size=args.batch_size,
        progress_callback=print_progress if args.verbose else None,
    )

    try:
        async with engine:
            result = await engine.translate(source, languages)
    except TranslatorError as e:
        report_error(e)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    try:
        written = write_output(result, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in written:
        print(f"  Wrote: {path}", file=sys.stderr)
    return 0


def main() -> NoReturn:
    """Main entry point."""
    # API keys and model settings may live in a .env file
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
