# SPDX-License-Identifier: Apache-2.0
"""Tests for prompt construction."""

from json_translator.core.prompt import build_prompt, serialize_input


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_deterministic(self) -> None:
        """Identical arguments should produce identical prompts."""
        source = {"nav": {"home": "Home", "settings": "Settings"}}
        assert build_prompt(source, ["fr", "de"]) == build_prompt(source, ["fr", "de"])

    def test_embeds_input_json_with_indentation(self) -> None:
        """Input JSON should be embedded with two-space indentation."""
        source = {"nav": {"home": "Home"}}
        prompt = build_prompt(source, ["fr"])
        assert '{\n  "nav": {\n    "home": "Home"\n  }\n}' in prompt

    def test_lists_languages_in_order(self) -> None:
        """Target languages should appear comma-separated in request order."""
        prompt = build_prompt({"a": "b"}, ["ja", "fr", "de"])
        assert "ja, fr, de" in prompt

    def test_mentions_placeholders(self) -> None:
        """Every placeholder style should be listed verbatim."""
        prompt = build_prompt({"a": "b"}, ["fr"])
        for token in ("X", "{name}", ":count", "%s", "{{variable}}"):
            assert token in prompt

    def test_rules(self) -> None:
        """Prompt should state the key, value and output format rules."""
        prompt = build_prompt({"a": "b"}, ["fr"])
        assert "Keep JSON keys unchanged." in prompt
        assert "Translate only the values." in prompt
        assert "Return ONLY valid JSON" in prompt
        assert "professional, concise SaaS UI tone" in prompt

    def test_braces_in_values_survive(self) -> None:
        """Braces inside input values must not break formatting."""
        prompt = build_prompt({"greeting": "Hello {name}, {{count}} new"}, ["fr"])
        assert '"greeting": "Hello {name}, {{count}} new"' in prompt


class TestSerializeInput:
    """Tests for serialize_input."""

    def test_keeps_non_ascii(self) -> None:
        """Non-ASCII text should not be escaped."""
        assert serialize_input({"k": "Café"}) == '{\n  "k": "Café"\n}'
