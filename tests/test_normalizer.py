"""
Tests for the response normalizer.

These tests verify:
- Code fence stripping (with and without a language tag)
- JSON parsing and NormalizationError
- Canonical fallbacks are copied, never shared
"""

import pytest

from milo.ai.schemas.normalizer import (
    FALLBACK_ACTION,
    FALLBACK_INTENT,
    NormalizationError,
    fallback_copy,
    normalize,
    normalize_or_fallback,
    strip_code_fences,
)


class TestStripCodeFences:
    """Tests for markdown fence removal."""

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_is_trimmed(self):
        assert strip_code_fences('  {"a": 1}\n') == '{"a": 1}'

    def test_tag_without_newline(self):
        assert strip_code_fences('```json{"intent":"command"}```') == '{"intent":"command"}'

    def test_backticks_inside_payload_are_kept(self):
        text = '```json\n{"reply": "type ```help``` to begin"}\n```'

        assert strip_code_fences(text) == '{"reply": "type ```help``` to begin"}'


class TestNormalize:
    """Tests for normalize()."""

    def test_fenced_json(self):
        assert normalize('```json\n{"a":1}\n```') == {"a": 1}

    def test_fenced_json_without_newline(self):
        assert normalize('```json{"intent":"command"}```') == {"intent": "command"}

    def test_fenced_array(self):
        assert normalize("```json[1, 2]```") == [1, 2]

    def test_raw_json(self):
        assert normalize('{"intent": "greeting"}') == {"intent": "greeting"}

    def test_invalid_json_raises(self):
        with pytest.raises(NormalizationError) as exc_info:
            normalize("not json")

        assert exc_info.value.raw_text == "not json"

    def test_empty_raises(self):
        with pytest.raises(NormalizationError):
            normalize("```json\n```")

    def test_none_raises(self):
        with pytest.raises(NormalizationError):
            normalize(None)


class TestNormalizeOrFallback:
    """Tests for the degrading variant."""

    def test_valid_json_is_returned(self):
        assert normalize_or_fallback('{"a": 1}', FALLBACK_ACTION) == {"a": 1}

    def test_invalid_json_returns_fallback(self):
        result = normalize_or_fallback("not json", FALLBACK_ACTION)

        assert result == {
            "action": "error",
            "message": "Sorry, I encountered an error processing your request.",
        }

    def test_fallback_is_a_copy(self):
        result = normalize_or_fallback("not json", FALLBACK_ACTION)
        result["message"] = "changed"

        assert FALLBACK_ACTION["message"] != "changed"

    def test_fallback_copy_of_intent(self):
        copy = fallback_copy(FALLBACK_INTENT)

        assert copy == {"intent": "error"}
        assert copy is not FALLBACK_INTENT
