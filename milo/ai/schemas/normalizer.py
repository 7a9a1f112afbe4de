"""
Response Normalizer - Turns free-text model replies into JSON values.

Models are told to answer with raw JSON, but they frequently wrap it in
markdown fences (```json ... ```) or pad it with whitespace. This module
strips that markup and parses what is left.

Parse failures raise NormalizationError. Call sites that must never fail
on a malformed reply use `normalize_or_fallback()` with one of the
canonical fallback payloads defined here, so the degraded response is
the same everywhere.
"""

import copy
import json
import logging
import re
from typing import Any, Dict

from milo.ai.monitoring.logger import prompt_fingerprint

logger = logging.getLogger("milo.ai.normalizer")

# Leading fence with optional language tag; trailing fence. Backticks inside
# the payload are left alone.
_OPENING_FENCE_RE = re.compile(r"\A\s*```(?:[A-Za-z][\w+-]*)?")
_CLOSING_FENCE_RE = re.compile(r"```\s*\Z")

# ---------------------------------------------------------------------------
# CANONICAL FALLBACKS
# ---------------------------------------------------------------------------
FALLBACK_ACTION: Dict[str, Any] = {
    "action": "error",
    "message": "Sorry, I encountered an error processing your request.",
}

FALLBACK_INTENT: Dict[str, Any] = {"intent": "error"}


class NormalizationError(ValueError):
    """The model's reply was not valid JSON where JSON was expected."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


def strip_code_fences(text: str) -> str:
    """Remove a leading and a trailing markdown code fence, and surrounding whitespace."""
    text = _OPENING_FENCE_RE.sub("", text, count=1)
    return _CLOSING_FENCE_RE.sub("", text, count=1).strip()


def normalize(raw_text: str) -> Any:
    """
    Parse a model reply as JSON.

    Args:
        raw_text: The provider's text output

    Returns:
        The parsed JSON value

    Raises:
        NormalizationError: If the text is empty or not valid JSON

    Example:
        >>> normalize('```json\\n{"a": 1}\\n```')
        {'a': 1}
    """
    if raw_text is None:
        raise NormalizationError("AI returned no content.")

    cleaned = strip_code_fences(raw_text)
    if not cleaned:
        raise NormalizationError("AI returned an empty response.", raw_text)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise NormalizationError(f"AI generated an invalid response: {e}", raw_text) from e


def normalize_or_fallback(raw_text: str, fallback: Dict[str, Any]) -> Any:
    """
    Parse a model reply, substituting `fallback` when it is not valid JSON.

    The fallback is deep-copied so callers can mutate the result freely.
    """
    try:
        return normalize(raw_text)
    except NormalizationError as e:
        logger.error(
            f"Failed to parse AI response as JSON ({e}); "
            f"length={len(raw_text or '')} fingerprint={prompt_fingerprint(raw_text or '')}"
        )
        return fallback_copy(fallback)


def fallback_copy(fallback: Dict[str, Any]) -> Dict[str, Any]:
    """Return an independent copy of a canonical fallback payload."""
    return copy.deepcopy(fallback)
