"""Parsing of free-text model output into an Enrichment."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from grugtok.data import (
    FALLBACK_ANSWER,
    FALLBACK_BET,
    FALLBACK_ENRICHMENT,
    FALLBACK_QUESTION,
    FALLBACK_TAG,
    Enrichment,
)

logger = logging.getLogger(__name__)

ANSWER_KEYS = ("answer", "coreIdea", "core_idea")

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    return _FENCE_RE.sub("", text.strip()).strip()


def parse_enrichment(text: str | None) -> Enrichment:
    """Read the four labels out of a model response.

    Returns a fully populated Enrichment. Fields missing from an otherwise
    valid JSON object get their default text; a response that holds no JSON
    object at all yields ``FALLBACK_ENRICHMENT``.
    """
    if not text or not text.strip():
        logger.warning("Empty enrichment response, using defaults")
        return FALLBACK_ENRICHMENT

    cleaned = strip_code_fence(text)
    try:
        parsed: Any = json.loads(cleaned)
    except json.JSONDecodeError:
        parsed = _extract_first_json_object(cleaned)

    if not isinstance(parsed, dict):
        logger.warning("Enrichment response is not a JSON object, using defaults")
        return FALLBACK_ENRICHMENT

    answer: str | None = None
    for key in ANSWER_KEYS:
        answer = _as_text(parsed.get(key))
        if answer:
            break

    return Enrichment(
        tag=_as_text(parsed.get("tag")) or FALLBACK_TAG,
        question=_as_text(parsed.get("question")) or FALLBACK_QUESTION,
        answer=answer or FALLBACK_ANSWER,
        bet=_as_text(parsed.get("bet")) or FALLBACK_BET,
    )


def _extract_first_json_object(content: str) -> dict[str, Any] | None:
    """Find the first decodable JSON object embedded in arbitrary text."""
    decoder = json.JSONDecoder()
    for index, char in enumerate(content):
        if char != "{":
            continue
        try:
            candidate, _ = decoder.raw_decode(content[index:])
        except json.JSONDecodeError:
            continue
        if isinstance(candidate, dict):
            return candidate
    return None


def _as_text(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) and value.strip() else None
