"""Structured extraction from free-text completions.

Completion text is turned into a JSON object in three stages, first
success wins:

1. the whole text parses as an object (``ParseMode.DIRECT``);
2. the greedy ``{ ... }`` span from the first ``{`` to the last ``}``
   parses as an object (``ParseMode.EXTRACTED``);
3. a copy of the call site's fallback object (``ParseMode.FALLBACK``).

Parsing never raises.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ParseMode(str, Enum):
    """How a usable object was obtained."""

    DIRECT = "direct"
    EXTRACTED = "extracted"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ParseOutcome:
    """Parsed object tagged with the stage that produced it."""

    mode: ParseMode
    data: dict[str, Any]

    @property
    def used_fallback(self) -> bool:
        return self.mode is ParseMode.FALLBACK


# =============================================================================
# Call-site fallbacks
# =============================================================================

SCENE_FALLBACK: dict[str, Any] = {}

CUE_SEQUENCE_FALLBACK: dict[str, Any] = {
    "name": "Generated Cue Sequence",
    "description": "Fallback cue sequence due to parsing error",
    "cues": [],
    "reasoning": "Unable to parse AI response, using fallback structure",
}

FIXTURE_USAGE_FALLBACK: dict[str, Any] = {
    "primaryFixtures": [],
    "supportingFixtures": [],
    "unusedFixtures": [],
    "reasoning": "Unable to parse AI response, using fallback structure",
}

RECOMMENDATIONS_FALLBACK: dict[str, Any] = {
    "colorSuggestions": [],
    "intensityLevels": {"ambient": 50, "key": 75, "fill": 60, "background": 30},
    "focusAreas": [],
    "reasoning": "Unable to parse AI response, using default values",
}

SCRIPT_ANALYSIS_FALLBACK: dict[str, Any] = {
    "scenes": [],
    "characters": [],
    "settings": [],
    "overallMood": "unknown",
    "themes": [],
}


def _load_object(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def text_field(value: Any) -> str | None:
    """Non-empty string from a parsed object field, else None."""
    return value if isinstance(value, str) and value else None


class StructuredResponseParser:
    """Extracts a JSON object from completion text with staged fallback."""

    def parse(self, text: str | None, fallback: dict[str, Any]) -> ParseOutcome:
        """Parse ``text`` into an object.

        Args:
            text: Raw completion text (None is treated as empty)
            fallback: Object returned (deep-copied) when nothing parses

        Returns:
            ParseOutcome tagged with the stage that succeeded
        """
        text = text or ""

        data = _load_object(text.strip())
        if data is not None:
            return ParseOutcome(ParseMode.DIRECT, data)

        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end > start:
            data = _load_object(text[start : end + 1])
            if data is not None:
                logger.debug("Extracted JSON object from surrounding text")
                return ParseOutcome(ParseMode.EXTRACTED, data)

        logger.warning(f"Could not parse completion as JSON ({len(text)} chars), using fallback")
        return ParseOutcome(ParseMode.FALLBACK, copy.deepcopy(fallback))


def parse_response(text: str | None, fallback: dict[str, Any]) -> ParseOutcome:
    """Module-level shortcut for ``StructuredResponseParser().parse``."""
    return StructuredResponseParser().parse(text, fallback)
