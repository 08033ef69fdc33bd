"""Completion providers, prompt construction and response parsing."""

from cuelight.core.agents.parsing import (
    ParseMode,
    ParseOutcome,
    StructuredResponseParser,
    parse_response,
    text_field,
)

__all__ = [
    "ParseMode",
    "ParseOutcome",
    "StructuredResponseParser",
    "parse_response",
    "text_field",
]
