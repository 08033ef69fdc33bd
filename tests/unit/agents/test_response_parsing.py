"""Tests for staged structured-response parsing."""

from __future__ import annotations

import json

from cuelight.core.agents.parsing import (
    CUE_SEQUENCE_FALLBACK,
    ParseMode,
    StructuredResponseParser,
    parse_response,
    text_field,
)


def test_direct_object_round_trips():
    """Test that a bare JSON object parses unchanged."""
    payload = {"name": "Sunrise", "fixtureValues": [{"fixtureId": "a", "channelValues": [1]}]}

    outcome = StructuredResponseParser().parse(json.dumps(payload), {})

    assert outcome.mode == ParseMode.DIRECT
    assert outcome.data == payload
    assert not outcome.used_fallback


def test_object_inside_prose_is_extracted():
    """Test that surrounding prose does not change the parsed object."""
    payload = {"name": "Storm", "reasoning": "High contrast"}
    text = f"Here is the scene you asked for:\n{json.dumps(payload)}\nLet me know!"

    outcome = parse_response(text, {})

    assert outcome.mode == ParseMode.EXTRACTED
    assert outcome.data == payload


def test_whitespace_around_object_is_direct():
    outcome = parse_response('  \n{"a": 1}\n  ', {})

    assert outcome.mode == ParseMode.DIRECT
    assert outcome.data == {"a": 1}


def test_no_object_returns_fallback_copy():
    """Test that unparseable text yields a copy of the fallback."""
    outcome = parse_response("I cannot help with that.", CUE_SEQUENCE_FALLBACK)

    assert outcome.mode == ParseMode.FALLBACK
    assert outcome.used_fallback
    assert outcome.data == CUE_SEQUENCE_FALLBACK

    outcome.data["cues"].append({"name": "mutated"})
    assert CUE_SEQUENCE_FALLBACK["cues"] == []


def test_none_and_empty_text_use_fallback():
    assert parse_response(None, {"x": 1}).data == {"x": 1}
    assert parse_response("", {"x": 1}).mode == ParseMode.FALLBACK


def test_top_level_array_is_not_an_object():
    """Test that a JSON array is not accepted as the result object."""
    outcome = parse_response("[1, 2, 3]", {"fallback": True})

    assert outcome.mode == ParseMode.FALLBACK
    assert outcome.data == {"fallback": True}


def test_greedy_span_that_does_not_parse_falls_back():
    """Test that two separate objects in prose do not parse as one span."""
    text = 'first {"a": 1} and then {"b": 2}'

    outcome = parse_response(text, {})

    assert outcome.mode == ParseMode.FALLBACK


def test_text_field():
    assert text_field("Scene") == "Scene"
    assert text_field("") is None
    assert text_field(None) is None
    assert text_field(42) is None
