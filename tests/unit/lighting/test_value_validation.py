"""Tests for FixtureValueValidator."""

from __future__ import annotations

import math

import pytest

from cuelight.core.lighting import FixtureValueValidator, clamp_value
from cuelight.core.lighting.validation import coerce_number
from cuelight.core.models import FixtureInstance, FixtureValue


@pytest.fixture
def validator() -> FixtureValueValidator:
    return FixtureValueValidator()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12, 12.0),
        (3.5, 3.5),
        (" 128 ", 128.0),
        ("bright", 0.0),
        (None, 0.0),
        (True, 1.0),
        (math.nan, 0.0),
        ([1], 0.0),
    ],
)
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


def test_clamp_value_rounds_and_bounds():
    assert clamp_value(300, 0, 255) == 255
    assert clamp_value(-20, 0, 255) == 0
    assert clamp_value(127.6, 0, 255) == 128
    assert clamp_value("50", 10, 200) == 50
    assert clamp_value(0, 10, 200) == 10


def test_positional_values_are_fitted_to_channel_count(validator, rgb_par):
    """Test that values are truncated to the fixture's channel count."""
    raw = [{"fixtureId": "par-1", "channelValues": [255, 128, 64, 99, 12]}]

    result = validator.validate(raw, [rgb_par])

    assert result == [FixtureValue(fixture_id="par-1", channel_values=[255, 128, 64])]


def test_short_values_are_padded(validator, rgb_par, limited_dimmer):
    """Test that missing channels are padded with 0 clamped into range."""
    raw = [
        {"fixtureId": "par-1", "channelValues": [200]},
        {"fixtureId": "dim-1", "channelValues": []},
    ]

    result = validator.validate(raw, [rgb_par, limited_dimmer])

    assert result[0].channel_values == [200, 0, 0]
    assert result[1].channel_values == [10]


def test_values_are_clamped_to_channel_range(validator, limited_dimmer):
    raw = [{"fixtureId": "dim-1", "channelValues": [255]}]

    result = validator.validate(raw, [limited_dimmer])

    assert result[0].channel_values == [200]


def test_every_result_matches_length_and_range(validator, sample_fixtures):
    """Test that every output value list has the right length and bounds."""
    raw = [
        {"fixtureId": "par-1", "channelValues": ["x", -5, 999, 1, 2, 3]},
        {"fixtureId": "dim-1", "channelValues": [0, 0, 0]},
    ]

    result = validator.validate(raw, sample_fixtures)
    by_id = {f.id: f for f in sample_fixtures}

    for fv in result:
        fixture = by_id[fv.fixture_id]
        assert len(fv.channel_values) == fixture.channel_count
        for offset, value in enumerate(fv.channel_values):
            low, high = fixture.value_range(offset)
            assert low <= value <= high


def test_unknown_and_malformed_entries_are_dropped(validator, rgb_par):
    raw = [
        {"fixtureId": "ghost", "channelValues": [1, 2, 3]},
        {"channelValues": [1, 2, 3]},
        {"fixtureId": 7, "channelValues": [1]},
        "not an object",
        {"fixtureId": "par-1", "channelValues": [1, 2, 3]},
    ]

    result = validator.validate(raw, [rgb_par])

    assert [fv.fixture_id for fv in result] == ["par-1"]


def test_duplicate_fixture_keeps_first_entry(validator, rgb_par):
    raw = [
        {"fixtureId": "par-1", "channelValues": [1, 1, 1]},
        {"fixtureId": "par-1", "channelValues": [2, 2, 2]},
    ]

    result = validator.validate(raw, [rgb_par])

    assert result == [FixtureValue(fixture_id="par-1", channel_values=[1, 1, 1])]


@pytest.mark.parametrize("raw", [None, {}, "fixtureValues", 42])
def test_non_list_input_yields_nothing(validator, rgb_par, raw):
    assert validator.validate(raw, [rgb_par]) == []


def test_channel_id_pairs_are_placed_by_offset(validator, rgb_par):
    raw = [
        {
            "fixtureId": "par-1",
            "channelValues": [
                {"channelId": "par-1-b", "value": 77},
                {"channelId": "unknown", "value": 5},
                {"channelId": "par-1-r", "value": 300},
            ],
        }
    ]

    result = validator.validate(raw, [rgb_par])

    assert result[0].channel_values == [255, 0, 77]


def test_channel_id_mapping_is_accepted(validator, rgb_par):
    raw = [{"fixture_id": "par-1", "channel_values": {"par-1-g": "40"}}]

    result = validator.validate(raw, [rgb_par])

    assert result[0].channel_values == [0, 40, 0]


def test_missing_channel_values_yield_padding(validator, limited_dimmer):
    result = validator.validate([{"fixtureId": "dim-1"}], [limited_dimmer])

    assert result[0].channel_values == [10]


def test_optimize_refits_known_fixtures_and_passes_others(validator, rgb_par):
    values = [
        FixtureValue(fixture_id="par-1", channel_values=[10, 20, 30, 40]),
        FixtureValue(fixture_id="gone", channel_values=[1, 2]),
    ]

    result = validator.optimize(values, [rgb_par])

    assert result[0].channel_values == [10, 20, 30]
    assert result[1] == values[1]


def test_fixture_without_channel_records_is_sized_to_channel_count(validator):
    unpatched = FixtureInstance(id="wash-1", name="Wash", channel_count=3)

    result = validator.validate(
        [{"fixtureId": "wash-1", "channelValues": [300, 1]}], [unpatched]
    )
    optimized = validator.optimize(
        [FixtureValue(fixture_id="wash-1", channel_values=[9])], [unpatched]
    )

    assert result == [FixtureValue(fixture_id="wash-1", channel_values=[255, 1, 0])]
    assert optimized[0].channel_values == [9, 0, 0]
