"""Tests for channel layout inference."""

from __future__ import annotations

import pytest

from cuelight.core.lighting import build_definition, create_intelligent_fixture_channels
from cuelight.core.lighting.channel_heuristics import infer_fixture_type, suggested_channel_count
from cuelight.core.models import ChannelType, FixtureType


def _types(layout) -> list[ChannelType]:
    return [c.type for c in layout.channels]


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("8-channel", 8),
        ("12ch", 12),
        ("Mode 3_CH", 3),
        ("16 channel", None),
        ("RGBW", None),
        (None, None),
    ],
)
def test_suggested_channel_count(mode, expected):
    assert suggested_channel_count(mode) == expected


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        ("SlimPAR 56", FixtureType.LED_PAR),
        ("Intimidator Spot 360", FixtureType.MOVING_HEAD),
        ("Atomic Strobe", FixtureType.STROBE),
        ("DMX Dimmer Pack", FixtureType.DIMMER),
        ("Hazer 2000", FixtureType.OTHER),
    ],
)
def test_infer_fixture_type(model, expected):
    assert infer_fixture_type(model) == expected


def test_single_channel_mode_is_intensity():
    layout = create_intelligent_fixture_channels("1ch", "Dimmer Pack")

    assert _types(layout) == [ChannelType.INTENSITY]
    assert layout.fixture_type == FixtureType.DIMMER


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("RGBAW", ["RED", "GREEN", "BLUE", "AMBER", "WHITE"]),
        ("rgbw", ["RED", "GREEN", "BLUE", "WHITE"]),
        ("RGBA", ["RED", "GREEN", "BLUE", "AMBER"]),
        ("3ch RGB", ["RED", "GREEN", "BLUE"]),
    ],
)
def test_color_mode_layouts(mode, expected):
    layout = create_intelligent_fixture_channels(mode, "Par")

    assert [t.value for t in _types(layout)] == expected


def test_large_mode_gets_intensity_rgb_and_padding():
    layout = create_intelligent_fixture_channels("7ch", "LED Par")

    assert _types(layout)[:4] == [
        ChannelType.INTENSITY,
        ChannelType.RED,
        ChannelType.GREEN,
        ChannelType.BLUE,
    ]
    assert len(layout.channels) == 7
    assert layout.channels[6].name == "Channel 7"
    assert [c.offset for c in layout.channels] == list(range(7))


def test_moving_head_gets_pan_and_tilt():
    layout = create_intelligent_fixture_channels("10-channel", "Moving Head Spot")

    assert _types(layout)[4:6] == [ChannelType.PAN, ChannelType.TILT]
    assert len(layout.channels) == 10


def test_unknown_mode_defaults_to_rgb():
    layout = create_intelligent_fixture_channels(None, "Mystery Box")

    assert _types(layout) == [ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE]
    assert layout.fixture_type == FixtureType.OTHER


def test_build_definition_with_mode():
    definition = build_definition("Chauvet", "SlimPAR 56", "RGBW")

    assert definition.manufacturer == "Chauvet"
    assert definition.type == FixtureType.LED_PAR
    assert len(definition.channels) == 4
    assert [(m.name, m.channel_count) for m in definition.modes] == [("RGBW", 4)]
    assert definition.id is None


def test_build_definition_without_mode_has_no_modes():
    definition = build_definition("Generic", "Wash")

    assert definition.modes == []
    assert len(definition.channels) == 3
