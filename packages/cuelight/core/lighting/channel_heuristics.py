"""Channel layout inference for fixtures with no known definition.

When a bulk create names a manufacturer/model the backend has never seen, a
definition is synthesized from the model name (fixture type) and the mode
text (channel count and color mixing).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from cuelight.core.models import Channel, ChannelType, FixtureDefinition, FixtureMode, FixtureType

logger = logging.getLogger(__name__)

_CHANNEL_COUNT_RE = re.compile(r"(\d+)[-_]?ch|(\d+)[-_]?channel")

# Most specific first; the first match wins.
_COLOR_LAYOUTS: tuple[tuple[re.Pattern[str], tuple[ChannelType, ...]], ...] = (
    (
        re.compile(r"\brgbaw\b"),
        (ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE, ChannelType.AMBER, ChannelType.WHITE),
    ),
    (
        re.compile(r"\brgbw\b"),
        (ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE, ChannelType.WHITE),
    ),
    (
        re.compile(r"\brgba\b"),
        (ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE, ChannelType.AMBER),
    ),
    (re.compile(r"\brgb\b"), (ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE)),
)

_RGB = (ChannelType.RED, ChannelType.GREEN, ChannelType.BLUE)

_TYPE_KEYWORDS: tuple[tuple[tuple[str, ...], FixtureType], ...] = (
    (("par", "wash"), FixtureType.LED_PAR),
    (("moving", "head", "spot"), FixtureType.MOVING_HEAD),
    (("strobe", "flash"), FixtureType.STROBE),
    (("dimmer",), FixtureType.DIMMER),
)


@dataclass(frozen=True)
class InferredLayout:
    """Fixture type and channels guessed from model and mode text."""

    fixture_type: FixtureType
    channels: list[Channel]


def suggested_channel_count(mode: str | None) -> int | None:
    """Channel count written into the mode text, e.g. ``"8-channel"`` -> 8."""
    match = _CHANNEL_COUNT_RE.search((mode or "").lower())
    if match is None:
        return None
    return int(match.group(1) or match.group(2))


def infer_fixture_type(model: str | None) -> FixtureType:
    model_text = (model or "").lower()
    for keywords, fixture_type in _TYPE_KEYWORDS:
        if any(k in model_text for k in keywords):
            return fixture_type
    return FixtureType.OTHER


def _channel(offset: int, channel_type: ChannelType, name: str | None = None) -> Channel:
    return Channel(
        offset=offset,
        name=name or channel_type.value.title(),
        type=channel_type,
        min_value=0,
        max_value=255,
        default_value=0,
    )


def create_intelligent_fixture_channels(
    mode: str | None = None, model: str | None = None, manufacturer: str | None = None
) -> InferredLayout:
    """Guess a channel layout from mode and model text.

    Rules, in order:
    - a 1-channel intensity/dimmer mode gets a single Intensity channel;
    - an explicit color mode (RGBAW, RGBW, RGBA, RGB) gets those channels;
    - a mode with more than 4 channels gets Intensity + RGB (+ Pan/Tilt for
      moving heads), padded with generic channels up to the count;
    - anything else is assumed to be plain RGB.

    Args:
        mode: Mode name, e.g. ``"8-channel"`` or ``"RGBW"``
        model: Model name, used for the fixture type
        manufacturer: Manufacturer name (logged only)

    Returns:
        InferredLayout with channels at offsets 0..n-1
    """
    mode_text = (mode or "").lower()
    count = suggested_channel_count(mode)
    fixture_type = infer_fixture_type(model)

    intensity_mode = (
        "intensity" in mode_text
        or "dimmer" in mode_text
        or count == 1
        or fixture_type == FixtureType.DIMMER
    )

    color_layout = next(
        (layout for pattern, layout in _COLOR_LAYOUTS if pattern.search(mode_text)), None
    )

    if intensity_mode and count == 1:
        types: tuple[ChannelType, ...] = (ChannelType.INTENSITY,)
    elif color_layout is not None:
        types = color_layout
    elif count is not None and count > 4:
        types = (ChannelType.INTENSITY, *_RGB)
        if fixture_type == FixtureType.MOVING_HEAD:
            types = (*types, ChannelType.PAN, ChannelType.TILT)
    else:
        types = _RGB

    channels = [_channel(offset, t) for offset, t in enumerate(types)]
    if count is not None and color_layout is None and count > 4:
        channels.extend(
            _channel(offset, ChannelType.OTHER, f"Channel {offset + 1}")
            for offset in range(len(channels), count)
        )

    logger.debug(
        f"Inferred {fixture_type.value} layout with {len(channels)} channels for "
        f"{manufacturer or '?'} {model or '?'} (mode={mode!r})"
    )
    return InferredLayout(fixture_type=fixture_type, channels=channels)


def build_definition(
    manufacturer: str, model: str, mode: str | None = None
) -> FixtureDefinition:
    """Definition payload for an unknown fixture, with one mode when given."""
    layout = create_intelligent_fixture_channels(mode, model, manufacturer)
    modes = [FixtureMode(name=mode, channel_count=len(layout.channels))] if mode else []
    return FixtureDefinition(
        manufacturer=manufacturer,
        model=model,
        type=layout.fixture_type,
        channels=layout.channels,
        modes=modes,
    )
