"""Fixture and channel models.

A fixture instance is a physical unit patched into a project. Its channels
are addressed by ``offset`` (position in the fixture's value array), not by
wire address. ``universe`` and ``start_channel`` describe where the block
sits in the lighting network.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, model_validator

from cuelight.core.models.base import CueLightModel

DMX_MIN = 0
DMX_MAX = 255
UNIVERSE_SIZE = 512


class ChannelType(str, Enum):
    """Role of a single control channel."""

    INTENSITY = "INTENSITY"
    RED = "RED"
    GREEN = "GREEN"
    BLUE = "BLUE"
    WHITE = "WHITE"
    AMBER = "AMBER"
    UV = "UV"
    PAN = "PAN"
    TILT = "TILT"
    ZOOM = "ZOOM"
    FOCUS = "FOCUS"
    IRIS = "IRIS"
    GOBO = "GOBO"
    COLOR_WHEEL = "COLOR_WHEEL"
    EFFECT = "EFFECT"
    STROBE = "STROBE"
    MACRO = "MACRO"
    OTHER = "OTHER"


class FixtureType(str, Enum):
    """Broad fixture category."""

    LED_PAR = "LED_PAR"
    MOVING_HEAD = "MOVING_HEAD"
    STROBE = "STROBE"
    DIMMER = "DIMMER"
    OTHER = "OTHER"


class Channel(CueLightModel):
    """A controllable channel on a fixture instance or definition.

    Invariant: ``min_value <= default_value <= max_value``.
    """

    id: str | None = None
    offset: int = Field(ge=0, description="0-based position in the value array")
    name: str = ""
    type: ChannelType = ChannelType.OTHER
    min_value: int = Field(default=DMX_MIN, ge=DMX_MIN, le=DMX_MAX)
    max_value: int = Field(default=DMX_MAX, ge=DMX_MIN, le=DMX_MAX)
    default_value: int = Field(default=DMX_MIN, ge=DMX_MIN, le=DMX_MAX)

    @model_validator(mode="after")
    def _check_range(self) -> Channel:
        if not (self.min_value <= self.default_value <= self.max_value):
            raise ValueError(
                f"Channel '{self.name or self.offset}' requires min <= default <= max, "
                f"got {self.min_value}/{self.default_value}/{self.max_value}"
            )
        return self


class FixtureMode(CueLightModel):
    """A named channel layout offered by a fixture definition."""

    id: str | None = None
    name: str
    short_name: str | None = None
    channel_count: int = Field(default=0, ge=0)


class FixtureDefinition(CueLightModel):
    """Manufacturer/model template from which instances are created."""

    id: str | None = None
    manufacturer: str
    model: str
    type: FixtureType = FixtureType.OTHER
    channels: list[Channel] = Field(default_factory=list)
    modes: list[FixtureMode] = Field(default_factory=list)
    is_built_in: bool = False

    def matches(self, manufacturer: str, model: str) -> bool:
        """Case-insensitive manufacturer + model comparison."""
        return (
            self.manufacturer.lower() == manufacturer.lower()
            and self.model.lower() == model.lower()
        )


class FixtureInstance(CueLightModel):
    """A fixture placed in a project.

    Channels are kept sorted by offset and offsets are unique. When the
    backend omits ``channelCount`` it is derived from the channel list.
    """

    id: str
    name: str
    description: str | None = None
    definition_id: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    type: FixtureType = FixtureType.OTHER
    mode_name: str | None = None
    channel_count: int = Field(default=0, ge=0)
    channels: list[Channel] = Field(default_factory=list)
    universe: int = Field(default=1, ge=1)
    start_channel: int = Field(default=1, ge=1)
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _normalize_channels(self) -> FixtureInstance:
        offsets = [c.offset for c in self.channels]
        if len(offsets) != len(set(offsets)):
            raise ValueError(f"Fixture '{self.name}' has duplicate channel offsets")
        self.channels = sorted(self.channels, key=lambda c: c.offset)
        if self.channel_count == 0 and self.channels:
            self.channel_count = len(self.channels)
        return self

    @property
    def end_channel(self) -> int:
        """Last wire address occupied by this fixture (inclusive)."""
        return self.start_channel + self.channel_count - 1

    @property
    def channel_range(self) -> str:
        """Human-readable address block, e.g. ``"1-8"``."""
        return f"{self.start_channel}-{self.end_channel}"

    def channel_at(self, offset: int) -> Channel | None:
        """Return the channel at ``offset`` if one is defined."""
        for channel in self.channels:
            if channel.offset == offset:
                return channel
        return None

    def channel_by_id(self, channel_id: str) -> Channel | None:
        """Return the channel with ``channel_id`` if one is defined."""
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def value_range(self, offset: int) -> tuple[int, int]:
        """Allowed ``(min, max)`` at ``offset``; full DMX range when undefined."""
        channel = self.channel_at(offset)
        if channel is None:
            return (DMX_MIN, DMX_MAX)
        return (channel.min_value, channel.max_value)


class FixtureValue(CueLightModel):
    """Channel values for one fixture within a scene.

    ``channel_values`` is indexed by channel offset.
    """

    fixture_id: str
    channel_values: list[int] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten_fixture_ref(cls, data: object) -> object:
        # Backend scenes nest the reference as {"fixture": {"id": ...}}
        if isinstance(data, dict) and "fixtureId" not in data and "fixture_id" not in data:
            fixture = data.get("fixture")
            if isinstance(fixture, dict) and "id" in fixture:
                return {**data, "fixtureId": fixture["id"]}
        return data


class FixtureSpec(CueLightModel):
    """Caller request to create one fixture instance in a bulk batch."""

    project_id: str
    name: str
    description: str | None = None
    manufacturer: str
    model: str
    mode: str | None = None
    universe: int = Field(default=1, ge=1)
    start_channel: int | None = Field(default=None, ge=1, le=UNIVERSE_SIZE)
    tags: list[str] = Field(default_factory=list)


class FixtureUpdate(CueLightModel):
    """Partial update for one fixture instance in a bulk update."""

    fixture_id: str
    name: str | None = None
    description: str | None = None
    universe: int | None = Field(default=None, ge=1)
    start_channel: int | None = Field(default=None, ge=1, le=UNIVERSE_SIZE)
    tags: list[str] | None = None

    def changed_fields(self) -> dict[str, object]:
        """Wire payload containing only the fields that were supplied."""
        return self.to_wire(exclude_none=True)
