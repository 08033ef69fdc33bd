"""Result models for fixture batch operations."""

from __future__ import annotations

from pydantic import Field

from cuelight.core.models import FixtureInstance
from cuelight.core.models.base import CueLightModel


class CreatedFixture(CueLightModel):
    id: str
    name: str
    description: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    mode: str | None = None
    universe: int
    start_channel: int
    channel_count: int
    tags: list[str] = Field(default_factory=list)
    channel_range: str

    @classmethod
    def from_instance(cls, fixture: FixtureInstance) -> CreatedFixture:
        return cls(
            id=fixture.id,
            name=fixture.name,
            description=fixture.description,
            manufacturer=fixture.manufacturer,
            model=fixture.model,
            mode=fixture.mode_name,
            universe=fixture.universe,
            start_channel=fixture.start_channel,
            channel_count=fixture.channel_count,
            tags=fixture.tags,
            channel_range=fixture.channel_range,
        )


class FailedFixtureInput(CueLightModel):
    """Identifying fields of a spec that could not be created."""

    name: str
    manufacturer: str
    model: str
    mode: str | None = None
    universe: int
    start_channel: int | None = None


class FailedFixture(CueLightModel):
    index: int
    fixture: FailedFixtureInput
    error: str


class ChannelSummary(CueLightModel):
    total_channels_used: int
    universes: list[int] = Field(default_factory=list)


class BulkCreateResult(CueLightModel):
    """Per-item outcome of a best-effort bulk create."""

    total_requested: int
    success_count: int
    failure_count: int
    succeeded: list[CreatedFixture] = Field(default_factory=list)
    failed: list[FailedFixture] = Field(default_factory=list)
    message: str
    channel_summary: ChannelSummary | None = None


class BulkFixtureUpdateResult(CueLightModel):
    updated_count: int
    fixtures: list[FixtureInstance] = Field(default_factory=list)
    message: str


class FixtureDeletion(CueLightModel):
    fixture_id: str
    name: str
    universe: int
    start_channel: int
    message: str


class BulkDeleteOutcome(CueLightModel):
    success: bool
    deleted_count: int
    failed_ids: list[str] = Field(default_factory=list)
    message: str
