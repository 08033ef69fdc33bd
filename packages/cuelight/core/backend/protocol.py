"""Backend persistence contract consumed by cuelight operations."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import Field

from cuelight.core.models import (
    Cue,
    CueList,
    CueListPlaybackStatus,
    FixtureDefinition,
    FixtureInstance,
    Project,
    Scene,
)
from cuelight.core.models.base import CueLightModel
from cuelight.core.utils.pagination import PaginationInfo


class FixtureInstancePage(CueLightModel):
    fixtures: list[FixtureInstance] = Field(default_factory=list)
    pagination: PaginationInfo


class BulkDeleteResult(CueLightModel):
    deleted_count: int = 0
    deleted_ids: list[str] = Field(default_factory=list)


class BackendClient(Protocol):
    """Async persistence and playback service.

    Lookups return None when the record does not exist. Any failure to reach
    or use the service raises an ``ExternalServiceError`` subclass.

    Field dicts passed to create/update calls use camelCase wire keys.
    """

    # =========================================================================
    # Projects
    # =========================================================================

    async def get_projects(self) -> list[Project]: ...

    async def get_project(self, project_id: str) -> Project | None: ...

    # =========================================================================
    # Cue lists and cues
    # =========================================================================

    async def get_cue_list(self, cue_list_id: str) -> CueList | None: ...

    async def create_cue_list(
        self, name: str, description: str | None, project_id: str
    ) -> CueList: ...

    async def update_cue_list(self, cue_list_id: str, fields: dict[str, Any]) -> CueList: ...

    async def delete_cue_list(self, cue_list_id: str) -> bool: ...

    async def create_cue(self, fields: dict[str, Any]) -> Cue: ...

    async def update_cue(self, cue_id: str, fields: dict[str, Any]) -> Cue: ...

    async def delete_cue(self, cue_id: str) -> bool: ...

    async def bulk_update_cues(self, fields: dict[str, Any]) -> list[Cue]: ...

    # =========================================================================
    # Fixtures
    # =========================================================================

    async def get_fixture_instances(
        self,
        project_id: str,
        filter: dict[str, Any] | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> FixtureInstancePage: ...

    async def get_fixture_instance(self, fixture_id: str) -> FixtureInstance | None: ...

    async def create_fixture_instance(self, fields: dict[str, Any]) -> FixtureInstance: ...

    async def update_fixture_instance(
        self, fixture_id: str, fields: dict[str, Any]
    ) -> FixtureInstance: ...

    async def delete_fixture_instance(self, fixture_id: str) -> bool: ...

    async def bulk_update_fixtures(
        self, updates: list[dict[str, Any]]
    ) -> list[FixtureInstance]: ...

    async def bulk_delete_fixtures(self, fixture_ids: list[str]) -> BulkDeleteResult: ...

    async def get_fixture_definitions(self) -> list[FixtureDefinition]: ...

    async def create_fixture_definition(self, fields: dict[str, Any]) -> FixtureDefinition: ...

    # =========================================================================
    # Playback
    # =========================================================================

    async def start_cue_list(self, cue_list_id: str, start_index: int = 0) -> bool: ...

    async def next_cue(self, cue_list_id: str, fade_in_time: float | None = None) -> bool: ...

    async def previous_cue(
        self, cue_list_id: str, fade_in_time: float | None = None
    ) -> bool: ...

    async def go_to_cue(
        self, cue_list_id: str, cue_index: int, fade_in_time: float | None = None
    ) -> bool: ...

    async def stop_cue_list(self, cue_list_id: str) -> bool: ...

    async def get_cue_list_playback_status(
        self, cue_list_id: str
    ) -> CueListPlaybackStatus | None: ...

    async def get_current_active_scene(self) -> Scene | None: ...
