"""Project aggregate."""

from __future__ import annotations

from pydantic import Field

from cuelight.core.models.base import CueLightModel
from cuelight.core.models.cues import CueList
from cuelight.core.models.fixtures import FixtureInstance
from cuelight.core.models.scenes import Scene


class Project(CueLightModel):
    """A production: its patched fixtures, scenes and cue lists."""

    id: str
    name: str
    description: str | None = None
    fixtures: list[FixtureInstance] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)
    cue_lists: list[CueList] = Field(default_factory=list)

    def scene_by_id(self, scene_id: str) -> Scene | None:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        return None

    def fixtures_in_universe(self, universe: int) -> list[FixtureInstance]:
        return [f for f in self.fixtures if f.universe == universe]
