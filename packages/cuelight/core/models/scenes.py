"""Scene models and lighting design requests."""

from __future__ import annotations

from enum import Enum

from pydantic import Field, model_validator

from cuelight.core.models.base import CueLightModel
from cuelight.core.models.fixtures import FixtureInstance, FixtureValue


class SceneType(str, Enum):
    """How a generated scene relates to the rest of the rig."""

    FULL = "full"  # every listed fixture is set
    ADDITIVE = "additive"  # only listed fixtures change, others keep their state


class IntensityPreference(str, Enum):
    SUBTLE = "subtle"
    MODERATE = "moderate"
    DRAMATIC = "dramatic"


class Scene(CueLightModel):
    """A persisted lighting state."""

    id: str
    name: str
    description: str | None = None
    fixture_values: list[FixtureValue] = Field(default_factory=list)


class GeneratedScene(CueLightModel):
    """Transient output of scene generation.

    Fixture ids in ``fixture_values`` are unique.
    """

    name: str
    description: str = ""
    fixture_values: list[FixtureValue] = Field(default_factory=list)
    reasoning: str = ""

    @model_validator(mode="after")
    def _check_unique_fixtures(self) -> GeneratedScene:
        ids = [fv.fixture_id for fv in self.fixture_values]
        if len(ids) != len(set(ids)):
            raise ValueError("GeneratedScene fixture_values must reference each fixture once")
        return self

    @classmethod
    def from_scene(cls, scene: Scene) -> GeneratedScene:
        """Convert a persisted scene for use as synthesis context."""
        return cls(
            name=scene.name,
            description=scene.description or "",
            fixture_values=scene.fixture_values,
            reasoning="Existing scene",
        )


class DesignPreferences(CueLightModel):
    color_palette: list[str] = Field(default_factory=list)
    mood: str | None = None
    intensity: IntensityPreference | None = None
    focus_areas: list[str] = Field(default_factory=list)


class LightingDesignRequest(CueLightModel):
    """Request to generate one scene.

    Args:
        scene_description: What the scene should look like
        script_context: Surrounding script text or production notes
        available_fixtures: Fixtures the generated scene may set
        scene_type: Full rig state or additive change
        all_fixtures: Every fixture in the project (additive context)
        design_preferences: Optional palette, mood and intensity hints
    """

    scene_description: str
    script_context: str = ""
    available_fixtures: list[FixtureInstance] = Field(default_factory=list)
    scene_type: SceneType = SceneType.FULL
    all_fixtures: list[FixtureInstance] | None = None
    design_preferences: DesignPreferences | None = None


class FixtureUsageSuggestion(CueLightModel):
    """Which fixtures best serve a scene."""

    primary_fixtures: list[str] = Field(default_factory=list)
    supporting_fixtures: list[str] = Field(default_factory=list)
    unused_fixtures: list[str] = Field(default_factory=list)
    reasoning: str = ""
