"""Script analysis and lighting recommendation models."""

from __future__ import annotations

import math

from pydantic import Field, field_validator

from cuelight.core.models.base import CueLightModel


class ScriptScene(CueLightModel):
    """One scene extracted from a script."""

    scene_number: str
    title: str | None = None
    content: str = ""
    mood: str = ""
    characters: list[str] = Field(default_factory=list)
    stage_directions: list[str] = Field(default_factory=list)
    lighting_cues: list[str] = Field(default_factory=list)
    time_of_day: str | None = None
    location: str | None = None

    @field_validator("scene_number", mode="before")
    @classmethod
    def _stringify_number(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    def act_number(self) -> int | None:
        """Act the scene belongs to: ``floor(float(scene_number))``.

        Returns:
            Act number, or None when the scene number is not numeric
        """
        try:
            value = float(self.scene_number)
        except ValueError:
            return None
        if math.isnan(value) or math.isinf(value):
            return None
        return math.floor(value)


class ScriptAnalysis(CueLightModel):
    scenes: list[ScriptScene] = Field(default_factory=list)
    characters: list[str] = Field(default_factory=list)
    settings: list[str] = Field(default_factory=list)
    overall_mood: str = "unknown"
    themes: list[str] = Field(default_factory=list)


class IntensityLevels(CueLightModel):
    """Suggested intensity percentages by lighting role."""

    ambient: float = 50
    key: float = 75
    fill: float = 60
    background: float = 30


class LightingRecommendations(CueLightModel):
    """Mood-to-color/intensity guidance for a scene."""

    color_suggestions: list[str] = Field(default_factory=list)
    intensity_levels: IntensityLevels = Field(default_factory=IntensityLevels)
    focus_areas: list[str] = Field(default_factory=list)
    reasoning: str = ""


class LightingPattern(CueLightModel):
    """A reusable mood pattern used to ground recommendations."""

    id: str
    description: str
    context: str
    mood: str
    fixture_types: list[str] = Field(default_factory=list)
    color_palette: list[str] = Field(default_factory=list)
    intensity: str = "moderate"
