"""Prompt construction for scene, cue and recommendation calls.

Every builder is pure: it renders a prompt pack from its arguments and has
no side effects. Scene prompts always carry the channel-array length
instruction, since value validation downstream depends on the model at
least attempting to honor it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cuelight.core.agents.prompts.loader import PromptPackLoader
from cuelight.core.models import (
    FixtureInstance,
    GeneratedScene,
    LightingDesignRequest,
    LightingPattern,
    LightingRecommendations,
    SceneType,
    TransitionPreferences,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_FIXTURES = 15
DEFAULT_ADDITIVE_PREVIEW = 5


def summarize_fixture(fixture: FixtureInstance) -> dict[str, Any]:
    """Condensed fixture description for prompts."""
    return {
        "id": fixture.id,
        "name": fixture.name,
        "type": fixture.type.value,
        "mode": fixture.mode_name or "default",
        "channel_count": fixture.channel_count,
        "channels": ",".join(c.type.value for c in fixture.channels),
    }


class PromptBuilder:
    """Renders bounded natural-language prompts.

    Args:
        loader: Prompt pack loader (defaults to the packaged packs)
        max_fixtures: Fixtures listed in a scene prompt before truncation
        additive_preview: Unmodified fixtures previewed in additive prompts
    """

    def __init__(
        self,
        loader: PromptPackLoader | None = None,
        *,
        max_fixtures: int = DEFAULT_MAX_FIXTURES,
        additive_preview: int = DEFAULT_ADDITIVE_PREVIEW,
    ) -> None:
        self.loader = loader or PromptPackLoader()
        self.max_fixtures = max_fixtures
        self.additive_preview = additive_preview

    def build_scene_prompt(
        self, request: LightingDesignRequest, recommendations: LightingRecommendations
    ) -> str:
        """Build the fixture-value prompt for one scene.

        Fixtures without channels are omitted. When more than ``max_fixtures``
        remain, the list is truncated and a visible notice is added.

        Args:
            request: Scene design request
            recommendations: Mood/color guidance

        Returns:
            Rendered prompt
        """
        summaries = [
            summarize_fixture(f) for f in request.available_fixtures if f.channels
        ]
        listed = summaries[: self.max_fixtures]
        truncation_notice = ""
        if len(summaries) > self.max_fixtures:
            truncation_notice = (
                f"\n(Showing first {self.max_fixtures} of {len(summaries)} fixtures)"
            )
            logger.debug(f"Scene prompt truncated to {self.max_fixtures}/{len(summaries)} fixtures")

        additive = request.scene_type == SceneType.ADDITIVE
        project_fixtures = [f for f in (request.all_fixtures or []) if f.channels]
        listed_ids = {s["id"] for s in listed}
        unmodified = [f for f in project_fixtures if f.id not in listed_ids]

        return self.loader.load_and_render(
            "scene",
            {
                "scene_description": request.scene_description,
                "mood": recommendations.reasoning or "Standard",
                "colors": ",".join(recommendations.color_suggestions) or "Default",
                "additive": additive,
                "fixtures": listed,
                "truncation_notice": truncation_notice,
                "project_fixture_count": len(project_fixtures),
                "unmodified_preview": [
                    {"id": f.id, "name": f.name, "type": f.type.value}
                    for f in unmodified[: self.additive_preview]
                ],
                "more_unmodified": len(unmodified) > self.additive_preview,
                "preferences": _preference_lines(request),
            },
        )

    def build_cue_sequence_prompt(
        self,
        script_context: str,
        scenes: Sequence[GeneratedScene],
        preferences: TransitionPreferences | None = None,
    ) -> str:
        """Build the cue-sequence prompt.

        Scenes are listed by index; the model is asked to reference them by
        that index.
        """
        preferences = preferences or TransitionPreferences()
        return self.loader.load_and_render(
            "cue_sequence",
            {
                "script_context": script_context,
                "scenes": [{"name": s.name, "description": s.description} for s in scenes],
                "fade_in": _format_seconds(preferences.default_fade_in),
                "fade_out": _format_seconds(preferences.default_fade_out),
                "follow_cues": str(preferences.follow_cues).lower(),
            },
        )

    def build_fixture_usage_prompt(
        self, scene_context: str, fixtures: Sequence[FixtureInstance]
    ) -> str:
        return self.loader.load_and_render(
            "fixture_usage",
            {
                "scene_context": scene_context,
                "fixtures": [
                    {
                        "id": f.id,
                        "name": f.name,
                        "type": f.type.value,
                        "tags": f.tags,
                        "position": f"Universe {f.universe}, Channel {f.start_channel}",
                    }
                    for f in fixtures
                ],
            },
        )

    def build_recommendation_prompt(
        self,
        scene_context: str,
        mood: str,
        fixture_types: Sequence[str],
        patterns: Sequence[LightingPattern] = (),
    ) -> str:
        """Build the mood/color recommendation prompt.

        Only the first five fixture types are listed.
        """
        return self.loader.load_and_render(
            "lighting_recommendations",
            {
                "scene_context": scene_context,
                "mood": mood,
                "fixture_types": list(fixture_types)[:5],
                "patterns": [p.model_dump() for p in patterns],
            },
        )

    def build_script_analysis_prompt(self, script_text: str) -> str:
        return self.loader.load_and_render("script_analysis", {"script_text": script_text})


def _format_seconds(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _preference_lines(request: LightingDesignRequest) -> list[str]:
    prefs = request.design_preferences
    if prefs is None:
        return []
    lines = []
    if prefs.color_palette:
        lines.append(f"Color palette: {', '.join(prefs.color_palette)}")
    if prefs.mood:
        lines.append(f"Mood: {prefs.mood}")
    if prefs.intensity:
        lines.append(f"Intensity: {prefs.intensity.value}")
    if prefs.focus_areas:
        lines.append(f"Focus areas: {', '.join(prefs.focus_areas)}")
    return lines
