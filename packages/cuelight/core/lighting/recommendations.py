"""Mood recommendations and script analysis.

The recommendation service grounds scene generation: it turns a scene
context and mood into color and intensity guidance, and breaks script text
into scenes with moods and lighting cues. ``LLMRecommendationService`` backs
both with the completion provider and a small in-memory library of mood
patterns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from cuelight.core.agents.parsing import (
    RECOMMENDATIONS_FALLBACK,
    SCRIPT_ANALYSIS_FALLBACK,
    StructuredResponseParser,
)
from cuelight.core.agents.prompts import PromptBuilder
from cuelight.core.agents.providers import CompletionProvider
from cuelight.core.config.models import GenerationConfig
from cuelight.core.models import (
    LightingPattern,
    LightingRecommendations,
    ScriptAnalysis,
    ScriptScene,
)

logger = logging.getLogger(__name__)

DEFAULT_PATTERN_LIMIT = 5


class RecommendationService(Protocol):
    """Mood-to-color guidance and script analysis."""

    async def generate_lighting_recommendations(
        self, scene_context: str, mood: str, fixture_types: Sequence[str]
    ) -> LightingRecommendations: ...

    async def analyze_script(self, script_text: str) -> ScriptAnalysis: ...


DEFAULT_PATTERNS: tuple[LightingPattern, ...] = (
    LightingPattern(
        id="romantic-warm",
        description="Warm romantic lighting with soft amber tones",
        context="intimate dialogue, love scenes, tender moments",
        mood="romantic",
        fixture_types=["LED_PAR"],
        color_palette=["amber", "warm white", "rose"],
        intensity="moderate",
    ),
    LightingPattern(
        id="dramatic-tension",
        description="High contrast dramatic lighting with sharp angles",
        context="conflict scenes, confrontations, climactic moments",
        mood="tense",
        fixture_types=["MOVING_HEAD", "LED_PAR"],
        color_palette=["deep red", "stark white", "blue"],
        intensity="dramatic",
    ),
    LightingPattern(
        id="mysterious-cool",
        description="Cool mysterious lighting with blue undertones",
        context="supernatural scenes, night scenes, mystery",
        mood="mysterious",
        fixture_types=["LED_PAR", "MOVING_HEAD"],
        color_palette=["deep blue", "purple", "cool white"],
        intensity="subtle",
    ),
    LightingPattern(
        id="cheerful-bright",
        description="Bright cheerful lighting with natural tones",
        context="comedy scenes, daytime scenes, celebrations",
        mood="cheerful",
        fixture_types=["LED_PAR"],
        color_palette=["warm white", "yellow", "light blue"],
        intensity="dramatic",
    ),
)


class LLMRecommendationService:
    """Recommendation service backed by the completion provider.

    Args:
        provider: Completion provider
        builder: Prompt builder
        parser: Structured response parser
        config: Generation settings (temperatures)
        patterns: Initial mood patterns (defaults to ``DEFAULT_PATTERNS``)
    """

    def __init__(
        self,
        provider: CompletionProvider,
        builder: PromptBuilder | None = None,
        parser: StructuredResponseParser | None = None,
        config: GenerationConfig | None = None,
        patterns: Iterable[LightingPattern] = DEFAULT_PATTERNS,
    ) -> None:
        self.provider = provider
        self.builder = builder or PromptBuilder()
        self.parser = parser or StructuredResponseParser()
        self.config = config or GenerationConfig()
        self._patterns: dict[str, LightingPattern] = {p.id: p for p in patterns}

    @property
    def patterns(self) -> list[LightingPattern]:
        return list(self._patterns.values())

    def index_pattern(self, pattern: LightingPattern) -> None:
        """Add or replace a pattern by id."""
        self._patterns[pattern.id] = pattern

    def find_similar_patterns(
        self, scene_context: str, mood: str, limit: int = DEFAULT_PATTERN_LIMIT
    ) -> list[LightingPattern]:
        """Patterns whose mood equals ``mood`` or whose context contains the scene text.

        Both comparisons are case-insensitive.
        """
        mood_key = mood.lower()
        context_key = scene_context.lower()
        matches = [
            p
            for p in self._patterns.values()
            if p.mood.lower() == mood_key or context_key in p.context.lower()
        ]
        return matches[:limit]

    async def generate_lighting_recommendations(
        self, scene_context: str, mood: str, fixture_types: Sequence[str]
    ) -> LightingRecommendations:
        """Recommend colors, intensities and focus areas for a scene.

        Raises:
            LLMProviderError: If the completion call fails
        """
        patterns = self.find_similar_patterns(scene_context, mood)
        prompt = self.builder.build_recommendation_prompt(
            scene_context, mood, fixture_types, patterns
        )
        logger.debug(f"Requesting recommendations: mood={mood}, patterns={len(patterns)}")

        text = await self.provider.complete(prompt, self.config.recommendation_temperature)
        outcome = self.parser.parse(text, RECOMMENDATIONS_FALLBACK)
        return _validate_or_fallback(
            LightingRecommendations, outcome.data, RECOMMENDATIONS_FALLBACK
        )

    async def analyze_script(self, script_text: str) -> ScriptAnalysis:
        """Extract scenes, moods and lighting cues from script text.

        Scenes that do not validate are dropped individually.

        Raises:
            LLMProviderError: If the completion call fails
        """
        prompt = self.builder.build_script_analysis_prompt(script_text)
        text = await self.provider.complete(prompt, self.config.script_analysis_temperature)
        data = self.parser.parse(text, SCRIPT_ANALYSIS_FALLBACK).data

        raw_scenes = data.get("scenes")
        scenes = _valid_scenes(raw_scenes if isinstance(raw_scenes, list) else [])
        analysis = _validate_or_fallback(
            ScriptAnalysis, {**data, "scenes": []}, SCRIPT_ANALYSIS_FALLBACK
        )
        analysis.scenes = scenes
        logger.debug(f"Script analysis found {len(scenes)} scenes")
        return analysis


def _valid_scenes(raw_scenes: list[Any]) -> list[ScriptScene]:
    scenes: list[ScriptScene] = []
    for raw in raw_scenes:
        try:
            scenes.append(ScriptScene.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Dropping malformed script scene: {e.error_count()} errors")
    return scenes


def _validate_or_fallback(model: type, data: dict[str, Any], fallback: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"{model.__name__} response did not validate, using fallback: {e}")
        return model.model_validate(fallback)
