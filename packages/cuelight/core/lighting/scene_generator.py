"""Scene generation from natural-language descriptions."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from cuelight.core.agents.parsing import (
    FIXTURE_USAGE_FALLBACK,
    SCENE_FALLBACK,
    StructuredResponseParser,
    text_field,
)
from cuelight.core.agents.prompts import PromptBuilder
from cuelight.core.agents.providers import CompletionProvider
from cuelight.core.config.models import GenerationConfig
from cuelight.core.lighting.recommendations import RecommendationService
from cuelight.core.lighting.validation import FixtureValueValidator
from cuelight.core.models import (
    FixtureInstance,
    FixtureUsageSuggestion,
    GeneratedScene,
    LightingDesignRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_MOOD = "neutral"


def _id_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


class SceneGenerator:
    """Generates channel values for a scene description.

    One generation is: recommendations, prompt, a single completion, staged
    parsing, then validation against the request's fixtures. Completion
    failures propagate; nothing is retried.

    Args:
        provider: Completion provider
        recommendations: Mood/color recommendation service
        builder: Prompt builder
        parser: Structured response parser
        validator: Fixture value validator
        config: Generation settings
    """

    def __init__(
        self,
        provider: CompletionProvider,
        recommendations: RecommendationService,
        builder: PromptBuilder | None = None,
        parser: StructuredResponseParser | None = None,
        validator: FixtureValueValidator | None = None,
        config: GenerationConfig | None = None,
    ) -> None:
        self.config = config or GenerationConfig()
        self.provider = provider
        self.recommendations = recommendations
        self.builder = builder or PromptBuilder(
            max_fixtures=self.config.max_prompt_fixtures,
            additive_preview=self.config.additive_preview_count,
        )
        self.parser = parser or StructuredResponseParser()
        self.validator = validator or FixtureValueValidator()

    async def generate_scene(self, request: LightingDesignRequest) -> GeneratedScene:
        """Generate a scene for ``request``.

        Args:
            request: Scene description, fixtures and preferences

        Returns:
            GeneratedScene whose values match each fixture's channel count
            and ranges

        Raises:
            LLMProviderError: If a completion call fails
        """
        prefs = request.design_preferences
        mood = (prefs.mood if prefs and prefs.mood else None) or DEFAULT_MOOD
        fixture_types = [f.type.value for f in request.available_fixtures]

        recommendations = await self.recommendations.generate_lighting_recommendations(
            request.scene_description, mood, fixture_types
        )

        prompt = self.builder.build_scene_prompt(request, recommendations)
        logger.debug(
            f"Generating {request.scene_type.value} scene: "
            f"{len(request.available_fixtures)} fixtures, prompt {len(prompt)} chars"
        )
        text = await self.provider.complete(prompt, self.config.scene_temperature)

        outcome = self.parser.parse(text, SCENE_FALLBACK)
        data = outcome.data
        raw_values = data.get("fixtureValues")
        fixture_values = self.validator.validate(raw_values, request.available_fixtures)

        reasoning = text_field(data.get("reasoning"))
        if reasoning is None:
            first = request.available_fixtures[0] if request.available_fixtures else None
            debug_info = {
                "promptLength": len(prompt),
                "responseLength": len(text),
                "parseMode": outcome.mode.value,
                "hasFixtureValues": isinstance(raw_values, list),
                "fixtureValuesCount": len(raw_values) if isinstance(raw_values, list) else 0,
                "availableFixturesCount": len(request.available_fixtures),
                "firstFixtureChannelCount": first.channel_count if first else 0,
            }
            reasoning = f"{recommendations.reasoning}\n\nDEBUG: {json.dumps(debug_info)}"

        return GeneratedScene(
            name=text_field(data.get("name")) or f"Scene for {request.scene_description}",
            description=text_field(data.get("description")) or request.scene_description,
            fixture_values=fixture_values,
            reasoning=reasoning,
        )

    def optimize_scene_for_fixtures(
        self, scene: GeneratedScene, fixtures: Sequence[FixtureInstance]
    ) -> GeneratedScene:
        """Re-clamp and re-size a scene's values against ``fixtures``."""
        return scene.model_copy(
            update={"fixture_values": self.validator.optimize(scene.fixture_values, fixtures)}
        )

    async def suggest_fixture_usage(
        self, scene_context: str, fixtures: Sequence[FixtureInstance]
    ) -> FixtureUsageSuggestion:
        """Ask which fixtures should carry a scene.

        Returns:
            Primary, supporting and unused fixture ids; the fallback
            suggestion when the reply cannot be parsed
        """
        prompt = self.builder.build_fixture_usage_prompt(scene_context, fixtures)
        text = await self.provider.complete(prompt, self.config.fixture_usage_temperature)
        data = self.parser.parse(text, FIXTURE_USAGE_FALLBACK).data

        return FixtureUsageSuggestion(
            primary_fixtures=_id_list(data.get("primaryFixtures")),
            supporting_fixtures=_id_list(data.get("supportingFixtures")),
            unused_fixtures=_id_list(data.get("unusedFixtures")),
            reasoning=text_field(data.get("reasoning")) or FIXTURE_USAGE_FALLBACK["reasoning"],
        )
