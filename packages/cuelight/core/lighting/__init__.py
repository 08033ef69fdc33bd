"""Scene generation, recommendations and fixture value validation."""

from cuelight.core.lighting.channel_heuristics import (
    InferredLayout,
    build_definition,
    create_intelligent_fixture_channels,
)
from cuelight.core.lighting.recommendations import (
    DEFAULT_PATTERNS,
    LLMRecommendationService,
    RecommendationService,
)
from cuelight.core.lighting.scene_generator import SceneGenerator
from cuelight.core.lighting.validation import FixtureValueValidator, clamp_value

__all__ = [
    "DEFAULT_PATTERNS",
    "FixtureValueValidator",
    "InferredLayout",
    "LLMRecommendationService",
    "RecommendationService",
    "SceneGenerator",
    "build_definition",
    "clamp_value",
    "create_intelligent_fixture_channels",
]
