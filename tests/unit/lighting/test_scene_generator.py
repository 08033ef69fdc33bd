"""Tests for SceneGenerator."""

from __future__ import annotations

import json

import pytest

from cuelight.core.agents.providers import LLMProviderError
from cuelight.core.config import GenerationConfig
from cuelight.core.lighting import SceneGenerator
from cuelight.core.models import (
    DesignPreferences,
    FixtureValue,
    GeneratedScene,
    LightingDesignRequest,
)


@pytest.fixture
def generator(mock_provider, mock_recommendations) -> SceneGenerator:
    return SceneGenerator(mock_provider, mock_recommendations)


@pytest.fixture
def request_for(sample_fixtures):
    def _make(**kwargs) -> LightingDesignRequest:
        return LightingDesignRequest(
            scene_description="Moonlit garden", available_fixtures=sample_fixtures, **kwargs
        )

    return _make


@pytest.mark.asyncio
async def test_generate_scene_validates_reply(generator, mock_provider, request_for):
    """Test that generated values are validated against the request's fixtures."""
    mock_provider.complete.return_value = (
        "Sure! "
        + json.dumps(
            {
                "name": "Moonlight",
                "description": "Cool blue wash",
                "fixtureValues": [
                    {"fixtureId": "par-1", "channelValues": [0, 40, 255, 12]},
                    {"fixtureId": "dim-1", "channelValues": [250]},
                    {"fixtureId": "ghost", "channelValues": [1]},
                ],
                "reasoning": "Blue reads as night",
            }
        )
    )

    scene = await generator.generate_scene(request_for())

    assert scene.name == "Moonlight"
    assert scene.description == "Cool blue wash"
    assert scene.reasoning == "Blue reads as night"
    assert scene.fixture_values == [
        FixtureValue(fixture_id="par-1", channel_values=[0, 40, 255]),
        FixtureValue(fixture_id="dim-1", channel_values=[200]),
    ]


@pytest.mark.asyncio
async def test_generate_scene_uses_mood_and_fixture_types(
    generator, mock_provider, mock_recommendations, request_for
):
    mock_provider.complete.return_value = "{}"

    await generator.generate_scene(
        request_for(design_preferences=DesignPreferences(mood="mysterious"))
    )

    mock_recommendations.generate_lighting_recommendations.assert_awaited_once_with(
        "Moonlit garden", "mysterious", ["LED_PAR", "DIMMER"]
    )
    _, temperature = mock_provider.complete.await_args.args
    assert temperature == GenerationConfig().scene_temperature


@pytest.mark.asyncio
async def test_generate_scene_defaults_mood_to_neutral(
    generator, mock_provider, mock_recommendations, request_for
):
    mock_provider.complete.return_value = "{}"

    await generator.generate_scene(request_for())

    args = mock_recommendations.generate_lighting_recommendations.await_args.args
    assert args[1] == "neutral"


@pytest.mark.asyncio
async def test_unparseable_reply_yields_empty_scene_with_debug(
    generator, mock_provider, request_for
):
    """Test the fallback scene when the reply has no JSON object."""
    mock_provider.complete.return_value = "I'd suggest a blue wash."

    scene = await generator.generate_scene(request_for())

    assert scene.name == "Scene for Moonlit garden"
    assert scene.description == "Moonlit garden"
    assert scene.fixture_values == []
    recommendation_text, debug = scene.reasoning.split("\n\nDEBUG: ")
    assert recommendation_text == "Warm key with cool fill"
    info = json.loads(debug)
    assert info["parseMode"] == "fallback"
    assert info["hasFixtureValues"] is False
    assert info["availableFixturesCount"] == 2
    assert info["firstFixtureChannelCount"] == 3
    assert info["responseLength"] == len("I'd suggest a blue wash.")


@pytest.mark.asyncio
async def test_provider_failure_propagates(generator, mock_provider, request_for):
    mock_provider.complete.side_effect = LLMProviderError("Provider error: timeout")

    with pytest.raises(LLMProviderError):
        await generator.generate_scene(request_for())


def test_optimize_scene_for_fixtures(generator, rgb_par):
    scene = GeneratedScene(
        name="Old",
        fixture_values=[FixtureValue(fixture_id="par-1", channel_values=[999])],
    )

    optimized = generator.optimize_scene_for_fixtures(scene, [rgb_par])

    assert optimized.fixture_values[0].channel_values == [255, 0, 0]
    assert scene.fixture_values[0].channel_values == [999]


@pytest.mark.asyncio
async def test_suggest_fixture_usage(generator, mock_provider, sample_fixtures):
    mock_provider.complete.return_value = json.dumps(
        {
            "primaryFixtures": ["par-1", 3],
            "supportingFixtures": ["dim-1"],
            "unusedFixtures": "none",
            "reasoning": "Par carries the key light",
        }
    )

    suggestion = await generator.suggest_fixture_usage("Duel", sample_fixtures)

    assert suggestion.primary_fixtures == ["par-1"]
    assert suggestion.supporting_fixtures == ["dim-1"]
    assert suggestion.unused_fixtures == []
    assert suggestion.reasoning == "Par carries the key light"


@pytest.mark.asyncio
async def test_suggest_fixture_usage_fallback(generator, mock_provider, sample_fixtures):
    mock_provider.complete.return_value = "no idea"

    suggestion = await generator.suggest_fixture_usage("Duel", sample_fixtures)

    assert suggestion.primary_fixtures == []
    assert suggestion.reasoning == "Unable to parse AI response, using fallback structure"
