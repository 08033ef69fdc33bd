"""Shared pytest fixtures for cuelight tests."""

from __future__ import annotations

import logging
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from cuelight.core.backend import BackendClient
from cuelight.core.models import (
    Channel,
    ChannelType,
    Cue,
    CueList,
    FixtureInstance,
    FixtureType,
    LightingRecommendations,
    Project,
    Scene,
    SceneRef,
    ScriptAnalysis,
)

# ============================================================================
# Fixture Instance Fixtures
# ============================================================================


@pytest.fixture
def rgb_par() -> FixtureInstance:
    """3-channel RGB par at universe 1, channels 1-3."""
    return FixtureInstance(
        id="par-1",
        name="Front Par",
        type=FixtureType.LED_PAR,
        mode_name="3ch",
        channels=[
            Channel(id="par-1-r", offset=0, name="Red", type=ChannelType.RED),
            Channel(id="par-1-g", offset=1, name="Green", type=ChannelType.GREEN),
            Channel(id="par-1-b", offset=2, name="Blue", type=ChannelType.BLUE),
        ],
        universe=1,
        start_channel=1,
    )


@pytest.fixture
def limited_dimmer() -> FixtureInstance:
    """Single-channel dimmer restricted to 10-200, at universe 1, channel 4."""
    return FixtureInstance(
        id="dim-1",
        name="House Dimmer",
        type=FixtureType.DIMMER,
        channels=[
            Channel(
                id="dim-1-i",
                offset=0,
                name="Intensity",
                type=ChannelType.INTENSITY,
                min_value=10,
                max_value=200,
                default_value=10,
            )
        ],
        universe=1,
        start_channel=4,
    )


@pytest.fixture
def bare_fixture() -> FixtureInstance:
    """Fixture with no channel definitions."""
    return FixtureInstance(id="bare-1", name="Unpatched", universe=2, start_channel=1)


@pytest.fixture
def sample_fixtures(rgb_par: FixtureInstance, limited_dimmer: FixtureInstance) -> list[FixtureInstance]:
    return [rgb_par, limited_dimmer]


# ============================================================================
# Cue Fixtures
# ============================================================================


@pytest.fixture
def make_cue() -> Callable[..., Cue]:
    """Factory for cues; scene defaults to ``s1``."""

    def _make(
        number: float,
        *,
        scene_id: str = "s1",
        scene_name: str | None = None,
        fade_in: float = 3.0,
        fade_out: float = 3.0,
        follow: float | None = None,
        name: str | None = None,
    ) -> Cue:
        return Cue(
            id=f"cue-{number:g}",
            name=name or f"Cue {number:g}",
            cue_number=number,
            scene=SceneRef(id=scene_id, name=scene_name or f"Scene {scene_id}"),
            fade_in_time=fade_in,
            fade_out_time=fade_out,
            follow_time=follow,
        )

    return _make


@pytest.fixture
def sample_cue_list(make_cue: Callable[..., Cue]) -> CueList:
    """Four cues numbered 1, 2, 4, 5 over scenes s1/s2/s1/s2."""
    return CueList(
        id="cl-1",
        name="Act One",
        description="Main act",
        cues=[
            make_cue(1, scene_id="s1", scene_name="Dawn"),
            make_cue(2, scene_id="s2", scene_name="Storm", fade_in=1, follow=2),
            make_cue(4, scene_id="s1", scene_name="Dawn", fade_in=1, follow=3),
            make_cue(5, scene_id="s2", scene_name="Storm", fade_out=5),
        ],
    )


@pytest.fixture
def sample_scenes() -> list[Scene]:
    return [
        Scene(id="s1", name="Dawn", description="Soft sunrise"),
        Scene(id="s2", name="Storm", description="Lightning and rain"),
        Scene(id="s3", name="Night", description="Cold moonlight"),
    ]


@pytest.fixture
def sample_project(
    sample_fixtures: list[FixtureInstance],
    sample_scenes: list[Scene],
    sample_cue_list: CueList,
) -> Project:
    return Project(
        id="p1",
        name="The Tempest",
        fixtures=sample_fixtures,
        scenes=sample_scenes,
        cue_lists=[sample_cue_list],
    )


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def mock_backend() -> AsyncMock:
    """Backend with every Protocol method as an AsyncMock."""
    return AsyncMock(spec=BackendClient)


@pytest.fixture
def mock_provider() -> AsyncMock:
    """Completion provider returning an empty reply unless configured."""
    provider = AsyncMock()
    provider.complete.return_value = ""
    return provider


@pytest.fixture
def mock_recommendations() -> AsyncMock:
    """Recommendation service with fixed guidance and an empty script analysis."""
    service = AsyncMock()
    service.generate_lighting_recommendations.return_value = LightingRecommendations(
        color_suggestions=["amber", "blue"],
        reasoning="Warm key with cool fill",
    )
    service.analyze_script.return_value = ScriptAnalysis()
    return service


@pytest.fixture
def restore_root_logger():
    """Undo ``configure_logging`` changes to the root logger after a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
