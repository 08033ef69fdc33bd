"""Domain models for fixtures, scenes, cues and scripts."""

from cuelight.core.models.base import UNSET, CueLightModel
from cuelight.core.models.cues import (
    Cue,
    CueList,
    CueListPlaybackStatus,
    CueSequence,
    ProposedCue,
    SceneRef,
    TransitionPreferences,
)
from cuelight.core.models.fixtures import (
    DMX_MAX,
    DMX_MIN,
    UNIVERSE_SIZE,
    Channel,
    ChannelType,
    FixtureDefinition,
    FixtureInstance,
    FixtureMode,
    FixtureSpec,
    FixtureType,
    FixtureUpdate,
    FixtureValue,
)
from cuelight.core.models.project import Project
from cuelight.core.models.scenes import (
    DesignPreferences,
    FixtureUsageSuggestion,
    GeneratedScene,
    IntensityPreference,
    LightingDesignRequest,
    Scene,
    SceneType,
)
from cuelight.core.models.script import (
    IntensityLevels,
    LightingPattern,
    LightingRecommendations,
    ScriptAnalysis,
    ScriptScene,
)

__all__ = [
    "DMX_MAX",
    "DMX_MIN",
    "UNIVERSE_SIZE",
    "Channel",
    "ChannelType",
    "Cue",
    "CueLightModel",
    "CueList",
    "CueListPlaybackStatus",
    "CueSequence",
    "DesignPreferences",
    "FixtureDefinition",
    "FixtureInstance",
    "FixtureMode",
    "FixtureSpec",
    "FixtureType",
    "FixtureUpdate",
    "FixtureUsageSuggestion",
    "FixtureValue",
    "GeneratedScene",
    "IntensityLevels",
    "IntensityPreference",
    "LightingDesignRequest",
    "LightingPattern",
    "LightingRecommendations",
    "Project",
    "ProposedCue",
    "Scene",
    "SceneRef",
    "SceneType",
    "ScriptAnalysis",
    "ScriptScene",
    "TransitionPreferences",
    "UNSET",
]
