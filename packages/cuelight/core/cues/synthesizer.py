"""Cue sequence synthesis.

Synthesis asks the completion service for a cue sequence over a list of
scenes, then persists it: one cue list, then each cue in response order.
The model references scenes by their position in the prompt; those
references are resolved back to persisted scene ids before cue creation.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections import Counter
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from cuelight.core.agents.parsing import (
    CUE_SEQUENCE_FALLBACK,
    StructuredResponseParser,
    text_field,
)
from cuelight.core.agents.prompts import PromptBuilder
from cuelight.core.agents.providers import CompletionProvider
from cuelight.core.backend import BackendClient
from cuelight.core.config.models import GenerationConfig
from cuelight.core.cues.analyzer import average, estimate_sequence_duration
from cuelight.core.cues.models import (
    ActAnalysis,
    ActCuesResult,
    ActRecommendations,
    CueListSummary,
    CueSequenceResult,
    CueSummary,
    CueTemplate,
    SequenceStatistics,
    SuggestedTiming,
)
from cuelight.core.errors import InputValidationError, NotFoundError, external_failure
from cuelight.core.lighting.recommendations import RecommendationService
from cuelight.core.models import (
    CueSequence,
    GeneratedScene,
    ProposedCue,
    ScriptScene,
    TransitionPreferences,
)

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"\d+")

# Mood -> (fade in, fade out) seconds
FADE_TABLE: dict[str, tuple[float, float]] = {
    "tense": (1, 2),
    "romantic": (5, 8),
    "dramatic": (3, 5),
    "cheerful": (2, 3),
    "mysterious": (6, 4),
}
DEFAULT_FADES: tuple[float, float] = (3, 3)

KEY_MOMENT_MOODS = frozenset({"dramatic", "climactic", "tense"})
SCENE_DWELL_SECONDS = 60

PRE_SHOW_CHECKS = [
    "Test all moving head positions",
    "Verify color mixing on LED fixtures",
    "Check fade engine calibration",
    "Confirm backup lighting positions",
    "Test emergency blackout procedures",
]

BACKUP_PLANS = [
    "Manual override available for all automated cues",
    "Simplified lighting states for technical failures",
    "Alternative fixtures identified for primary positions",
    "Emergency work lights accessible",
]


def resolve_scene_reference(reference: str, position: int, scene_ids: Sequence[str]) -> str:
    """Map a model-supplied scene reference to a persisted scene id.

    Resolution order:
    1. ``reference`` is an integer index into ``scene_ids``;
    2. ``reference`` is itself one of ``scene_ids``;
    3. the scene at ``position``, clamped to the last scene.

    Args:
        reference: Raw ``sceneId`` from the model
        position: Index of the cue within the sequence
        scene_ids: Scene ids in prompt order (non-empty)

    Returns:
        One of ``scene_ids``
    """
    text = reference.strip()
    if _INDEX_RE.fullmatch(text):
        index = int(text)
        if index < len(scene_ids):
            return scene_ids[index]
    if reference in scene_ids:
        return reference
    return scene_ids[min(position, len(scene_ids) - 1)]


def fade_times_for_mood(mood: str) -> tuple[float, float]:
    return FADE_TABLE.get(mood, DEFAULT_FADES)


class CueSequenceSynthesizer:
    """Synthesizes and persists cue sequences.

    Args:
        provider: Completion provider
        backend: Persistence backend
        recommendations: Recommendation service (act cue templates)
        builder: Prompt builder
        parser: Structured response parser
        config: Generation settings
    """

    def __init__(
        self,
        provider: CompletionProvider,
        backend: BackendClient,
        recommendations: RecommendationService,
        builder: PromptBuilder | None = None,
        parser: StructuredResponseParser | None = None,
        config: GenerationConfig | None = None,
    ) -> None:
        self.provider = provider
        self.backend = backend
        self.recommendations = recommendations
        self.builder = builder or PromptBuilder()
        self.parser = parser or StructuredResponseParser()
        self.config = config or GenerationConfig()

    # =========================================================================
    # Sequence generation
    # =========================================================================

    async def generate_cue_sequence(
        self,
        script_context: str,
        scenes: Sequence[GeneratedScene],
        preferences: TransitionPreferences | None = None,
    ) -> CueSequence:
        """Ask for a cue sequence over ``scenes``.

        Unparseable replies yield the fallback sequence (no cues). Cues that
        do not validate are dropped one by one.

        Raises:
            LLMProviderError: If the completion call fails
        """
        preferences = preferences or TransitionPreferences()
        prompt = self.builder.build_cue_sequence_prompt(script_context, scenes, preferences)
        text = await self.provider.complete(prompt, self.config.cue_sequence_temperature)

        data = self.parser.parse(text, CUE_SEQUENCE_FALLBACK).data
        raw_cues = data.get("cues")
        cues = self._valid_cues(raw_cues if isinstance(raw_cues, list) else [], preferences)

        return CueSequence(
            name=text_field(data.get("name")) or CUE_SEQUENCE_FALLBACK["name"],
            description=text_field(data.get("description")) or "",
            cues=cues,
            reasoning=text_field(data.get("reasoning")) or "",
        )

    def _valid_cues(
        self, raw_cues: list[Any], preferences: TransitionPreferences
    ) -> list[ProposedCue]:
        defaults = {
            "fadeInTime": preferences.default_fade_in,
            "fadeOutTime": preferences.default_fade_out,
        }
        cues: list[ProposedCue] = []
        for i, raw in enumerate(raw_cues):
            if not isinstance(raw, dict):
                logger.warning(f"Dropping cue {i}: not an object")
                continue
            try:
                cues.append(ProposedCue.model_validate({**defaults, **raw}))
            except ValidationError as e:
                logger.warning(f"Dropping cue {i}: {e.error_count()} validation errors")
        return cues

    async def create_cue_sequence(
        self,
        project_id: str,
        script_context: str,
        scene_ids: Sequence[str],
        sequence_name: str,
        preferences: TransitionPreferences | None = None,
    ) -> CueSequenceResult:
        """Synthesize a sequence over existing scenes and persist it.

        Cues are created one at a time in the order the model returned them.

        Args:
            project_id: Project owning the scenes
            script_context: Script text or notes given to the model
            scene_ids: Scene ids, in the order they are shown to the model
            sequence_name: Name of the new cue list
            preferences: Fade and follow preferences

        Returns:
            Created cue list, cues and sequence statistics

        Raises:
            InputValidationError: If ``scene_ids`` is empty
            NotFoundError: If the project or any scene does not exist
            OperationFailedError: If the completion service or backend fails
        """
        if not scene_ids:
            raise InputValidationError("At least one scene ID is required")

        with external_failure("create cue sequence"):
            project = await self.backend.get_project(project_id)
            if project is None:
                raise NotFoundError("Project", project_id)

            scenes = []
            for scene_id in scene_ids:
                scene = project.scene_by_id(scene_id)
                if scene is None:
                    raise NotFoundError("Scene", scene_id)
                scenes.append(GeneratedScene.from_scene(scene))

            sequence = await self.generate_cue_sequence(script_context, scenes, preferences)

            cue_list = await self.backend.create_cue_list(
                name=sequence_name, description=sequence.description, project_id=project_id
            )
            logger.info(f"Created cue list {cue_list.id} with {len(sequence.cues)} proposed cues")

            created = []
            for position, proposed in enumerate(sequence.cues):
                scene_id = resolve_scene_reference(proposed.scene_id, position, scene_ids)
                cue = await self.backend.create_cue(
                    {
                        "name": proposed.name,
                        "cueNumber": proposed.cue_number,
                        "cueListId": cue_list.id,
                        "sceneId": scene_id,
                        "fadeInTime": proposed.fade_in_time,
                        "fadeOutTime": proposed.fade_out_time,
                        "followTime": proposed.follow_time,
                        "notes": proposed.notes,
                    }
                )
                created.append(cue)

        return CueSequenceResult(
            cue_list=CueListSummary(
                id=cue_list.id,
                name=cue_list.name,
                description=cue_list.description,
                total_cues=len(created),
            ),
            cues=[CueSummary.from_cue(c) for c in created],
            sequence_reasoning=sequence.reasoning,
            statistics=SequenceStatistics(
                total_cues=len(created),
                average_fade_time=average(c.fade_in_time for c in created),
                follow_cues=sum(1 for c in created if c.has_follow_time),
                estimated_duration=estimate_sequence_duration(created),
            ),
        )

    # =========================================================================
    # Act cue templates
    # =========================================================================

    async def generate_act_cues(
        self,
        project_id: str,
        act_number: int,
        script_text: str,
        cue_list_name: str | None = None,
    ) -> ActCuesResult:
        """Suggest cue templates for every scene of one act.

        Scenes belong to act ``N`` when ``floor(sceneNumber) == N``.
        Recommendations for the act's scenes are requested concurrently.

        Raises:
            NotFoundError: If the project does not exist
            InputValidationError: If the script has no scenes for the act
            OperationFailedError: If the completion service or backend fails
        """
        with external_failure("generate act cues"):
            if await self.backend.get_project(project_id) is None:
                raise NotFoundError("Project", project_id)

            analysis = await self.recommendations.analyze_script(script_text)
            act_scenes = [s for s in analysis.scenes if s.act_number() == act_number]
            if not act_scenes:
                raise InputValidationError(
                    f"No scenes found for Act {act_number} in the provided script"
                )

            templates = await asyncio.gather(
                *(self._cue_template(act_number, i, s) for i, s in enumerate(act_scenes))
            )

        return ActCuesResult(
            act_number=act_number,
            total_scenes=len(act_scenes),
            suggested_cue_list_name=cue_list_name or f"Act {act_number} Cues",
            cue_templates=list(templates),
            act_analysis=ActAnalysis(
                overall_mood=_dominant_mood(act_scenes),
                key_moments=[
                    f"Scene {s.scene_number}: {s.title or s.mood}"
                    for s in act_scenes
                    if s.lighting_cues or s.mood in KEY_MOMENT_MOODS
                ],
                transition_types=[
                    f"{a.mood} → {b.mood}"
                    for a, b in zip(act_scenes, act_scenes[1:])
                    if a.mood != b.mood
                ],
                estimated_duration=sum(
                    t.suggested_timing.fade_in + SCENE_DWELL_SECONDS for t in templates
                ),
            ),
            recommendations=ActRecommendations(
                pre_show_checks=list(PRE_SHOW_CHECKS),
                critical_cues=[
                    f"Cue {t.scene_number}: {t.description}"
                    for t in templates
                    if t.mood == "dramatic" or len(t.lighting_cues) > 2
                ],
                backup_plans=list(BACKUP_PLANS),
            ),
        )

    async def _cue_template(self, act_number: int, index: int, scene: ScriptScene) -> CueTemplate:
        recommendations = await self.recommendations.generate_lighting_recommendations(
            scene.content, scene.mood, self.config.act_fixture_types
        )
        fade_in, fade_out = fade_times_for_mood(scene.mood)
        auto_follow = any(
            "auto" in cue.lower() or "follow" in cue.lower() for cue in scene.lighting_cues
        )
        return CueTemplate(
            scene_number=scene.scene_number,
            cue_number=f"{act_number}.{index + 1}",
            cue_name=f"Cue {scene.scene_number}",
            description=scene.title or f"Scene {scene.scene_number}",
            mood=scene.mood,
            time_of_day=scene.time_of_day,
            location=scene.location,
            lighting_cues=scene.lighting_cues,
            suggested_timing=SuggestedTiming(
                fade_in=fade_in, fade_out=fade_out, auto_follow=auto_follow
            ),
            color_suggestions=recommendations.color_suggestions,
            intensity_levels=recommendations.intensity_levels,
        )


def _dominant_mood(scenes: Sequence[ScriptScene]) -> str:
    """Most common mood when it covers more than half the scenes, else "mixed"."""
    mood, count = Counter(s.mood for s in scenes).most_common(1)[0]
    return mood if count > len(scenes) / 2 else "mixed"
