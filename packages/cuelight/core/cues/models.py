"""Result models returned by cue operations."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from cuelight.core.models import Cue, CueList, IntensityLevels
from cuelight.core.models.base import CueLightModel

# =============================================================================
# Cue summaries
# =============================================================================


class CueSummary(CueLightModel):
    """Flattened view of a persisted cue."""

    cue_id: str
    name: str
    cue_number: float
    scene_id: str
    scene_name: str
    fade_in_time: float
    fade_out_time: float
    follow_time: float | None = None
    notes: str | None = None

    @classmethod
    def from_cue(cls, cue: Cue) -> CueSummary:
        return cls(
            cue_id=cue.id,
            name=cue.name,
            cue_number=cue.cue_number,
            scene_id=cue.scene.id,
            scene_name=cue.scene.name,
            fade_in_time=cue.fade_in_time,
            fade_out_time=cue.fade_out_time,
            follow_time=cue.follow_time,
            notes=cue.notes,
        )


class CueListSummary(CueLightModel):
    id: str
    name: str
    description: str | None = None
    total_cues: int = 0

    @classmethod
    def from_cue_list(cls, cue_list: CueList) -> CueListSummary:
        return cls(
            id=cue_list.id,
            name=cue_list.name,
            description=cue_list.description,
            total_cues=len(cue_list.cues),
        )


# =============================================================================
# Sequence synthesis
# =============================================================================


class SequenceStatistics(CueLightModel):
    total_cues: int
    average_fade_time: float
    follow_cues: int
    estimated_duration: float


class CueSequenceResult(CueLightModel):
    """Outcome of persisting a synthesized cue sequence."""

    cue_list: CueListSummary
    cues: list[CueSummary] = Field(default_factory=list)
    sequence_reasoning: str = ""
    statistics: SequenceStatistics


class SuggestedTiming(CueLightModel):
    fade_in: float
    fade_out: float
    auto_follow: bool = False


class CueTemplate(CueLightModel):
    """Suggested cue for one scene of an act."""

    scene_number: str
    cue_number: str
    cue_name: str
    description: str
    mood: str
    time_of_day: str | None = None
    location: str | None = None
    lighting_cues: list[str] = Field(default_factory=list)
    suggested_timing: SuggestedTiming
    color_suggestions: list[str] = Field(default_factory=list)
    intensity_levels: IntensityLevels = Field(default_factory=IntensityLevels)


class ActAnalysis(CueLightModel):
    overall_mood: str
    key_moments: list[str] = Field(default_factory=list)
    transition_types: list[str] = Field(default_factory=list)
    estimated_duration: float = 0


class ActRecommendations(CueLightModel):
    pre_show_checks: list[str] = Field(default_factory=list)
    critical_cues: list[str] = Field(default_factory=list)
    backup_plans: list[str] = Field(default_factory=list)


class ActCuesResult(CueLightModel):
    """Cue templates and production notes for one act."""

    act_number: int
    total_scenes: int
    suggested_cue_list_name: str
    cue_templates: list[CueTemplate] = Field(default_factory=list)
    act_analysis: ActAnalysis
    recommendations: ActRecommendations


# =============================================================================
# Structure analysis
# =============================================================================


class NumberRange(CueLightModel):
    min: float = 0
    max: float = 0


class NumberingAnalysis(CueLightModel):
    sequential: bool
    gaps: list[float] = Field(default_factory=list)
    duplicates: list[float] = Field(default_factory=list)
    format: str


class FadeTimingAnalysis(CueLightModel):
    fade_in_range: NumberRange
    fade_out_range: NumberRange
    common_times: list[float] = Field(default_factory=list)


class SceneUsage(CueLightModel):
    scene_id: str
    scene_name: str
    usage_count: int


class SceneUsageAnalysis(CueLightModel):
    total_scenes: int
    used_scenes: int
    unused_scenes: list[SceneUsage] = Field(default_factory=list)
    most_used_scene: SceneUsage | None = None


class FollowStructure(CueLightModel):
    total_follow_cues: int
    manual_cues: int
    average_follow_time: float
    follow_chains: list[list[float]] = Field(default_factory=list)


class SceneTransition(CueLightModel):
    from_scene: str = Field(alias="from")
    to_scene: str = Field(alias="to")
    fade_time: float
    gap: float


class CueStructure(CueLightModel):
    total_cues: int
    cue_numbering: NumberingAnalysis
    fade_timings: FadeTimingAnalysis
    scene_usage: SceneUsageAnalysis
    follow_structure: FollowStructure


class CuePatterns(CueLightModel):
    common_fade_times: list[float] = Field(default_factory=list)
    timing_patterns: list[str] = Field(default_factory=list)
    scene_transitions: list[SceneTransition] = Field(default_factory=list)


class CueStatistics(CueLightModel):
    estimated_runtime: float
    manual_cues: int
    auto_cues: int
    average_cue_spacing: float


class StructureRecommendations(CueLightModel):
    numbering: list[str] = Field(default_factory=list)
    timing: list[str] = Field(default_factory=list)
    structure: list[str] = Field(default_factory=list)
    safety: list[str] = Field(default_factory=list)


class CueStructureReport(CueLightModel):
    """Read-only analysis of a cue list."""

    cue_list_id: str
    name: str
    structure: CueStructure
    patterns: CuePatterns
    potential_issues: list[str] = Field(default_factory=list)
    statistics: CueStatistics
    recommendations: StructureRecommendations | None = None


# =============================================================================
# Timing optimization
# =============================================================================


class OptimizationStrategy(str, Enum):
    SMOOTH_TRANSITIONS = "smooth_transitions"
    DRAMATIC_TIMING = "dramatic_timing"
    TECHNICAL_PRECISION = "technical_precision"
    ENERGY_CONSCIOUS = "energy_conscious"


class OriginalTiming(CueLightModel):
    total_cues: int
    average_fade_in: float
    average_fade_out: float
    follow_cues: int


class TimingOptimizationReport(CueLightModel):
    cue_list_id: str
    strategy: OptimizationStrategy
    original_timing: OriginalTiming
    changes: list[str] = Field(default_factory=list)
    reasoning: str
    estimated_improvement: str


# =============================================================================
# Cue-list operations
# =============================================================================


class CueFilter(CueLightModel):
    """Filters for ``get_cue_list_details``; unset fields do not filter."""

    cue_number_range: NumberRange | None = None
    name_contains: str | None = None
    scene_name_contains: str | None = None
    has_follow_time: bool | None = None
    fade_time_range: NumberRange | None = None

    def applied_count(self) -> int:
        return len(self.model_dump(exclude_none=True))


class CueListStatistics(CueLightModel):
    total_cues: int
    cue_number_range: NumberRange | None = None
    average_fade_in_time: float
    average_fade_out_time: float
    follow_cues: int
    unique_scenes: int
    estimated_total_time: float


class CueListDetails(CueLightModel):
    """Filtered, sorted cue list with lookup tables."""

    cue_list: CueListSummary
    cues: list[CueSummary] = Field(default_factory=list)
    statistics: CueListStatistics
    by_cue_number: dict[str, CueSummary] = Field(default_factory=dict)
    by_name: dict[str, CueSummary] = Field(default_factory=dict)
    by_scene_name: dict[str, list[CueSummary]] = Field(default_factory=dict)
    by_scene_id: dict[str, list[CueSummary]] = Field(default_factory=dict)
    sorted_by: str
    filters_applied: int = 0
    total_before_filtering: int = 0


class BulkCueUpdateSummary(CueLightModel):
    total_updated: int
    updates_applied: list[str] = Field(default_factory=list)
    average_fade_in_time: float
    average_fade_out_time: float
    follow_cues_count: int


class BulkCueUpdateResult(CueLightModel):
    updated_cues: list[CueSummary] = Field(default_factory=list)
    summary: BulkCueUpdateSummary
    message: str


class CueListDeletion(CueLightModel):
    cue_list: CueListSummary
    success: bool
    message: str


# =============================================================================
# Playback
# =============================================================================


class CueRef(CueLightModel):
    number: float
    name: str


class CuePosition(CueLightModel):
    """A cue within a playing list; ``index`` is 1-based for display."""

    index: int
    number: float
    name: str
    scene: str
    fade_in_time: float | None = None
    fade_out_time: float | None = None
    follow_time: float | None = None


class PlaybackNavigation(CueLightModel):
    can_go_previous: bool
    can_go_next: bool
    previous_cue: CueRef | None = None
    next_cue: CueRef | None = None


class PlaybackResult(CueLightModel):
    """Outcome of a playback command."""

    success: bool
    cue_list: CueListSummary | None = None
    current_cue: CuePosition | None = None
    fade_time: float | None = None
    last_played_cue: CueRef | None = None
    message: str


class PlaybackState(CueLightModel):
    """Playback status as reported to the operator."""

    is_playing: bool
    cue_list: CueListSummary | None = None
    current_cue: CuePosition | None = None
    navigation: PlaybackNavigation | None = None
    started_at: str | None = None
    message: str | None = None
