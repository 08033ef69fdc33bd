"""Read-only structure analysis of cue lists."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from cuelight.core.backend import BackendClient
from cuelight.core.cues.models import (
    CuePatterns,
    CueStatistics,
    CueStructure,
    CueStructureReport,
    FadeTimingAnalysis,
    FollowStructure,
    NumberingAnalysis,
    NumberRange,
    SceneTransition,
    SceneUsage,
    SceneUsageAnalysis,
    StructureRecommendations,
)
from cuelight.core.errors import NotFoundError, external_failure
from cuelight.core.models import Cue, CueList, Project, Scene

logger = logging.getLogger(__name__)

MANUAL_ADVANCE_SECONDS = 5
FAST_FADE_SECONDS = 0.5

TIMING_PATTERNS = [
    "Standard 3-second fades",
    "Quick blackouts at 1 second",
    "Slow mood transitions at 5+ seconds",
]


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; 0 for no values."""
    values = list(values)
    return sum(values) / len(values) if values else 0.0


def estimate_sequence_duration(cues: Iterable[Cue]) -> float:
    """Runtime estimate: each cue's fade-in plus its follow time, or 5s if manual."""
    return sum(c.fade_in_time + (c.follow_time or MANUAL_ADVANCE_SECONDS) for c in cues)


def _range(values: Sequence[float]) -> NumberRange:
    return NumberRange(min=min(values), max=max(values)) if values else NumberRange()


# =============================================================================
# Numbering
# =============================================================================


def is_sequential(numbers: Sequence[float]) -> bool:
    return all(b == a + 1 for a, b in zip(numbers, numbers[1:]))


def find_gaps(numbers: Sequence[float]) -> list[float]:
    """First missing number after each step larger than 1."""
    return [a + 1 for a, b in zip(numbers, numbers[1:]) if b - a > 1]


def find_duplicates(numbers: Sequence[float]) -> list[float]:
    """Every repeat occurrence (a number seen three times appears twice)."""
    seen: set[float] = set()
    duplicates = []
    for n in numbers:
        if n in seen:
            duplicates.append(n)
        seen.add(n)
    return duplicates


def number_format(numbers: Sequence[float]) -> str:
    if any(n % 1 != 0 for n in numbers):
        return "Mixed integer and decimal"
    return "Integer only"


def analyze_numbering(cues: Sequence[Cue]) -> NumberingAnalysis:
    numbers = sorted(c.cue_number for c in cues)
    return NumberingAnalysis(
        sequential=is_sequential(numbers),
        gaps=find_gaps(numbers),
        duplicates=find_duplicates(numbers),
        format=number_format(numbers),
    )


# =============================================================================
# Timing and follow structure
# =============================================================================


def common_fade_times(cues: Sequence[Cue]) -> list[float]:
    """Fade values (in and out pooled) used more than twice, ascending."""
    counts = Counter([c.fade_in_time for c in cues] + [c.fade_out_time for c in cues])
    return sorted(t for t, n in counts.items() if n > 2)


def follow_chains(cues: Sequence[Cue]) -> list[list[float]]:
    """Runs of two or more consecutive auto-follow cues, as cue numbers."""
    chains: list[list[float]] = []
    current: list[float] = []
    for cue in cues:
        if cue.is_auto_follow:
            current.append(cue.cue_number)
            continue
        if len(current) > 1:
            chains.append(current)
        current = []
    if len(current) > 1:
        chains.append(current)
    return chains


def analyze_follow_structure(cues: Sequence[Cue]) -> FollowStructure:
    auto = [c for c in cues if c.is_auto_follow]
    return FollowStructure(
        total_follow_cues=len(auto),
        manual_cues=len(cues) - len(auto),
        average_follow_time=average(c.follow_time or 0 for c in auto),
        follow_chains=follow_chains(cues),
    )


def scene_transitions(cues: Sequence[Cue]) -> list[SceneTransition]:
    return [
        SceneTransition(
            from_scene=a.scene.name,
            to_scene=b.scene.name,
            fade_time=b.fade_in_time,
            gap=b.cue_number - a.cue_number,
        )
        for a, b in zip(cues, cues[1:])
    ]


def average_cue_spacing(cues: Sequence[Cue]) -> float:
    numbers = sorted(c.cue_number for c in cues)
    return average(b - a for a, b in zip(numbers, numbers[1:]))


def potential_issues(cues: Sequence[Cue]) -> list[str]:
    issues = []
    if any(c.fade_in_time < FAST_FADE_SECONDS for c in cues):
        issues.append("Some fade times may be too fast for smooth execution")
    numbers = [c.cue_number for c in cues]
    if numbers and max(numbers) - min(numbers) > len(cues) * 2:
        issues.append("Large gaps in cue numbering may cause confusion")
    return issues


def analyze_scene_usage(cues: Sequence[Cue], scenes: Sequence[Scene]) -> SceneUsageAnalysis:
    counts = Counter(c.scene.id for c in cues)
    usage = [
        SceneUsage(scene_id=s.id, scene_name=s.name, usage_count=counts.get(s.id, 0))
        for s in scenes
    ]
    return SceneUsageAnalysis(
        total_scenes=len(scenes),
        used_scenes=sum(1 for u in usage if u.usage_count > 0),
        unused_scenes=[u for u in usage if u.usage_count == 0],
        most_used_scene=max(usage, key=lambda u: u.usage_count) if usage else None,
    )


# =============================================================================
# Analyzer
# =============================================================================


class CueStructureAnalyzer:
    """Computes a structure report for a cue list.

    Pure with respect to its inputs; ``analyze_cue_structure`` does the
    backend loading.
    """

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    def analyze(
        self,
        cue_list: CueList,
        scenes: Sequence[Scene],
        include_recommendations: bool = True,
    ) -> CueStructureReport:
        """Analyze numbering, timing, scene usage and follow structure.

        Sequence-based measures (transitions, follow chains) use the cue
        list's own order; numbering measures use sorted cue numbers.
        """
        cues = cue_list.cues
        auto_count = sum(1 for c in cues if c.is_auto_follow)
        common = common_fade_times(cues)

        report = CueStructureReport(
            cue_list_id=cue_list.id,
            name=cue_list.name,
            structure=CueStructure(
                total_cues=len(cues),
                cue_numbering=analyze_numbering(cues),
                fade_timings=FadeTimingAnalysis(
                    fade_in_range=_range([c.fade_in_time for c in cues]),
                    fade_out_range=_range([c.fade_out_time for c in cues]),
                    common_times=common,
                ),
                scene_usage=analyze_scene_usage(cues, scenes),
                follow_structure=analyze_follow_structure(cues),
            ),
            patterns=CuePatterns(
                common_fade_times=common,
                timing_patterns=list(TIMING_PATTERNS),
                scene_transitions=scene_transitions(cues),
            ),
            potential_issues=potential_issues(cues),
            statistics=CueStatistics(
                estimated_runtime=estimate_sequence_duration(cues),
                manual_cues=len(cues) - auto_count,
                auto_cues=auto_count,
                average_cue_spacing=average_cue_spacing(cues),
            ),
        )

        if include_recommendations:
            report.recommendations = StructureRecommendations(
                numbering=[
                    "Consider using decimal increments (1.0, 1.5, 2.0) "
                    "for easier insertion of new cues"
                ],
                timing=["Standardize common fade times to reduce operator confusion"],
                structure=["Group related cues with consistent numbering patterns"],
                safety=["Ensure all blackout cues can be executed manually in emergency"],
            )
        return report

    async def analyze_cue_structure(
        self, project_id: str, cue_list_id: str, include_recommendations: bool = True
    ) -> CueStructureReport:
        """Load a project's cue list and analyze it.

        Raises:
            NotFoundError: If the project or cue list does not exist
            OperationFailedError: If the backend fails
        """
        with external_failure("analyze cue structure"):
            project, cue_list = await load_project_cue_list(self.backend, project_id, cue_list_id)
        logger.debug(f"Analyzing cue list {cue_list_id} ({len(cue_list.cues)} cues)")
        return self.analyze(cue_list, project.scenes, include_recommendations)


async def load_project_cue_list(
    backend: BackendClient, project_id: str, cue_list_id: str
) -> tuple[Project, CueList]:
    """Fetch a project and one of its cue lists.

    Raises:
        NotFoundError: If either does not exist
    """
    project = await backend.get_project(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    for cue_list in project.cue_lists:
        if cue_list.id == cue_list_id:
            return project, cue_list
    raise NotFoundError("Cue list", cue_list_id)
