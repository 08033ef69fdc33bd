"""Cue sequence synthesis, analysis, editing and playback."""

from cuelight.core.cues.analyzer import CueStructureAnalyzer, analyze_numbering
from cuelight.core.cues.models import (
    ActCuesResult,
    BulkCueUpdateResult,
    CueFilter,
    CueListDetails,
    CueListSummary,
    CueSequenceResult,
    CueStructureReport,
    CueSummary,
    OptimizationStrategy,
    PlaybackResult,
    PlaybackState,
    TimingOptimizationReport,
)
from cuelight.core.cues.operations import CueListOperations, insertion_cue_number
from cuelight.core.cues.optimizer import CueTimingOptimizer
from cuelight.core.cues.playback import PlaybackController, PlaybackSession
from cuelight.core.cues.synthesizer import CueSequenceSynthesizer, resolve_scene_reference

__all__ = [
    "ActCuesResult",
    "BulkCueUpdateResult",
    "CueFilter",
    "CueListDetails",
    "CueListOperations",
    "CueListSummary",
    "CueSequenceResult",
    "CueSequenceSynthesizer",
    "CueStructureAnalyzer",
    "CueStructureReport",
    "CueSummary",
    "CueTimingOptimizer",
    "OptimizationStrategy",
    "PlaybackController",
    "PlaybackResult",
    "PlaybackSession",
    "PlaybackState",
    "TimingOptimizationReport",
    "analyze_numbering",
    "insertion_cue_number",
    "resolve_scene_reference",
]
