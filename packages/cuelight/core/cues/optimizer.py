"""Timing-strategy reports for cue lists.

The optimizer describes what a strategy would change; it never writes to
the backend.
"""

from __future__ import annotations

import logging

from cuelight.core.backend import BackendClient
from cuelight.core.cues.analyzer import average, load_project_cue_list
from cuelight.core.cues.models import OptimizationStrategy, OriginalTiming, TimingOptimizationReport
from cuelight.core.errors import InputValidationError, external_failure

logger = logging.getLogger(__name__)

# strategy -> (changes, estimated improvement)
STRATEGY_NOTES: dict[OptimizationStrategy, tuple[list[str], str]] = {
    OptimizationStrategy.SMOOTH_TRANSITIONS: (
        [
            "Standardized fade times for consistency",
            "Added buffer time between manual cues",
        ],
        "Smoother visual transitions",
    ),
    OptimizationStrategy.DRAMATIC_TIMING: (
        [
            "Shortened fade times for dramatic moments",
            "Added follow cues for automatic sequences",
        ],
        "Enhanced dramatic impact",
    ),
    OptimizationStrategy.TECHNICAL_PRECISION: (
        [
            "Standardized cue numbering increments",
            "Consistent fade time patterns",
        ],
        "Easier operation and fewer mistakes",
    ),
    OptimizationStrategy.ENERGY_CONSCIOUS: (
        [
            "Longer fade times to reduce power spikes",
            "Staggered fixture activation",
        ],
        "Reduced power consumption peaks",
    ),
}


def parse_strategy(strategy: str | OptimizationStrategy) -> OptimizationStrategy:
    try:
        return OptimizationStrategy(strategy)
    except ValueError:
        valid = ", ".join(s.value for s in OptimizationStrategy)
        raise InputValidationError(
            f"Unknown optimization strategy '{strategy}'. Expected one of: {valid}"
        ) from None


class CueTimingOptimizer:
    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def optimize_cue_timing(
        self,
        project_id: str,
        cue_list_id: str,
        strategy: str | OptimizationStrategy = OptimizationStrategy.SMOOTH_TRANSITIONS,
    ) -> TimingOptimizationReport:
        """Report how ``strategy`` would adjust a cue list's timing.

        Raises:
            InputValidationError: If the strategy is unknown
            NotFoundError: If the project or cue list does not exist
            OperationFailedError: If the backend fails
        """
        selected = parse_strategy(strategy)

        with external_failure("optimize cue timing"):
            _, cue_list = await load_project_cue_list(self.backend, project_id, cue_list_id)

        cues = cue_list.cues
        changes, improvement = STRATEGY_NOTES[selected]
        logger.debug(f"Timing report for {cue_list_id}: strategy={selected.value}, cues={len(cues)}")

        return TimingOptimizationReport(
            cue_list_id=cue_list_id,
            strategy=selected,
            original_timing=OriginalTiming(
                total_cues=len(cues),
                average_fade_in=average(c.fade_in_time for c in cues),
                average_fade_out=average(c.fade_out_time for c in cues),
                follow_cues=sum(1 for c in cues if c.has_follow_time),
            ),
            changes=list(changes),
            reasoning=f"Applied {selected.value} optimization strategy",
            estimated_improvement=improvement,
        )
