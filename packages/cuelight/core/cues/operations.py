"""Cue and cue-list editing operations."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from cuelight.core.backend import BackendClient
from cuelight.core.cues.analyzer import average, estimate_sequence_duration
from cuelight.core.cues.models import (
    CueFilter,
    CueListDeletion,
    CueListDetails,
    CueListStatistics,
    CueListSummary,
    CueSummary,
    NumberRange,
)
from cuelight.core.errors import InputValidationError, NotFoundError, external_failure
from cuelight.core.models import UNSET, Cue

logger = logging.getLogger(__name__)

INSERT_OFFSET = 0.5

SORT_KEYS = {
    "cueNumber": lambda c: c.cue_number,
    "name": lambda c: c.name.casefold(),
    "sceneName": lambda c: c.scene.name.casefold(),
}


def insertion_cue_number(
    cues: Sequence[Cue], reference_cue_number: float, position: str
) -> float | None:
    """Cue number that lands just before or after a reference cue.

    Midpoint with the neighbouring cue, or ``reference -/+ 0.5`` at either
    end of the list.

    Returns:
        New cue number, or None when no cue has ``reference_cue_number``
    """
    ordered = sorted(cues, key=lambda c: c.cue_number)
    numbers = [c.cue_number for c in ordered]
    if reference_cue_number not in numbers:
        return None
    index = numbers.index(reference_cue_number)

    if position == "before":
        if index == 0:
            return reference_cue_number - INSERT_OFFSET
        return (numbers[index - 1] + reference_cue_number) / 2

    if index == len(numbers) - 1:
        return reference_cue_number + INSERT_OFFSET
    return (reference_cue_number + numbers[index + 1]) / 2


def filter_cues(cues: Sequence[Cue], filters: CueFilter) -> list[Cue]:
    result = list(cues)
    if filters.cue_number_range is not None:
        low, high = filters.cue_number_range.min, filters.cue_number_range.max
        result = [c for c in result if low <= c.cue_number <= high]
    if filters.name_contains:
        needle = filters.name_contains.lower()
        result = [c for c in result if needle in c.name.lower()]
    if filters.scene_name_contains:
        needle = filters.scene_name_contains.lower()
        result = [c for c in result if needle in c.scene.name.lower()]
    if filters.has_follow_time is not None:
        result = [c for c in result if c.has_follow_time == filters.has_follow_time]
    if filters.fade_time_range is not None:
        low, high = filters.fade_time_range.min, filters.fade_time_range.max
        result = [c for c in result if low <= c.fade_in_time <= high]
    return result


class CueListOperations:
    """Editing operations over cue lists and their cues.

    Args:
        backend: Persistence backend
    """

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def update_cue_list(
        self, cue_list_id: str, name: str | None = None, description: str | None = None
    ) -> CueListSummary:
        """Rename or re-describe a cue list.

        Raises:
            InputValidationError: If neither field is given
        """
        if not name and not description:
            raise InputValidationError("At least one field (name or description) must be provided")

        fields = {k: v for k, v in (("name", name), ("description", description)) if v}
        with external_failure("update cue list"):
            updated = await self.backend.update_cue_list(cue_list_id, fields)
        return CueListSummary.from_cue_list(updated)

    async def add_cue_to_cue_list(
        self,
        cue_list_id: str,
        name: str,
        cue_number: float,
        scene_id: str,
        fade_in_time: float = 3.0,
        fade_out_time: float = 3.0,
        follow_time: float | None = None,
        notes: str | None = None,
        position: str | None = None,
        reference_cue_number: float | None = None,
    ) -> CueSummary:
        """Add a cue, optionally placed before/after an existing cue.

        With ``position`` ("before" or "after") and ``reference_cue_number``,
        the cue number is derived from the neighbours and ``cue_number`` is
        only used when the reference cue does not exist.
        """
        if position is not None and position not in ("before", "after"):
            raise InputValidationError(f"position must be 'before' or 'after', got '{position}'")

        with external_failure("add cue to list"):
            final_number = cue_number
            if position and reference_cue_number is not None:
                cue_list = await self.backend.get_cue_list(cue_list_id)
                if cue_list is not None:
                    inserted = insertion_cue_number(
                        cue_list.cues, reference_cue_number, position
                    )
                    if inserted is not None:
                        final_number = inserted

            cue = await self.backend.create_cue(
                {
                    "name": name,
                    "cueNumber": final_number,
                    "cueListId": cue_list_id,
                    "sceneId": scene_id,
                    "fadeInTime": fade_in_time,
                    "fadeOutTime": fade_out_time,
                    "followTime": follow_time,
                    "notes": notes,
                }
            )
        logger.debug(f"Added cue {cue.id} at {final_number} to cue list {cue_list_id}")
        return CueSummary.from_cue(cue)

    async def remove_cue(self, cue_id: str) -> bool:
        with external_failure("remove cue"):
            return await self.backend.delete_cue(cue_id)

    async def update_cue(
        self,
        cue_id: str,
        *,
        name: str | None = None,
        cue_number: float | None = None,
        scene_id: str | None = None,
        fade_in_time: float | None = None,
        fade_out_time: float | None = None,
        follow_time: float | None = UNSET,
        notes: str | None = None,
    ) -> CueSummary:
        """Update fields of one cue.

        ``follow_time=None`` clears the follow time (manual advance); leaving
        it out keeps the current value.

        Raises:
            InputValidationError: If no field is given
        """
        fields: dict[str, Any] = {
            key: value
            for key, value in (
                ("name", name),
                ("cueNumber", cue_number),
                ("sceneId", scene_id),
                ("fadeInTime", fade_in_time),
                ("fadeOutTime", fade_out_time),
                ("notes", notes),
            )
            if value is not None
        }
        if follow_time is not UNSET:
            fields["followTime"] = follow_time
        if not fields:
            raise InputValidationError("No update fields provided for cue update")

        with external_failure("update cue"):
            cue = await self.backend.update_cue(cue_id, fields)
        return CueSummary.from_cue(cue)

    async def reorder_cues(
        self, cue_list_id: str, reordering: Sequence[tuple[str, float]]
    ) -> list[CueSummary]:
        """Assign new cue numbers; the updates are issued concurrently.

        Args:
            cue_list_id: Cue list being reordered (logging only)
            reordering: ``(cue_id, new_cue_number)`` pairs
        """
        if not reordering:
            raise InputValidationError("No cues provided for reordering")

        with external_failure("reorder cues"):
            updated = await asyncio.gather(
                *(
                    self.backend.update_cue(cue_id, {"cueNumber": number})
                    for cue_id, number in reordering
                )
            )
        logger.debug(f"Reordered {len(updated)} cues in cue list {cue_list_id}")
        return [CueSummary.from_cue(c) for c in updated]

    async def get_cue_list_details(
        self,
        cue_list_id: str,
        sort_by: str = "cueNumber",
        filters: CueFilter | None = None,
    ) -> CueListDetails:
        """Filtered, sorted view of a cue list with statistics and lookups.

        Args:
            cue_list_id: Cue list id
            sort_by: "cueNumber", "name" or "sceneName"
            filters: Optional cue filters

        Raises:
            InputValidationError: If ``sort_by`` is unknown
            NotFoundError: If the cue list does not exist
        """
        if sort_by not in SORT_KEYS:
            raise InputValidationError(
                f"Unknown sort key '{sort_by}'. Expected one of: {', '.join(SORT_KEYS)}"
            )

        with external_failure("get cue list details"):
            cue_list = await self.backend.get_cue_list(cue_list_id)
        if cue_list is None:
            raise NotFoundError("Cue list", cue_list_id)

        filters = filters or CueFilter()
        cues = sorted(filter_cues(cue_list.cues, filters), key=SORT_KEYS[sort_by])
        summaries = [CueSummary.from_cue(c) for c in cues]

        by_scene_name: dict[str, list[CueSummary]] = defaultdict(list)
        by_scene_id: dict[str, list[CueSummary]] = defaultdict(list)
        for s in summaries:
            by_scene_name[s.scene_name.lower()].append(s)
            by_scene_id[s.scene_id].append(s)

        numbers = [c.cue_number for c in cues]
        return CueListDetails(
            cue_list=CueListSummary.from_cue_list(cue_list),
            cues=summaries,
            statistics=CueListStatistics(
                total_cues=len(cues),
                cue_number_range=(
                    NumberRange(min=min(numbers), max=max(numbers)) if numbers else None
                ),
                average_fade_in_time=average(c.fade_in_time for c in cues),
                average_fade_out_time=average(c.fade_out_time for c in cues),
                follow_cues=sum(1 for c in cues if c.has_follow_time),
                unique_scenes=len({c.scene.id for c in cues}),
                estimated_total_time=estimate_sequence_duration(cues),
            ),
            by_cue_number={f"{s.cue_number:g}": s for s in summaries},
            by_name={s.name.lower(): s for s in summaries},
            by_scene_name=dict(by_scene_name),
            by_scene_id=dict(by_scene_id),
            sorted_by=sort_by,
            filters_applied=filters.applied_count(),
            total_before_filtering=len(cue_list.cues),
        )

    async def delete_cue_list(self, cue_list_id: str, confirm_delete: bool) -> CueListDeletion:
        """Delete a cue list and its cues.

        Raises:
            InputValidationError: If ``confirm_delete`` is not True (checked
                before any backend call)
            NotFoundError: If the cue list does not exist
        """
        if confirm_delete is not True:
            raise InputValidationError("confirmDelete must be true to delete a cue list")

        with external_failure("delete cue list"):
            cue_list = await self.backend.get_cue_list(cue_list_id)
            if cue_list is None:
                raise NotFoundError("Cue list", cue_list_id)
            success = await self.backend.delete_cue_list(cue_list_id)

        if success:
            logger.info(f"Deleted cue list {cue_list_id} ({len(cue_list.cues)} cues)")
        return CueListDeletion(
            cue_list=CueListSummary.from_cue_list(cue_list),
            success=success,
            message="Cue list deleted successfully" if success else "Failed to delete cue list",
        )
