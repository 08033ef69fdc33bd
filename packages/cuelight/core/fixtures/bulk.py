"""Batch mutations over cues and fixture instances.

Bulk fixture creation is best-effort: every item is attempted, failures are
collected with the index and identifying fields of the offending spec, and
the call only raises when the batch cannot start at all (the definition
list cannot be fetched).

Items are created strictly in order. Each universe's ``ChannelOccupancy``
is seeded from the project once and then folded forward with every fixture
created, so an auto-assigned item never lands on a block taken earlier in
the same batch.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from cuelight.core.backend import BackendClient
from cuelight.core.cues.analyzer import average
from cuelight.core.cues.models import BulkCueUpdateResult, BulkCueUpdateSummary, CueSummary
from cuelight.core.errors import (
    ExternalServiceError,
    InputValidationError,
    NotFoundError,
    external_failure,
)
from cuelight.core.fixtures.models import (
    BulkCreateResult,
    BulkDeleteOutcome,
    BulkFixtureUpdateResult,
    ChannelSummary,
    CreatedFixture,
    FailedFixture,
    FailedFixtureInput,
    FixtureDeletion,
)
from cuelight.core.fixtures.occupancy import ChannelOccupancy
from cuelight.core.lighting.channel_heuristics import build_definition
from cuelight.core.models import (
    UNSET,
    FixtureDefinition,
    FixtureMode,
    FixtureSpec,
    FixtureUpdate,
)

logger = logging.getLogger(__name__)

_MODE_CHANNELS_RE = re.compile(r"\d+")

CONFIRM_DELETE_MESSAGE = "Delete operation requires confirmDelete: true for safety"


def select_mode(definition: FixtureDefinition, requested: str | None) -> FixtureMode | None:
    """Pick the definition mode matching ``requested``.

    Modes match when either name contains the other (case-insensitive).
    Failing that, the first number in ``requested`` is compared against each
    mode's channel count, so "8ch" finds an 8-channel mode.

    Returns:
        Matching mode, or None when nothing was requested or the definition
        has no modes

    Raises:
        InputValidationError: If a mode was requested and none matches
    """
    if not requested or not definition.modes:
        return None

    wanted = requested.lower()
    for mode in definition.modes:
        name = mode.name.lower()
        if wanted in name or name in wanted:
            return mode

    digits = _MODE_CHANNELS_RE.search(requested)
    if digits:
        count = int(digits.group())
        for mode in definition.modes:
            if mode.channel_count == count:
                return mode

    available = ", ".join(f'"{m.name}" ({m.channel_count} channels)' for m in definition.modes)
    raise InputValidationError(f'Invalid mode "{requested}". Available modes: {available}')


def _creation_message(success_count: int, failure_count: int) -> str:
    if failure_count == 0:
        return f"Successfully created all {success_count} fixture(s)"
    if success_count == 0:
        return f"All {failure_count} fixtures failed to create"
    return f"Partially successful: {success_count} created, {failure_count} failed"


class BulkOperationCoordinator:
    """Bulk create, update and delete over the backend.

    Args:
        backend: Persistence backend
    """

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    # =========================================================================
    # Cues
    # =========================================================================

    async def bulk_update_cues(
        self,
        cue_ids: Sequence[str],
        fade_in_time: float | None = None,
        fade_out_time: float | None = None,
        follow_time: float | None = UNSET,
        easing_type: str | None = None,
    ) -> BulkCueUpdateResult:
        """Apply the same timing fields to many cues in one backend call.

        ``follow_time=None`` clears the follow time on every cue; leaving it
        out keeps each cue's current value.

        Raises:
            InputValidationError: If ``cue_ids`` is empty or no field is given
        """
        if not cue_ids:
            raise InputValidationError("No cue IDs provided for bulk update")

        fields: dict[str, Any] = {}
        if fade_in_time is not None:
            fields["fadeInTime"] = fade_in_time
        if fade_out_time is not None:
            fields["fadeOutTime"] = fade_out_time
        if follow_time is not UNSET:
            fields["followTime"] = follow_time
        if easing_type is not None:
            fields["easingType"] = easing_type
        if not fields:
            raise InputValidationError(
                "No update fields provided. At least one of fadeInTime, fadeOutTime, "
                "followTime, or easingType must be specified."
            )

        with external_failure("bulk update cues"):
            updated = await self.backend.bulk_update_cues({"cueIds": list(cue_ids), **fields})

        applied = list(fields)
        logger.info(f"Bulk updated {len(updated)} cues: {', '.join(applied)}")
        return BulkCueUpdateResult(
            updated_cues=[CueSummary.from_cue(c) for c in updated],
            summary=BulkCueUpdateSummary(
                total_updated=len(updated),
                updates_applied=applied,
                average_fade_in_time=(
                    fade_in_time
                    if fade_in_time is not None
                    else average(c.fade_in_time for c in updated)
                ),
                average_fade_out_time=(
                    fade_out_time
                    if fade_out_time is not None
                    else average(c.fade_out_time for c in updated)
                ),
                follow_cues_count=sum(1 for c in updated if c.has_follow_time),
            ),
            message=f"Successfully updated {len(updated)} cues with: {', '.join(applied)}",
        )

    # =========================================================================
    # Fixtures
    # =========================================================================

    async def bulk_update_fixtures(
        self, updates: Sequence[FixtureUpdate]
    ) -> BulkFixtureUpdateResult:
        """Update many fixture instances in one backend call.

        Raises:
            InputValidationError: If ``updates`` is empty
        """
        if not updates:
            raise InputValidationError("No fixture updates provided")

        payload = [u.changed_fields() for u in updates]
        with external_failure("bulk update fixtures"):
            fixtures = await self.backend.bulk_update_fixtures(payload)

        return BulkFixtureUpdateResult(
            updated_count=len(fixtures),
            fixtures=fixtures,
            message=f"Successfully updated {len(fixtures)} fixtures",
        )

    async def bulk_create_fixtures(self, specs: Sequence[FixtureSpec]) -> BulkCreateResult:
        """Create fixture instances one by one, collecting per-item failures.

        Args:
            specs: Fixtures to create, in order

        Returns:
            Result with every success and failure; never raises for a
            single item

        Raises:
            OperationFailedError: If the fixture definitions cannot be loaded
        """
        with external_failure("bulk create fixtures"):
            definitions = await self.backend.get_fixture_definitions()

        occupancy: dict[tuple[str, int], ChannelOccupancy] = {}
        succeeded: list[CreatedFixture] = []
        failed: list[FailedFixture] = []

        for index, spec in enumerate(specs):
            try:
                created, occupancy = await self._create_one(spec, definitions, occupancy)
            except Exception as e:
                logger.warning(f"Bulk create item {index} ({spec.name}) failed: {e}")
                failed.append(
                    FailedFixture(
                        index=index,
                        fixture=FailedFixtureInput(
                            name=spec.name,
                            manufacturer=spec.manufacturer,
                            model=spec.model,
                            mode=spec.mode,
                            universe=spec.universe,
                            start_channel=spec.start_channel,
                        ),
                        error=str(e),
                    )
                )
                continue
            succeeded.append(created)

        channel_summary = None
        if succeeded:
            channel_summary = ChannelSummary(
                total_channels_used=sum(f.channel_count for f in succeeded),
                universes=sorted({f.universe for f in succeeded}),
            )

        logger.info(
            f"Bulk create finished: {len(succeeded)} created, {len(failed)} failed"
        )
        return BulkCreateResult(
            total_requested=len(specs),
            success_count=len(succeeded),
            failure_count=len(failed),
            succeeded=succeeded,
            failed=failed,
            message=_creation_message(len(succeeded), len(failed)),
            channel_summary=channel_summary,
        )

    async def delete_fixture_instance(
        self, fixture_id: str, confirm_delete: bool
    ) -> FixtureDeletion:
        """Delete one fixture instance.

        Raises:
            InputValidationError: If ``confirm_delete`` is not True (checked
                before any backend call)
            NotFoundError: If the fixture does not exist
            OperationFailedError: If the backend refuses the delete
        """
        if confirm_delete is not True:
            raise InputValidationError(CONFIRM_DELETE_MESSAGE)

        with external_failure("delete fixture instance"):
            fixture = await self.backend.get_fixture_instance(fixture_id)
            if fixture is None:
                raise NotFoundError("Fixture", fixture_id)
            if not await self.backend.delete_fixture_instance(fixture_id):
                raise ExternalServiceError(f"Backend did not delete fixture {fixture_id}")

        logger.info(f"Deleted fixture {fixture_id} ({fixture.name})")
        return FixtureDeletion(
            fixture_id=fixture.id,
            name=fixture.name,
            universe=fixture.universe,
            start_channel=fixture.start_channel,
            message=f'Fixture "{fixture.name}" deleted successfully',
        )

    async def bulk_delete_fixtures(
        self, fixture_ids: Sequence[str], confirm_delete: bool
    ) -> BulkDeleteOutcome:
        """Delete many fixture instances in one backend call.

        Raises:
            InputValidationError: If ``confirm_delete`` is not True or no ids
                are given (checked before any backend call)
        """
        if confirm_delete is not True:
            raise InputValidationError(CONFIRM_DELETE_MESSAGE)
        if not fixture_ids:
            raise InputValidationError("No fixture IDs provided for bulk deletion")

        with external_failure("bulk delete fixtures"):
            result = await self.backend.bulk_delete_fixtures(list(fixture_ids))

        deleted = set(result.deleted_ids)
        failed_ids = [i for i in fixture_ids if i not in deleted]
        message = (
            f"Successfully deleted {result.deleted_count} fixtures"
            if not failed_ids
            else f"Deleted {result.deleted_count} fixtures, {len(failed_ids)} failed"
        )
        return BulkDeleteOutcome(
            success=not failed_ids,
            deleted_count=result.deleted_count,
            failed_ids=failed_ids,
            message=message,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _create_one(
        self,
        spec: FixtureSpec,
        definitions: list[FixtureDefinition],
        occupancy: dict[tuple[str, int], ChannelOccupancy],
    ) -> tuple[CreatedFixture, dict[tuple[str, int], ChannelOccupancy]]:
        definition = await self._definition_for(spec, definitions)
        mode = select_mode(definition, spec.mode)
        count = (mode.channel_count if mode else 0) or len(definition.channels)

        key = (spec.project_id, spec.universe)
        current = occupancy.get(key)
        if current is None:
            current = await self._seed_occupancy(spec.project_id, spec.universe)

        if spec.start_channel is None:
            start = current.allocate(count)
        else:
            start = spec.start_channel
            current.check_block(start, count)

        fields = {
            "projectId": spec.project_id,
            "name": spec.name,
            "description": spec.description,
            "definitionId": definition.id,
            "modeId": mode.id if mode else None,
            "universe": spec.universe,
            "startChannel": start,
            "tags": spec.tags,
        }
        with external_failure("create fixture instance"):
            fixture = await self.backend.create_fixture_instance(fields)

        placed = fixture.channel_count or count
        folded = current.with_block(fixture.name, fixture.start_channel, placed)
        logger.debug(
            f"Created fixture {fixture.id} at {spec.universe}/{fixture.start_channel} "
            f"({placed} channels)"
        )
        return CreatedFixture.from_instance(fixture), {**occupancy, key: folded}

    async def _definition_for(
        self, spec: FixtureSpec, definitions: list[FixtureDefinition]
    ) -> FixtureDefinition:
        for definition in definitions:
            if definition.matches(spec.manufacturer, spec.model):
                return definition

        template = build_definition(spec.manufacturer, spec.model, spec.mode)
        with external_failure("create fixture definition"):
            created = await self.backend.create_fixture_definition(
                template.to_wire(exclude_none=True, exclude={"id", "is_built_in"})
            )
        logger.info(
            f"Created fixture definition {spec.manufacturer} {spec.model} "
            f"({len(created.channels)} channels)"
        )
        definitions.append(created)
        return created

    async def _seed_occupancy(self, project_id: str, universe: int) -> ChannelOccupancy:
        with external_failure("load project fixtures"):
            project = await self.backend.get_project(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return ChannelOccupancy.from_fixtures(universe, project.fixtures)
