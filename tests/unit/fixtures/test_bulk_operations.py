"""Tests for BulkOperationCoordinator."""

from __future__ import annotations

import pytest

from cuelight.core.backend import BackendError, BulkDeleteResult
from cuelight.core.errors import InputValidationError, NotFoundError, OperationFailedError
from cuelight.core.fixtures import BulkOperationCoordinator, select_mode
from cuelight.core.fixtures.bulk import CONFIRM_DELETE_MESSAGE
from cuelight.core.models import (
    Channel,
    FixtureDefinition,
    FixtureInstance,
    FixtureMode,
    FixtureSpec,
    FixtureUpdate,
)

MODE_COUNTS = {"m3": 3, "m4": 4, "m7": 7}


@pytest.fixture
def coordinator(mock_backend) -> BulkOperationCoordinator:
    return BulkOperationCoordinator(mock_backend)


@pytest.fixture
def slimpar() -> FixtureDefinition:
    return FixtureDefinition(
        id="def-1",
        manufacturer="Chauvet",
        model="SlimPAR 56",
        channels=[Channel(offset=i) for i in range(7)],
        modes=[
            FixtureMode(id="m3", name="3ch", channel_count=3),
            FixtureMode(id="m7", name="7ch", channel_count=7),
        ],
    )


@pytest.fixture
def patched_backend(mock_backend, sample_project, slimpar):
    """Backend with one definition, project p1, and echoing fixture creation."""

    def _create(fields: dict) -> FixtureInstance:
        return FixtureInstance(
            id=f"fx-{fields['name']}",
            name=fields["name"],
            universe=fields["universe"],
            start_channel=fields["startChannel"],
            channel_count=MODE_COUNTS.get(fields["modeId"], 0),
            tags=fields["tags"],
        )

    mock_backend.get_fixture_definitions.return_value = [slimpar]
    mock_backend.get_project.return_value = sample_project
    mock_backend.create_fixture_instance.side_effect = _create
    return mock_backend


def _spec(name: str, **kwargs) -> FixtureSpec:
    defaults = {"project_id": "p1", "manufacturer": "Chauvet", "model": "SlimPAR 56"}
    return FixtureSpec(name=name, **{**defaults, **kwargs})


def _start_channels(backend) -> list[int]:
    return [c.args[0]["startChannel"] for c in backend.create_fixture_instance.await_args_list]


# ============================================================================
# Mode selection
# ============================================================================


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        ("3CH", "m3"),
        ("Mode 7ch extended", "m7"),
        ("7-channel", "m7"),
        (None, None),
    ],
)
def test_select_mode(slimpar, requested, expected):
    mode = select_mode(slimpar, requested)

    assert (mode.id if mode else None) == expected


def test_select_mode_lists_available_modes(slimpar):
    with pytest.raises(InputValidationError) as exc_info:
        select_mode(slimpar, "DMX 12")

    assert str(exc_info.value) == (
        'Invalid mode "DMX 12". Available modes: "3ch" (3 channels), "7ch" (7 channels)'
    )


def test_select_mode_without_modes():
    definition = FixtureDefinition(manufacturer="Generic", model="Dimmer")

    assert select_mode(definition, "anything") is None


# ============================================================================
# Bulk create
# ============================================================================


@pytest.mark.asyncio
async def test_auto_allocation_folds_across_items(coordinator, patched_backend):
    """Test that later items skip blocks taken earlier in the batch."""
    result = await coordinator.bulk_create_fixtures(
        [
            _spec("Wash L", mode="3ch"),
            _spec("Wash R", mode="7-channel"),
            _spec("Special", mode="3ch", start_channel=100),
        ]
    )

    assert _start_channels(patched_backend) == [5, 8, 100]
    assert result.success_count == 3
    assert result.failure_count == 0
    assert result.message == "Successfully created all 3 fixture(s)"
    assert [f.channel_range for f in result.succeeded] == ["5-7", "8-14", "100-102"]
    assert result.channel_summary.total_channels_used == 13
    assert result.channel_summary.universes == [1]
    patched_backend.get_project.assert_awaited_once_with("p1")


@pytest.mark.asyncio
async def test_failed_item_does_not_stop_batch(coordinator, patched_backend):
    result = await coordinator.bulk_create_fixtures(
        [
            _spec("Clash", mode="3ch", start_channel=2),
            _spec("Fine", mode="3ch"),
        ]
    )

    assert result.total_requested == 2
    assert result.success_count == 1
    assert result.failure_count == 1
    assert result.message == "Partially successful: 1 created, 1 failed"

    failure = result.failed[0]
    assert failure.index == 0
    assert failure.fixture.name == "Clash"
    assert failure.fixture.start_channel == 2
    assert failure.error == (
        'Channel 2 already in use by fixture "Front Par". '
        "Cannot assign 3 channels starting at 2."
    )
    assert result.succeeded[0].start_channel == 5


@pytest.mark.asyncio
async def test_manual_placement_conflicts_with_earlier_item(coordinator, patched_backend):
    result = await coordinator.bulk_create_fixtures(
        [
            _spec("First", mode="7ch", start_channel=20),
            _spec("Second", mode="3ch", start_channel=25),
        ]
    )

    assert result.success_count == 1
    assert 'already in use by fixture "First"' in result.failed[0].error


@pytest.mark.asyncio
async def test_invalid_mode_and_backend_failure_are_collected(coordinator, patched_backend):
    patched_backend.create_fixture_instance.side_effect = BackendError(
        "createFixtureInstance", [{"message": "quota exceeded"}]
    )

    result = await coordinator.bulk_create_fixtures(
        [_spec("Odd", mode="DMX 12"), _spec("Blocked", mode="3ch")]
    )

    assert result.success_count == 0
    assert result.message == "All 2 fixtures failed to create"
    assert result.failed[0].error.startswith('Invalid mode "DMX 12"')
    assert result.failed[1].error == (
        "Failed to create fixture instance: createFixtureInstance: quota exceeded"
    )
    assert result.channel_summary is None


@pytest.mark.asyncio
async def test_missing_project_fails_item(coordinator, patched_backend):
    patched_backend.get_project.return_value = None

    result = await coordinator.bulk_create_fixtures([_spec("Orphan", project_id="p9")])

    assert result.failed[0].error == "Project with ID p9 not found"


@pytest.mark.asyncio
async def test_unknown_model_creates_definition_once(coordinator, patched_backend):
    created = FixtureDefinition(
        id="def-new",
        manufacturer="Generic",
        model="Wash",
        channels=[Channel(offset=i) for i in range(4)],
        modes=[FixtureMode(id="m4", name="RGBW", channel_count=4)],
    )
    patched_backend.create_fixture_definition.return_value = created

    result = await coordinator.bulk_create_fixtures(
        [
            _spec("Wash 1", manufacturer="Generic", model="Wash", mode="RGBW"),
            _spec("Wash 2", manufacturer="generic", model="WASH", mode="RGBW"),
        ]
    )

    patched_backend.create_fixture_definition.assert_awaited_once()
    payload = patched_backend.create_fixture_definition.await_args.args[0]
    assert payload["manufacturer"] == "Generic"
    assert "id" not in payload
    assert "isBuiltIn" not in payload
    assert payload["modes"][0]["channelCount"] == 4
    assert len(payload["channels"]) == 4

    assert _start_channels(patched_backend) == [5, 9]
    fields = patched_backend.create_fixture_instance.await_args.args[0]
    assert fields["definitionId"] == "def-new"
    assert fields["modeId"] == "m4"
    assert result.success_count == 2


@pytest.mark.asyncio
async def test_definition_fetch_failure_raises(coordinator, mock_backend):
    mock_backend.get_fixture_definitions.side_effect = BackendError(
        "fixtureDefinitions", [{"message": "timeout"}]
    )

    with pytest.raises(OperationFailedError, match="^Failed to bulk create fixtures: "):
        await coordinator.bulk_create_fixtures([_spec("Any")])


# ============================================================================
# Bulk updates
# ============================================================================


@pytest.mark.asyncio
async def test_bulk_update_cues(coordinator, mock_backend, make_cue):
    mock_backend.bulk_update_cues.return_value = [
        make_cue(1, fade_in=2, follow=None),
        make_cue(2, fade_in=2, follow=None),
    ]

    result = await coordinator.bulk_update_cues(
        ["cue-1", "cue-2"], fade_in_time=2, follow_time=None
    )

    mock_backend.bulk_update_cues.assert_awaited_once_with(
        {"cueIds": ["cue-1", "cue-2"], "fadeInTime": 2, "followTime": None}
    )
    assert result.summary.total_updated == 2
    assert result.summary.updates_applied == ["fadeInTime", "followTime"]
    assert result.summary.average_fade_in_time == 2
    assert result.summary.average_fade_out_time == 3
    assert result.summary.follow_cues_count == 0
    assert result.message == "Successfully updated 2 cues with: fadeInTime, followTime"


@pytest.mark.asyncio
async def test_bulk_update_cues_validation(coordinator, mock_backend):
    with pytest.raises(InputValidationError, match="No cue IDs provided"):
        await coordinator.bulk_update_cues([], fade_in_time=1)

    with pytest.raises(InputValidationError, match="No update fields provided"):
        await coordinator.bulk_update_cues(["cue-1"])

    mock_backend.bulk_update_cues.assert_not_awaited()


@pytest.mark.asyncio
async def test_bulk_update_fixtures(coordinator, mock_backend, rgb_par):
    mock_backend.bulk_update_fixtures.return_value = [rgb_par]

    result = await coordinator.bulk_update_fixtures(
        [FixtureUpdate(fixture_id="par-1", name="Front Par", tags=["front"])]
    )

    mock_backend.bulk_update_fixtures.assert_awaited_once_with(
        [{"fixtureId": "par-1", "name": "Front Par", "tags": ["front"]}]
    )
    assert result.updated_count == 1
    assert result.message == "Successfully updated 1 fixtures"


@pytest.mark.asyncio
async def test_bulk_update_fixtures_requires_updates(coordinator):
    with pytest.raises(InputValidationError, match="No fixture updates provided"):
        await coordinator.bulk_update_fixtures([])


# ============================================================================
# Deletion
# ============================================================================


@pytest.mark.asyncio
async def test_delete_guards_run_before_backend(coordinator, mock_backend):
    with pytest.raises(InputValidationError, match=CONFIRM_DELETE_MESSAGE):
        await coordinator.delete_fixture_instance("par-1", confirm_delete=False)
    with pytest.raises(InputValidationError, match=CONFIRM_DELETE_MESSAGE):
        await coordinator.bulk_delete_fixtures(["par-1"], confirm_delete=False)
    with pytest.raises(InputValidationError, match="No fixture IDs provided"):
        await coordinator.bulk_delete_fixtures([], confirm_delete=True)

    mock_backend.get_fixture_instance.assert_not_awaited()
    mock_backend.delete_fixture_instance.assert_not_awaited()
    mock_backend.bulk_delete_fixtures.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_fixture_instance(coordinator, mock_backend, rgb_par):
    mock_backend.get_fixture_instance.return_value = rgb_par
    mock_backend.delete_fixture_instance.return_value = True

    result = await coordinator.delete_fixture_instance("par-1", confirm_delete=True)

    assert result.fixture_id == "par-1"
    assert result.message == 'Fixture "Front Par" deleted successfully'


@pytest.mark.asyncio
async def test_delete_fixture_instance_failures(coordinator, mock_backend, rgb_par):
    mock_backend.get_fixture_instance.return_value = None
    with pytest.raises(NotFoundError, match="Fixture with ID par-1 not found"):
        await coordinator.delete_fixture_instance("par-1", confirm_delete=True)

    mock_backend.get_fixture_instance.return_value = rgb_par
    mock_backend.delete_fixture_instance.return_value = False
    with pytest.raises(OperationFailedError, match="^Failed to delete fixture instance: "):
        await coordinator.delete_fixture_instance("par-1", confirm_delete=True)


@pytest.mark.asyncio
async def test_bulk_delete_reports_failed_ids(coordinator, mock_backend):
    mock_backend.bulk_delete_fixtures.return_value = BulkDeleteResult(
        deleted_count=1, deleted_ids=["par-1"]
    )

    outcome = await coordinator.bulk_delete_fixtures(["par-1", "dim-1"], confirm_delete=True)

    assert outcome.success is False
    assert outcome.deleted_count == 1
    assert outcome.failed_ids == ["dim-1"]
    assert outcome.message == "Deleted 1 fixtures, 1 failed"


@pytest.mark.asyncio
async def test_unexpected_item_error_does_not_stop_batch(coordinator, patched_backend):
    echo = patched_backend.create_fixture_instance.side_effect

    def _flaky(fields: dict) -> FixtureInstance:
        if fields["name"] == "Lost":
            raise RuntimeError("connection reset")
        return echo(fields)

    patched_backend.create_fixture_instance.side_effect = _flaky

    result = await coordinator.bulk_create_fixtures(
        [_spec("Lost", mode="3ch"), _spec("Kept", mode="3ch")]
    )

    assert (result.success_count, result.failure_count) == (1, 1)
    assert result.failed[0].index == 0
    assert "connection reset" in result.failed[0].error
