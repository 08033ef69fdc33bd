"""Tests for CueListOperations."""

from __future__ import annotations

import pytest

from cuelight.core.backend import BackendError
from cuelight.core.cues import CueFilter, CueListOperations, insertion_cue_number
from cuelight.core.cues.models import NumberRange
from cuelight.core.errors import InputValidationError, NotFoundError, OperationFailedError
from cuelight.core.models import CueList


@pytest.fixture
def operations(mock_backend) -> CueListOperations:
    return CueListOperations(mock_backend)


@pytest.mark.parametrize(
    ("reference", "position", "expected"),
    [
        (4, "before", 3),
        (2, "after", 3),
        (1, "before", 0.5),
        (5, "after", 5.5),
        (3, "after", None),
    ],
)
def test_insertion_cue_number(sample_cue_list, reference, position, expected):
    assert insertion_cue_number(sample_cue_list.cues, reference, position) == expected


# ============================================================================
# Cue list edits
# ============================================================================


@pytest.mark.asyncio
async def test_update_cue_list_sends_given_fields(operations, mock_backend, sample_cue_list):
    mock_backend.update_cue_list.return_value = sample_cue_list

    summary = await operations.update_cue_list("cl-1", name="Act One")

    mock_backend.update_cue_list.assert_awaited_once_with("cl-1", {"name": "Act One"})
    assert summary.total_cues == 4


@pytest.mark.asyncio
async def test_update_cue_list_requires_a_field(operations, mock_backend):
    with pytest.raises(InputValidationError, match="At least one field"):
        await operations.update_cue_list("cl-1")

    mock_backend.update_cue_list.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_cue_between_neighbours(operations, mock_backend, sample_cue_list, make_cue):
    mock_backend.get_cue_list.return_value = sample_cue_list
    mock_backend.create_cue.return_value = make_cue(3, name="Thunder")

    summary = await operations.add_cue_to_cue_list(
        "cl-1", "Thunder", 99, "s2", position="before", reference_cue_number=4
    )

    fields = mock_backend.create_cue.await_args.args[0]
    assert fields["cueNumber"] == 3
    assert fields["cueListId"] == "cl-1"
    assert fields["followTime"] is None
    assert summary.name == "Thunder"


@pytest.mark.asyncio
async def test_add_cue_keeps_number_when_reference_missing(
    operations, mock_backend, sample_cue_list, make_cue
):
    mock_backend.get_cue_list.return_value = sample_cue_list
    mock_backend.create_cue.return_value = make_cue(7)

    await operations.add_cue_to_cue_list(
        "cl-1", "Late", 7, "s1", position="after", reference_cue_number=42
    )

    assert mock_backend.create_cue.await_args.args[0]["cueNumber"] == 7


@pytest.mark.asyncio
async def test_add_cue_without_position_skips_lookup(operations, mock_backend, make_cue):
    mock_backend.create_cue.return_value = make_cue(6)

    await operations.add_cue_to_cue_list("cl-1", "Six", 6, "s1")

    mock_backend.get_cue_list.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_cue_rejects_bad_position(operations):
    with pytest.raises(InputValidationError, match="position must be 'before' or 'after'"):
        await operations.add_cue_to_cue_list("cl-1", "X", 1, "s1", position="during")


@pytest.mark.asyncio
async def test_update_cue_follow_time_clear_versus_keep(operations, mock_backend, make_cue):
    mock_backend.update_cue.return_value = make_cue(1)

    await operations.update_cue("cue-1", follow_time=None)
    assert mock_backend.update_cue.await_args.args == ("cue-1", {"followTime": None})

    await operations.update_cue("cue-1", fade_in_time=2)
    assert mock_backend.update_cue.await_args.args == ("cue-1", {"fadeInTime": 2})


@pytest.mark.asyncio
async def test_update_cue_requires_a_field(operations, mock_backend):
    with pytest.raises(InputValidationError, match="No update fields provided"):
        await operations.update_cue("cue-1")

    mock_backend.update_cue.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove_cue_wraps_backend_errors(operations, mock_backend):
    mock_backend.delete_cue.side_effect = BackendError("deleteCue", [{"message": "locked"}])

    with pytest.raises(OperationFailedError, match="Failed to remove cue: deleteCue: locked"):
        await operations.remove_cue("cue-1")


@pytest.mark.asyncio
async def test_reorder_cues(operations, mock_backend, make_cue):
    mock_backend.update_cue.side_effect = lambda cue_id, fields: make_cue(
        fields["cueNumber"], name=cue_id
    )

    result = await operations.reorder_cues("cl-1", [("cue-1", 10), ("cue-2", 20)])

    assert [(c.name, c.cue_number) for c in result] == [("cue-1", 10), ("cue-2", 20)]
    assert mock_backend.update_cue.await_count == 2


@pytest.mark.asyncio
async def test_reorder_requires_cues(operations):
    with pytest.raises(InputValidationError, match="No cues provided for reordering"):
        await operations.reorder_cues("cl-1", [])


# ============================================================================
# Details
# ============================================================================


@pytest.mark.asyncio
async def test_cue_list_details_statistics_and_lookups(operations, mock_backend, sample_cue_list):
    mock_backend.get_cue_list.return_value = sample_cue_list

    details = await operations.get_cue_list_details("cl-1")

    stats = details.statistics
    assert stats.total_cues == 4
    assert stats.cue_number_range == NumberRange(min=1, max=5)
    assert stats.follow_cues == 2
    assert stats.unique_scenes == 2
    assert stats.estimated_total_time == (3 + 5) + (1 + 2) + (1 + 3) + (3 + 5)
    assert details.by_cue_number["4"].scene_name == "Dawn"
    assert [c.cue_number for c in details.by_scene_name["storm"]] == [2, 5]
    assert [c.cue_number for c in details.by_scene_id["s1"]] == [1, 4]
    assert details.filters_applied == 0


@pytest.mark.asyncio
async def test_zero_follow_time_counts_as_follow_cue(operations, mock_backend, make_cue):
    mock_backend.get_cue_list.return_value = CueList(
        id="cl-1", name="Snap", cues=[make_cue(1, follow=0), make_cue(2)]
    )

    details = await operations.get_cue_list_details("cl-1")

    assert details.statistics.follow_cues == 1


@pytest.mark.asyncio
async def test_cue_list_details_sort_and_filter(operations, mock_backend, sample_cue_list):
    mock_backend.get_cue_list.return_value = sample_cue_list

    by_scene = await operations.get_cue_list_details("cl-1", sort_by="sceneName")
    assert [c.cue_number for c in by_scene.cues] == [1, 4, 2, 5]

    filtered = await operations.get_cue_list_details(
        "cl-1",
        filters=CueFilter(has_follow_time=True, fade_time_range=NumberRange(min=0, max=2)),
    )
    assert [c.cue_number for c in filtered.cues] == [2, 4]
    assert filtered.filters_applied == 2
    assert filtered.total_before_filtering == 4


@pytest.mark.asyncio
async def test_cue_list_details_empty_after_filtering(operations, mock_backend, sample_cue_list):
    mock_backend.get_cue_list.return_value = sample_cue_list

    details = await operations.get_cue_list_details(
        "cl-1", filters=CueFilter(name_contains="nothing")
    )

    assert details.cues == []
    assert details.statistics.cue_number_range is None
    assert details.statistics.average_fade_in_time == 0


@pytest.mark.asyncio
async def test_cue_list_details_errors(operations, mock_backend):
    with pytest.raises(InputValidationError, match="Unknown sort key 'color'"):
        await operations.get_cue_list_details("cl-1", sort_by="color")

    mock_backend.get_cue_list.return_value = None
    with pytest.raises(NotFoundError, match="Cue list with ID cl-1 not found"):
        await operations.get_cue_list_details("cl-1")


# ============================================================================
# Deletion
# ============================================================================


@pytest.mark.asyncio
async def test_delete_requires_confirmation_before_backend(operations, mock_backend):
    with pytest.raises(InputValidationError, match="confirmDelete must be true"):
        await operations.delete_cue_list("cl-1", confirm_delete=False)

    mock_backend.get_cue_list.assert_not_awaited()
    mock_backend.delete_cue_list.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_cue_list(operations, mock_backend, sample_cue_list):
    mock_backend.get_cue_list.return_value = sample_cue_list
    mock_backend.delete_cue_list.return_value = True

    result = await operations.delete_cue_list("cl-1", confirm_delete=True)

    assert result.success is True
    assert result.cue_list.total_cues == 4
    assert result.message == "Cue list deleted successfully"


@pytest.mark.asyncio
async def test_delete_reports_backend_refusal(operations, mock_backend):
    mock_backend.get_cue_list.return_value = CueList(id="cl-2", name="Spare")
    mock_backend.delete_cue_list.return_value = False

    result = await operations.delete_cue_list("cl-2", confirm_delete=True)

    assert result.success is False
    assert result.message == "Failed to delete cue list"
