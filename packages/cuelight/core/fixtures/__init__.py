"""Fixture batch operations, channel occupancy and listings."""

from cuelight.core.fixtures.bulk import BulkOperationCoordinator, select_mode
from cuelight.core.fixtures.inventory import FixtureInventory
from cuelight.core.fixtures.models import (
    BulkCreateResult,
    BulkDeleteOutcome,
    BulkFixtureUpdateResult,
    ChannelSummary,
    CreatedFixture,
    FailedFixture,
    FixtureDeletion,
)
from cuelight.core.fixtures.occupancy import ChannelConflictError, ChannelOccupancy

__all__ = [
    "BulkCreateResult",
    "BulkDeleteOutcome",
    "BulkFixtureUpdateResult",
    "BulkOperationCoordinator",
    "ChannelConflictError",
    "ChannelOccupancy",
    "ChannelSummary",
    "CreatedFixture",
    "FailedFixture",
    "FixtureDeletion",
    "FixtureInventory",
    "select_mode",
]
