"""Channel occupancy of one universe.

``ChannelOccupancy`` is immutable: placing a fixture returns a new value.
Bulk creation folds each created fixture into the occupancy it started
from, so later items in a batch see the addresses taken by earlier ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from cuelight.core.errors import InputValidationError
from cuelight.core.models import UNIVERSE_SIZE, FixtureInstance


class ChannelConflictError(InputValidationError):
    """Raised when a block of channels cannot be placed."""

    pass


@dataclass(frozen=True)
class ChannelOccupancy:
    """Which fixture (by name) holds each channel of a universe.

    ``owners[i]`` is the owner of channel ``i + 1``, or None when free.
    """

    universe: int
    owners: tuple[str | None, ...] = (None,) * UNIVERSE_SIZE

    @classmethod
    def from_fixtures(
        cls, universe: int, fixtures: Iterable[FixtureInstance]
    ) -> ChannelOccupancy:
        """Occupancy of ``universe`` from the fixtures already patched there."""
        occupancy = cls(universe=universe)
        for fixture in fixtures:
            if fixture.universe == universe:
                occupancy = occupancy.with_block(
                    fixture.name, fixture.start_channel, fixture.channel_count
                )
        return occupancy

    @property
    def used_channels(self) -> int:
        return sum(1 for owner in self.owners if owner is not None)

    def is_free(self, channel: int) -> bool:
        return self.owners[channel - 1] is None

    def first_free_block(self, count: int) -> int | None:
        """Lowest start channel with ``count`` free channels, or None."""
        if count <= 0:
            return 1
        run = 0
        for channel in range(1, UNIVERSE_SIZE + 1):
            run = run + 1 if self.is_free(channel) else 0
            if run >= count:
                return channel - count + 1
        return None

    def conflict(self, start: int, count: int) -> tuple[int, str] | None:
        """First occupied channel in ``[start, start + count)`` and its owner."""
        for channel in range(start, min(start + count, UNIVERSE_SIZE + 1)):
            owner = self.owners[channel - 1]
            if owner is not None:
                return channel, owner
        return None

    def check_block(self, start: int, count: int) -> None:
        """Validate a manual placement.

        Raises:
            ChannelConflictError: If the block runs past the universe or
                overlaps an existing fixture
        """
        end = start + count - 1
        if end > UNIVERSE_SIZE:
            raise ChannelConflictError(
                f"Channel range {start}-{end} exceeds universe size ({UNIVERSE_SIZE} channels)"
            )
        clash = self.conflict(start, count)
        if clash is not None:
            channel, owner = clash
            raise ChannelConflictError(
                f'Channel {channel} already in use by fixture "{owner}". '
                f"Cannot assign {count} channels starting at {start}."
            )

    def allocate(self, count: int) -> int:
        """Start channel of the first free block.

        Raises:
            ChannelConflictError: If no block of ``count`` channels is free
        """
        start = self.first_free_block(count)
        if start is None:
            raise ChannelConflictError(
                f"No available channel space in universe {self.universe} "
                f"for {count}-channel fixture"
            )
        return start

    def with_block(self, owner: str, start: int, count: int) -> ChannelOccupancy:
        """New occupancy with ``[start, start + count)`` held by ``owner``.

        Channels beyond the universe are ignored.
        """
        owners = list(self.owners)
        for channel in range(max(start, 1), min(start + count, UNIVERSE_SIZE + 1)):
            owners[channel - 1] = owner
        return ChannelOccupancy(universe=self.universe, owners=tuple(owners))
