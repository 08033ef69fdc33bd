"""Normalization of generated channel values against fixture specs."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from cuelight.core.models import FixtureInstance, FixtureValue

logger = logging.getLogger(__name__)


def coerce_number(value: Any) -> float:
    """Coerce a raw value to a number; anything non-numeric becomes 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return 0.0 if math.isnan(number) else number


def clamp_value(value: Any, low: int, high: int) -> int:
    """Coerce, clamp to ``[low, high]`` and round to an integer."""
    return int(round(min(max(coerce_number(value), low), high)))


class FixtureValueValidator:
    """Turns raw generated fixture values into length- and range-correct ones.

    Entries are dropped only for an unresolvable fixture reference. Wrong
    lengths are repaired, never rejected.
    """

    def validate(
        self, raw: Any, fixtures: Sequence[FixtureInstance]
    ) -> list[FixtureValue]:
        """Validate a raw ``fixtureValues`` list.

        Accepted entry shapes:
        - ``{"fixtureId": id, "channelValues": [v0, v1, ...]}`` (by offset)
        - ``{"fixtureId": id, "channelValues": [{"channelId": c, "value": v}, ...]}``
        - ``{"fixtureId": id, "channelValues": {c: v, ...}}``

        Args:
            raw: Parsed ``fixtureValues`` (may be absent or malformed)
            fixtures: Authoritative available fixtures

        Returns:
            One FixtureValue per resolvable fixture, first occurrence wins
        """
        if not isinstance(raw, list):
            return []

        by_id = {f.id: f for f in fixtures}
        seen: set[str] = set()
        validated: list[FixtureValue] = []

        for entry in raw:
            if not isinstance(entry, Mapping):
                continue
            fixture_id = entry.get("fixtureId", entry.get("fixture_id"))
            if not isinstance(fixture_id, str) or not fixture_id:
                continue
            fixture = by_id.get(fixture_id)
            if fixture is None:
                logger.debug(f"Skipping values for unknown fixture {fixture_id!r}")
                continue
            if fixture_id in seen:
                continue
            seen.add(fixture_id)

            raw_values = entry.get("channelValues", entry.get("channel_values"))
            validated.append(
                FixtureValue(
                    fixture_id=fixture_id,
                    channel_values=self._channel_values(raw_values, fixture),
                )
            )

        dropped = len(raw) - len(validated)
        if dropped:
            logger.debug(f"Dropped {dropped} of {len(raw)} generated fixture value entries")
        return validated

    def optimize(
        self, values: Sequence[FixtureValue], fixtures: Sequence[FixtureInstance]
    ) -> list[FixtureValue]:
        """Re-clamp and re-size existing values against current fixtures.

        Values whose fixture is missing pass through unchanged. Fixtures
        without channel records are sized to ``channel_count`` over 0-255.
        """
        by_id = {f.id: f for f in fixtures}
        optimized: list[FixtureValue] = []
        for fv in values:
            fixture = by_id.get(fv.fixture_id)
            if fixture is None:
                optimized.append(fv)
                continue
            optimized.append(
                fv.model_copy(
                    update={"channel_values": self._positional(fv.channel_values, fixture)}
                )
            )
        return optimized

    # =========================================================================
    # Internals
    # =========================================================================

    def _channel_values(self, raw_values: Any, fixture: FixtureInstance) -> list[int]:
        if isinstance(raw_values, Mapping):
            return self._keyed(raw_values.items(), fixture)
        if isinstance(raw_values, list):
            if any(isinstance(v, Mapping) for v in raw_values):
                pairs = [
                    (v.get("channelId", v.get("channel_id")), v.get("value"))
                    for v in raw_values
                    if isinstance(v, Mapping)
                ]
                return self._keyed(pairs, fixture)
            return self._positional(raw_values, fixture)
        return self._fit([], fixture)

    def _positional(self, raw_values: Sequence[Any], fixture: FixtureInstance) -> list[int]:
        values = [
            clamp_value(value, *fixture.value_range(offset))
            for offset, value in enumerate(raw_values[: fixture.channel_count])
        ]
        return self._fit(values, fixture)

    def _keyed(self, pairs: Any, fixture: FixtureInstance) -> list[int]:
        values = self._fit([], fixture)
        for channel_id, value in pairs:
            if not isinstance(channel_id, str):
                continue
            channel = fixture.channel_by_id(channel_id)
            if channel is None or channel.offset >= fixture.channel_count:
                continue
            values[channel.offset] = clamp_value(value, channel.min_value, channel.max_value)
        return values

    def _fit(self, values: list[int], fixture: FixtureInstance) -> list[int]:
        """Truncate or pad to ``channel_count``.

        Padding is 0 clamped into the channel's range.
        """
        values = values[: fixture.channel_count]
        for offset in range(len(values), fixture.channel_count):
            values.append(clamp_value(0, *fixture.value_range(offset)))
        return values
