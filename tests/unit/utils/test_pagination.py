"""Tests for pagination helpers."""

from __future__ import annotations

import pytest

from cuelight.core.utils import format_pagination_info, normalize_pagination_params


@pytest.mark.parametrize(
    ("page", "per_page", "expected"),
    [
        (None, None, (1, 50)),
        (0, 200, (1, 100)),
        (-3, 0, (1, 1)),
        (4, 25, (4, 25)),
    ],
)
def test_normalize_pagination_params(page, per_page, expected):
    assert normalize_pagination_params(page, per_page) == expected


def test_format_pagination_info():
    info = format_pagination_info(75, 1, 50)

    assert info.total_pages == 2
    assert info.has_more is True
    assert format_pagination_info(75, 2, 50).has_more is False


def test_format_pagination_info_empty():
    info = format_pagination_info(0, 1, 50)

    assert info.total_pages == 0
    assert info.has_more is False
    assert info.to_wire()["perPage"] == 50
