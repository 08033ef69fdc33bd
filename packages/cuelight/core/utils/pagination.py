"""Pagination helpers shared by list queries."""

from __future__ import annotations

import math

from pydantic import Field

from cuelight.core.models.base import CueLightModel

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 100


class PaginationInfo(CueLightModel):
    """Paging metadata returned alongside list results."""

    total: int = Field(ge=0)
    page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    has_more: bool


def normalize_pagination_params(
    page: int | None = None, per_page: int | None = None
) -> tuple[int, int]:
    """Clamp paging parameters to safe values.

    Args:
        page: Requested 1-based page (default 1, minimum 1)
        per_page: Requested page size (default 50, clamped to 1..100)

    Returns:
        Tuple of (page, per_page)

    Example:
        >>> normalize_pagination_params(0, 200)
        (1, 100)
    """
    page = DEFAULT_PAGE if page is None else page
    per_page = DEFAULT_PER_PAGE if per_page is None else per_page
    return max(1, page), min(MAX_PER_PAGE, max(1, per_page))


def format_pagination_info(total: int, page: int, per_page: int) -> PaginationInfo:
    """Build pagination info for a result set.

    Example:
        >>> format_pagination_info(75, 2, 50).has_more
        False
    """
    total_pages = math.ceil(total / per_page)
    return PaginationInfo(
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
