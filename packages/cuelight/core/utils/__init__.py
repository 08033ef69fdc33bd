"""Shared utilities."""

from cuelight.core.utils.logging import StructuredJSONFormatter, configure_logging, get_logger
from cuelight.core.utils.pagination import (
    PaginationInfo,
    format_pagination_info,
    normalize_pagination_params,
)

__all__ = [
    "PaginationInfo",
    "StructuredJSONFormatter",
    "configure_logging",
    "format_pagination_info",
    "get_logger",
    "normalize_pagination_params",
]
