"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Lenient parsing of numeric query parameters
- Offset pagination arithmetic

Usage:
    from core.helpers import parse_positive_int, page_bounds

    limit = parse_positive_int(request.query_params.get("limit"), default=20)
    offset, end = page_bounds(page=2, per_page=50)
"""

from __future__ import annotations

import math


def parse_positive_int(value, default: int | None = None, maximum: int | None = None) -> int | None:
    """
    Parse a positive integer, falling back to a default.

    Missing, non-numeric, zero and negative values all yield `default`.
    Values above `maximum` are clamped.

    Example:
        parse_positive_int("abc", default=20)            # 20
        parse_positive_int("500", default=20, maximum=100)  # 100
    """
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default

    if parsed <= 0:
        return default
    if maximum is not None:
        return min(parsed, maximum)
    return parsed


def page_bounds(page: int, per_page: int) -> tuple[int, int]:
    """
    Slice bounds for a 1-indexed page.

    Example:
        page_bounds(3, 20)  # (40, 60)
    """
    start = (page - 1) * per_page
    return start, start + per_page


def total_pages(total: int, per_page: int) -> int:
    """Number of pages needed for `total` items."""
    return math.ceil(total / per_page) if per_page > 0 else 0
