"""Offset pagination helpers for list endpoints.

Pages are 1-indexed.  A page past the end is not an error: it yields an empty
slice while ``total`` still reports every matching row.
"""

import math


def offset_for(page: int, limit: int) -> int:
    """Rows to skip before ``page`` (skip = (page - 1) * limit)."""
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return max(1, math.ceil(total / limit)) if total else 1
