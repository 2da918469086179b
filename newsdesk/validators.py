"""
Query parameter validation utilities.

Pagination values arrive as raw strings and are never rejected: anything
malformed falls back to a default and the result is clamped into range.
"""

import re

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest page whose row offset still fits in a SQLite INTEGER
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE

# At most 30 digits are read; callers clamp the result
_LEADING_INT = re.compile(r"^\s*([+-]?\d{1,30})")


def parse_int_prefix(value: str | None) -> int | None:
    """
    Read the integer at the start of a string.

    "12" -> 12, "3abc" -> 3, " -4" -> -4, "abc" -> None, None -> None
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_page(value: str | None) -> int:
    """1-indexed page number in [1, MAX_PAGE]."""
    return max(1, min(MAX_PAGE, parse_int_prefix(value) or DEFAULT_PAGE))


def parse_page_size(value: str | None) -> int:
    """Page size in [1, MAX_PAGE_SIZE]; zero or garbage means the default."""
    return max(1, min(MAX_PAGE_SIZE, parse_int_prefix(value) or DEFAULT_PAGE_SIZE))


def parse_flag(value: str | None) -> bool:
    return value is not None and value.lower() == "true"
