"""
Date utilities for search partitioning.

This module provides utilities for date handling including parsing,
formatting for search queries, and range generation.
"""

import datetime
import math
from typing import Iterator, Tuple, Union

from ...core.errors import ValidationError


DateLike = Union[str, datetime.date, datetime.datetime]

QUERY_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: DateLike) -> datetime.date:
    """
    Convert a date-like value to a ``datetime.date``.

    Args:
        value: ``date``, ``datetime`` or ISO-8601 string

    Returns:
        The calendar date

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return datetime.datetime.strptime(text[:10], QUERY_DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(f"Invalid date: {value}") from None
    raise ValidationError(f"Unsupported date type: {type(value).__name__}")


def format_date_for_query(value: datetime.date) -> str:
    """Format a date the way the search syntax expects it (YYYY-MM-DD)."""
    return value.strftime(QUERY_DATE_FORMAT)


def iter_date_chunks(
    start: datetime.date, end: datetime.date, chunk_days: int
) -> Iterator[Tuple[datetime.date, datetime.date]]:
    """
    Split ``[start, end)`` into consecutive half-open chunks.

    The last chunk is shortened so it never crosses ``end``.

    Args:
        start: Inclusive lower bound
        end: Exclusive upper bound
        chunk_days: Width of each chunk in days

    Yields:
        ``(lower, upper)`` tuples
    """
    if chunk_days <= 0:
        raise ValidationError("chunk_days must be positive", {"chunk_days": chunk_days})

    step = datetime.timedelta(days=chunk_days)
    cursor = start
    while cursor < end:
        upper = min(cursor + step, end)
        yield cursor, upper
        cursor = upper


def partition_count(start: datetime.date, end: datetime.date, chunk_days: int) -> int:
    """Number of chunks ``iter_date_chunks`` will produce."""
    if end <= start:
        return 0
    return math.ceil((end - start).days / chunk_days)
