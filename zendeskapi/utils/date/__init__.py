"""Date handling utilities."""

from .date_utils import (
    DateLike,
    format_date_for_query,
    iter_date_chunks,
    parse_date,
    partition_count,
)


__all__ = [
    "DateLike",
    "format_date_for_query",
    "iter_date_chunks",
    "parse_date",
    "partition_count",
]
