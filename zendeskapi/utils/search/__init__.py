"""Search query composition and date range partitioning."""

from .partitioner import DateRangePartitioner, PartitionFailure
from .query import (
    MAX_EXPORT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    build_export_params,
    build_params,
    date_range_query,
    inject_type_filter,
)


__all__ = [
    "DateRangePartitioner",
    "PartitionFailure",
    "MAX_EXPORT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "build_export_params",
    "build_params",
    "date_range_query",
    "inject_type_filter",
]
