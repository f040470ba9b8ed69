"""
Search and background job configuration.
"""

from typing import Any, Dict


class SearchConfig:
    """Search pagination and partitioning settings."""

    def __init__(self):
        self.max_page_size = 100
        self.max_export_page_size = 1000
        self.default_chunk_days = 30
        self.default_date_field = "created"
        # Abort a date range search on the first failed partition
        self.strict_partitions = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "MAX_PAGE_SIZE": self.max_page_size,
            "MAX_EXPORT_PAGE_SIZE": self.max_export_page_size,
            "DEFAULT_CHUNK_DAYS": self.default_chunk_days,
            "DEFAULT_DATE_FIELD": self.default_date_field,
            "STRICT_PARTITIONS": self.strict_partitions,
        }


class JobConfig:
    """Job status polling settings."""

    def __init__(self):
        self.poll_interval = 1.0
        self.poll_timeout = 300.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "POLL_INTERVAL": self.poll_interval,
            "POLL_TIMEOUT": self.poll_timeout,
        }
