"""
Zendesk API client

An async client library for the Zendesk Support REST API with rate limit
aware retries, paged and cursor based search, date range partitioning for
large result sets and background job polling.
"""

import os

from .core.logging import configure_logging, get_logger, set_log_level


__version__ = "0.1.0"

# Only configure handlers when asked to; libraries should not do so by default
if os.environ.get("ZENDESKAPI_LOG_LEVEL"):
    configure_logging(
        level=os.environ["ZENDESKAPI_LOG_LEVEL"],
        log_file=os.environ.get("ZENDESKAPI_LOG_FILE"),
        console=True,
        debug=os.environ.get("ZENDESKAPI_DEBUG", "").lower() == "true",
    )

from .client import ZendeskClient  # noqa: E402
from .core.config import ZendeskCredentials  # noqa: E402
from .core.errors import (  # noqa: E402
    APIError,
    AuthenticationError,
    ConfigError,
    NetworkError,
    RateLimitError,
    SearchError,
    TimeoutError,
    ValidationError,
    ZendeskError,
)
from .core.types import (  # noqa: E402
    BulkSearchCriteria,
    ExportSearchOptions,
    JobHandle,
    JobState,
    RateLimitState,
    SearchCriteria,
    SearchProgress,
)
from .presentation.progress import LoggingProgressObserver, TqdmProgressObserver  # noqa: E402
from .utils.data.job_results import failed_results, successful_resource_ids  # noqa: E402


__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "ZendeskClient",
    "ZendeskCredentials",
    "APIError",
    "AuthenticationError",
    "ConfigError",
    "NetworkError",
    "RateLimitError",
    "SearchError",
    "TimeoutError",
    "ValidationError",
    "ZendeskError",
    "BulkSearchCriteria",
    "ExportSearchOptions",
    "JobHandle",
    "JobState",
    "RateLimitState",
    "SearchCriteria",
    "SearchProgress",
    "LoggingProgressObserver",
    "TqdmProgressObserver",
    "failed_results",
    "successful_resource_ids",
]
