"""
Core components for Zendesk API access.

This package contains the error hierarchy, logging setup, configuration,
request signing and the value types shared by the rest of the library.
"""

from .auth import ApiTokenAuth
from .errors import (
    APIError,
    AuthenticationError,
    ConfigError,
    NetworkError,
    RateLimitError,
    SearchError,
    TimeoutError,
    ValidationError,
    ZendeskError,
    classify_http_error,
    format_error_details,
)
from .logging import configure_logging, get_logger, get_structured_logger, setup_logging
from .types import (
    BulkSearchCriteria,
    DateField,
    ExportSearchOptions,
    FlaggedJobResult,
    InferredJobResult,
    JobHandle,
    JobResult,
    JobState,
    RateLimitState,
    SearchCriteria,
    SearchProgress,
    SortOrder,
    parse_job_result,
)


__all__ = [
    "ApiTokenAuth",
    "APIError",
    "AuthenticationError",
    "ConfigError",
    "NetworkError",
    "RateLimitError",
    "SearchError",
    "TimeoutError",
    "ValidationError",
    "ZendeskError",
    "classify_http_error",
    "format_error_details",
    "configure_logging",
    "get_logger",
    "get_structured_logger",
    "setup_logging",
    "BulkSearchCriteria",
    "DateField",
    "ExportSearchOptions",
    "FlaggedJobResult",
    "InferredJobResult",
    "JobHandle",
    "JobResult",
    "JobState",
    "RateLimitState",
    "SearchCriteria",
    "SearchProgress",
    "SortOrder",
    "parse_job_result",
]
