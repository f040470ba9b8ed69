"""
Network utilities for Zendesk API access.

This module provides session management, quota tracking and the lazy
pagination drivers used by search.
"""

from .pagination import (
    CursorExportIterator,
    IteratorState,
    PagedSearchIterator,
    extract_after_cursor,
    has_more_export,
)
from .rate_limiter import RateLimitTracker
from .session_manager import SessionManager


__all__ = [
    "CursorExportIterator",
    "IteratorState",
    "PagedSearchIterator",
    "RateLimitTracker",
    "SessionManager",
    "extract_after_cursor",
    "has_more_export",
]
