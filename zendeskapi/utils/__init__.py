"""
Utility modules for Zendesk API access.

This package provides various utilities organized by category:
- async_utils: Retry and polling helpers
- data: Job result classification
- date: Date parsing and range generation
- network: Session management, quota tracking and pagination
- search: Query composition and date range partitioning
"""
