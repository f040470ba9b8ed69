"""Async helpers for retrying and polling."""

from .polling import poll_until
from .retry import backoff_delay, retry_on_rate_limit


__all__ = ["backoff_delay", "poll_until", "retry_on_rate_limit"]
