"""
Settings shared by every environment profile.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from .rate_limiting import RateLimitConfig
from .search import JobConfig, SearchConfig


class BaseConfig(ABC):
    """
    Aggregate of the transport, search and job settings.

    Subclasses adjust the defaults for their environment in
    ``_configure_environment``.
    """

    name = "base"

    def __init__(self):
        self.user_agent = "zendeskapi-python"
        self.rate_limit = RateLimitConfig()
        self.search = SearchConfig()
        self.jobs = JobConfig()
        self._configure_environment()

    @abstractmethod
    def _configure_environment(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ENVIRONMENT": self.name,
            "USER_AGENT": self.user_agent,
            "RATE_LIMIT": self.rate_limit.to_dict(),
            "SEARCH": self.search.to_dict(),
            "JOBS": self.jobs.to_dict(),
        }
