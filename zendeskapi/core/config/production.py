"""
Production profile.
"""

from .base import BaseConfig


class ProductionConfig(BaseConfig):
    """Larger pool and a longer request timeout for busy accounts."""

    name = "production"

    def _configure_environment(self) -> None:
        self.rate_limit.api_timeout = 45
        self.rate_limit.max_total_connections = 50
        self.rate_limit.max_connections_per_host = 20
