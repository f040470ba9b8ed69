"""
Development profile, tuned for sandbox accounts.
"""

from .base import BaseConfig


class DevelopmentConfig(BaseConfig):
    name = "development"

    def _configure_environment(self) -> None:
        # Small connection pool for sandbox accounts
        self.rate_limit.max_total_connections = 5
        self.rate_limit.max_connections_per_host = 5
