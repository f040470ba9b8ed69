"""
Rate limiting configuration.
"""

from typing import Any, Dict, Tuple


class RateLimitConfig:
    """Rate limiting and transport configuration."""

    def __init__(self):
        """Initialize rate limiting configuration."""
        # Proactive suspension when the remaining quota drops to this value
        self.quota_buffer = 10

        # 429 handling
        self.max_retries = 3
        self.backoff_base = 1.0  # seconds, doubled on every attempt

        # Iteration-level courtesy pause
        self.courtesy_threshold = 10
        self.courtesy_pause = 1.0

        # Connection and timeout configuration
        self.api_timeout = 30
        self.connect_timeout = 10
        self.max_total_connections = 20
        self.max_connections_per_host = 10
        self.keepalive_timeout = 60

        # Quota headers, first match wins
        self.limit_headers: Tuple[str, ...] = ("X-Rate-Limit", "X-RateLimit-Limit")
        self.remaining_headers: Tuple[str, ...] = (
            "X-Rate-Limit-Remaining",
            "X-RateLimit-Remaining",
        )
        self.reset_headers: Tuple[str, ...] = (
            "X-Rate-Limit-Reset",
            "X-RateLimit-Reset",
            "RateLimit-Reset",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "QUOTA_BUFFER": self.quota_buffer,
            "MAX_RETRIES": self.max_retries,
            "BACKOFF_BASE": self.backoff_base,
            "COURTESY_THRESHOLD": self.courtesy_threshold,
            "COURTESY_PAUSE": self.courtesy_pause,
            "API_TIMEOUT": self.api_timeout,
            "CONNECT_TIMEOUT": self.connect_timeout,
            "MAX_TOTAL_CONNECTIONS": self.max_total_connections,
            "MAX_CONNECTIONS_PER_HOST": self.max_connections_per_host,
            "KEEPALIVE_TIMEOUT": self.keepalive_timeout,
        }

    def update_for_testing(self, **kwargs) -> None:
        """Update configuration for testing purposes.

        WARNING: Only use this in tests!
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown rate limit config key: {key}")

    def create_test_copy(self, **overrides) -> "RateLimitConfig":
        """Create a copy with test overrides."""
        copy = RateLimitConfig()
        copy.update_for_testing(**overrides)
        return copy
