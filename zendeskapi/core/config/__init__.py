"""
Configuration for the Zendesk client.

The profile is chosen by ``ZENDESKAPI_ENV`` (``development`` unless set to
``production``). ``config`` holds the profile loaded at import time and is
what ``get_setting`` and ``update_setting`` operate on.
"""

import os
from typing import Any, List

from .base import BaseConfig
from .credentials import ZendeskCredentials
from .development import DevelopmentConfig
from .production import ProductionConfig
from .rate_limiting import RateLimitConfig
from .search import JobConfig, SearchConfig


ENV_VAR = "ZENDESKAPI_ENV"


def _environment() -> str:
    return os.getenv(ENV_VAR, "development").lower()


def get_config() -> BaseConfig:
    """Build a fresh configuration for the current environment."""
    if _environment() == "production":
        return ProductionConfig()
    return DevelopmentConfig()


config = get_config()


def _child(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj[name]
    if hasattr(obj, name):
        return getattr(obj, name)
    raise KeyError(name)


def get_setting(key: str, default: Any = None) -> Any:
    """
    Look up a setting by dotted path, e.g. ``rate_limit.max_retries``.

    Returns ``default`` when any segment is missing.
    """
    obj: Any = config
    try:
        for name in key.split("."):
            obj = _child(obj, name)
    except KeyError:
        return default
    return obj


def update_setting(key: str, value: Any) -> None:
    """
    Override a setting by dotted path. Intended for tests and scripts.

    Raises:
        RuntimeError: In the production environment
        KeyError: If the path does not name an existing setting
    """
    if _environment() == "production":
        raise RuntimeError("Configuration modification not allowed in production")

    path: List[str] = key.split(".")
    try:
        parent = config
        for name in path[:-1]:
            parent = _child(parent, name)
        _child(parent, path[-1])
    except KeyError:
        raise KeyError(f"Unknown configuration key: {key}") from None

    if isinstance(parent, dict):
        parent[path[-1]] = value
    else:
        setattr(parent, path[-1], value)


__all__ = [
    "BaseConfig",
    "DevelopmentConfig",
    "ProductionConfig",
    "RateLimitConfig",
    "SearchConfig",
    "JobConfig",
    "ZendeskCredentials",
    "config",
    "get_config",
    "get_setting",
    "update_setting",
]
