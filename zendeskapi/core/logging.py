"""
Consolidated logging configuration for Zendesk API access.

This module provides logging functionality including:
- Basic logging setup and configuration
- Context-aware logging for search and job operations
- Credential masking for log output
- Log level management and debug helpers
"""

import logging
import logging.config
import os
import re
import sys
from typing import Any, Dict, List, Optional, Union


# Default logging formats
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"

PACKAGE_LOGGER = "zendeskapi"

_CREDENTIAL_PATTERNS = [
    re.compile(r"(Authorization['\"]?\s*[:=]\s*['\"]?Basic\s+)[A-Za-z0-9+/=]+", re.IGNORECASE),
    re.compile(r"(token['\"]?\s*[:=]\s*['\"]?)[^\s'\",}]+", re.IGNORECASE),
]


class CredentialFilter(logging.Filter):
    """Filter that masks credentials accidentally included in log messages."""

    def filter(self, record):
        if isinstance(record.msg, str):
            msg = record.msg
            for pattern in _CREDENTIAL_PATTERNS:
                msg = pattern.sub(r"\1***", msg)
            record.msg = msg
        return True


def _mask_credentials(handler: logging.Handler) -> logging.Handler:
    # Filters on a logger do not see records propagated from child loggers
    if not any(isinstance(f, CredentialFilter) for f in handler.filters):
        handler.addFilter(CredentialFilter())
    return handler


def setup_logging(log_level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger for scripts that embed the client.

    Unlike ``configure_logging`` this leaves propagation alone, so records
    from ``zendeskapi`` end up wherever the application's root handlers go.
    """
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper())

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=log_level, format=DEFAULT_FORMAT, handlers=[_mask_credentials(h) for h in handlers]
    )


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    console_level: Optional[Union[int, str]] = None,
    format_string: Optional[str] = None,
    debug: bool = False,
) -> None:
    """
    Configure logging for the package with advanced options.

    Args:
        level: Base logging level (default: INFO)
        log_file: Path to log file (default: None)
        console: Whether to log to console (default: True)
        console_level: Console logging level (default: same as base level)
        format_string: Log format string (default: DEFAULT_FORMAT or DEBUG_FORMAT if debug=True)
        debug: Whether to enable debug mode (more verbose logging)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if console_level is None:
        console_level = level
    elif isinstance(console_level, str):
        console_level = getattr(logging, console_level.upper())

    if format_string is None:
        format_string = DEBUG_FORMAT if debug else DEFAULT_FORMAT

    handlers: Dict[str, Dict[str, Any]] = {}
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": console_level,
            "formatter": "console",
            "stream": "ext://sys.stderr",
        }
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": log_file,
            "encoding": "utf-8",
        }
    if not handlers:
        handlers["null"] = {"class": "logging.NullHandler"}

    for handler in handlers.values():
        handler["filters"] = ["credentials"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "detailed": {"format": format_string},
                "console": {"format": CONSOLE_FORMAT},
            },
            "filters": {"credentials": {"()": CredentialFilter}},
            "handlers": handlers,
            "loggers": {
                PACKAGE_LOGGER: {"level": level, "handlers": list(handlers), "propagate": False},
                # Third-party transport chatter stays at WARNING
                "aiohttp": {"level": logging.WARNING, "propagate": True},
            },
        }
    )

    get_logger(__name__).debug(
        f"Logging configured with level {logging.getLevelName(level)}"
        + (f", file {log_file}" if log_file else "")
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    This is the recommended way to get a logger in the package.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_log_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Set the log level for a specific logger or the package logger.

    Args:
        level: Logging level (can be string like 'INFO' or int like logging.INFO)
        logger_name: Name of logger to set level for (default: package logger)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logging.getLogger(logger_name or PACKAGE_LOGGER).setLevel(level)


def enable_debug_for_module(module_name: str) -> None:
    """
    Enable debug logging for a specific module.

    Args:
        module_name: Name of the module to enable debug for
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
        logger.addHandler(_mask_credentials(handler))


def disable_logging() -> None:
    """Completely disable all logging."""
    logging.disable(logging.CRITICAL)


def enable_logging() -> None:
    """Re-enable logging after it has been disabled."""
    logging.disable(logging.NOTSET)


# ===== Context-aware Logging =====

class ContextAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes every message with bound context.

    Used to tag search and job log lines with the query, partition or
    job id they belong to.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None) -> None:
        self.context = dict(context or {})
        super().__init__(logger, self.context)

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        if self.context:
            prefix = " ".join(f"{k}={v}" for k, v in self.context.items())
            msg = f"[{prefix}] {msg}"
        return msg, kwargs

    def bind(self, **kwargs: Any) -> "ContextAdapter":
        """
        Create a new logger with additional bound context.

        Args:
            **kwargs: Context key-value pairs to add

        Returns:
            New ContextAdapter with combined context
        """
        new_context = self.context.copy()
        new_context.update(kwargs)
        return ContextAdapter(self.logger, new_context)


def get_structured_logger(name: str, context: Optional[Dict[str, Any]] = None) -> ContextAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name
        context: Initial context dictionary

    Returns:
        ContextAdapter instance
    """
    return ContextAdapter(get_logger(name), context)
