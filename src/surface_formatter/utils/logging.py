"""Structured logging setup for surface-formatter."""

import logging
import structlog
from pathlib import Path
from typing import Any
import os
import sys


def configure_logging() -> None:
    """
    Configure structlog for JSON logging to ~/.cache/surface-formatter/logs/surface-formatter.log.

    Environment variables:
    - SURFACE_FORMATTER_LOG_LEVEL: "DEBUG", "INFO" (default), "WARNING" or "ERROR"
    - SURFACE_FORMATTER_LOG_DIR: Directory for the log file (default: ~/.cache/surface-formatter/logs)

    Log levels:
    - DEBUG: Per-node decisions (wrapped openings, exploded expression lists)
    - INFO: Files processed, configuration loaded
    - WARNING: Files that would be reformatted in --check mode
    - ERROR: Parse failures, invalid expressions, write failures

    Example:
        SURFACE_FORMATTER_LOG_LEVEL=DEBUG surface-format templates/*.sface

        # View logs with jq for readability:
        tail -f ~/.cache/surface-formatter/logs/surface-formatter.log | jq .
    """
    default_dir = Path.home() / ".cache" / "surface-formatter" / "logs"
    log_dir = Path(os.environ.get("SURFACE_FORMATTER_LOG_DIR", default_dir)).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "surface-formatter.log"

    log_level = os.environ.get("SURFACE_FORMATTER_LOG_LEVEL", "INFO").upper()

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
    if log_level not in valid_levels:
        log_level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("format_completed", path="index.sface", changed=True)
    """
    if not structlog.is_configured():
        configure_default_logging()
    return structlog.get_logger(name)


def configure_default_logging() -> None:
    """
    Configure structlog for library use: warnings and errors to stderr.

    Applied when surface_formatter is imported by another program that has
    not configured structlog itself, so formatting never writes to stdout.
    The CLI replaces this with configure_logging().
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
