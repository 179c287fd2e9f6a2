"""Structured logging configuration for Health Prober.

Uses structlog on top of the stdlib logging tree so probe events can be
rendered for humans or as JSON for log aggregation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

SERVICE_NAME = "health-prober"

# Marks handlers installed here so reconfiguring replaces them
_HANDLER_TAG = "_health_prober"


def add_service(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag every event with the service name unless the caller set one."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _install_handler(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    setattr(handler, _HANDLER_TAG, True)
    root.addHandler(handler)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | Path | None = None,
) -> Any:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit one JSON object per line instead of console output
        log_file: Optional file that receives the same lines as stderr

    Returns:
        Configured logger instance
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            add_service,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    _install_handler(root, logging.StreamHandler(sys.stderr), numeric_level)
    if log_file:
        _install_handler(root, logging.FileHandler(log_file), numeric_level)

    return structlog.get_logger("health_prober")


def get_logger(name: str = "health_prober") -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)
