"""Structured logging configuration using structlog."""
import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from homestay_booking.config.settings import settings


def add_homestay_prefix(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add [homestay-slug] prefix to log message if homestay is bound.

    Args:
        logger: The logger instance
        method_name: The name of the method being called
        event_dict: The event dictionary containing log data

    Returns:
        Modified event dictionary with homestay prefix
    """
    homestay = event_dict.get("homestay")
    if homestay:
        event_dict["event"] = f"[{homestay}] {event_dict.get('event', '')}"
    return event_dict


def _use_json() -> bool:
    return settings.logging.format == "json"


def _build_handler(log_level: int) -> logging.Handler:
    # stdout carries the CLI's JSON result, so log lines go to stderr
    handler = logging.StreamHandler(sys.stderr)
    if _use_json():
        handler.setFormatter(jsonlogger.JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    handler.setLevel(log_level)
    return handler


def configure_logging() -> None:
    """Configure structlog and the root logger from ``settings.logging``."""
    log_level = getattr(logging, settings.logging.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_handler(log_level))

    renderer = (
        structlog.processors.JSONRenderer()
        if _use_json()
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_homestay_prefix,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a logger bound to ``name``, typically ``__name__``."""
    return structlog.get_logger(name)
