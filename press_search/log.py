"""Logging setup and error logging helpers."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOGGER_NAME = "press_search"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def get_log_level(level_str: str) -> int:
    """Convert log level string to logging constant."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def setup_logging(level: str = "INFO", fmt: str = "standard", stream=None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name
        fmt: "standard" for text lines, "json" for structured output
        stream: Output stream (defaults to stdout)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(get_log_level(level))

    handler = logging.StreamHandler(stream or sys.stdout)
    if fmt == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        ))
    logger.addHandler(handler)
    return logger


def format_error_message(
    message: str,
    exc: Optional[Exception] = None,
    *,
    max_context_items: int = 8,
    **context: Any,
) -> str:
    """Build an error message with inline context.

    Returns a single string like:
    "Search failed (keyword=foo page=2): connection refused"
    """
    parts = [message]
    if context:
        items = []
        for k, v in list(context.items())[:max_context_items]:
            if isinstance(v, str) and len(v) > 64:
                items.append(f"{k}={v[:61]}...")
            else:
                items.append(f"{k}={v}")
        parts.append(" (" + " ".join(items) + ")")
    if exc is not None and str(exc):
        parts.append(f": {exc}")
    return "".join(parts)


def log_error_with_context(
    log: logging.Logger,
    message: str,
    exc: Optional[Exception] = None,
    *,
    level: int = logging.ERROR,
    **context: Any,
) -> None:
    """Log an error with request context in both the message and the record."""
    full_message = format_error_message(message, exc=exc, **context)
    log.log(level, full_message, exc_info=exc, extra={"context": context})
