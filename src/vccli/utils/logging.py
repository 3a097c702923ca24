"""
Structured logging configuration for the vCenter session client.

This module configures structured JSON logging. Records carry their context
fields under the ``extras`` attribute, which ``log_with_context`` fills in.
"""

import json
import logging
import sys
import time
from datetime import datetime
from typing import Optional


class JsonFormatter(logging.Formatter):
    """Render each log record as a single JSON object."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        # Add any extra attributes passed via the extra parameter
        for key, value in getattr(record, "extras", {}).items():
            log_data[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_data, default=str)


def configure_logging(level="INFO", stream=None):
    """Configure structured JSON logging on the root logger.

    Args:
        level: Log level name or number.
        stream: Output stream, stdout by default.

    Returns:
        The root logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    return root


def get_logger(name):
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def log_with_context(logger, level, message, **context):
    """Log with additional context as structured fields."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger.log(level, message, extra={"extras": context})


def mask_token(token: Optional[str]) -> str:
    """Hide a session token, keeping only its last four characters."""
    if not token:
        return "<empty>"
    if len(token) <= 4:
        return "****"
    return "****" + token[-4:]


class LogMetrics:
    """Context manager for logging the duration of a code block."""

    def __init__(self, logger, operation_name, **context):
        self.logger = logger
        self.operation_name = operation_name
        self.context = context
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.monotonic()
        log_with_context(self.logger, logging.DEBUG, f"Starting {self.operation_name}", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.monotonic() - self.start_time

        if exc_type is None:
            log_with_context(
                self.logger,
                logging.INFO,
                f"Completed {self.operation_name}",
                duration_seconds=round(self.duration, 3),
                **self.context,
            )
        else:
            log_with_context(
                self.logger,
                logging.ERROR,
                f"Failed {self.operation_name}: {exc_val}",
                duration_seconds=round(self.duration, 3),
                error=str(exc_val),
                **self.context,
            )
        return False
