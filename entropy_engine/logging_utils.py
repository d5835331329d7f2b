"""
Entropy Engine Structured Logging

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Provides consistent logging with:
- JSON structured output (optional)
- Level-based filtering
- Performance timing

The engine never configures logging on import; host applications call
setup_logging() if they want the structured format.
"""

import logging
import sys
import time
import json
from datetime import datetime, timezone
from typing import Optional


# Extra record attributes carried into the output when present
EXTRA_FIELDS = ("duration_ms", "operation", "match_count", "entity_count", "category")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs structured log entries.

    In JSON mode, outputs machine-readable JSON.
    In text mode, outputs human-readable logs with context.
    """

    def __init__(self, json_output: bool = False):
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if self.json_output:
            return json.dumps(log_data, default=str)

        parts = [
            f"[{log_data['timestamp']}]",
            f"[{record.levelname:8}]",
            record.getMessage(),
        ]

        extras = [f"{key}={getattr(record, key)}" for key in EXTRA_FIELDS if hasattr(record, key)]
        if extras:
            parts.append(f"({', '.join(extras)})")

        result = " ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the engine's loggers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON logs
        log_file: Optional file path for log output

    Returns:
        The package logger
    """
    package_logger = logging.getLogger("entropy_engine")
    package_logger.setLevel(getattr(logging, level.upper()))

    package_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(json_output=json_output))
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter(json_output=True))  # Always JSON to file
        package_logger.addHandler(file_handler)

    return package_logger


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer(logger, "detect_patterns"):
            ...
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type:
            self.logger.log(
                logging.ERROR,
                f"Operation failed: {self.operation}",
                extra={"operation": self.operation, "duration_ms": round(self.duration_ms, 3)}
            )
        else:
            self.logger.log(
                self.level,
                f"Operation completed: {self.operation}",
                extra={"operation": self.operation, "duration_ms": round(self.duration_ms, 3)}
            )

        return False  # Don't suppress exceptions


__all__ = [
    "setup_logging",
    "Timer",
    "StructuredFormatter",
]
