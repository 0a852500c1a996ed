"""Centralized logging configuration for design-sync.

- Console output on stderr with quiet/verbose switches
- Optional rotating log file, text or structured JSON
- Per-stage category loggers
- Debug context manager
"""

import json
import logging
import logging.config
import logging.handlers
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

ROOT_LOGGER = "design_sync"


class LogCategory(Enum):
    """Log categories, one per pipeline stage."""

    THEME = "theme"
    PARSER = "parser"
    REGISTRY = "registry"
    MATRIX = "matrix"
    SCENE = "scene"
    DRIFT = "drift"
    CLI = "cli"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON string representation of the log entry.
        """
        log_entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_fields = ["component", "rule_id", "file_path", "cell_count", "duration_ms"]
        for field in extra_fields:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    level: str = "INFO",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10485760,
) -> logging.Logger:
    """Setup logging for the ``design_sync`` logger tree.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR).
        quiet: Suppress console output below ERROR.
        verbose: Enable debug-level console output.
        log_file: Optional log file path; enables the rotating file handler.
        log_format: File output format ("text" or "json").
        rotation_count: Number of backup files.
        max_bytes: Max file size before rotation.

    Returns:
        Configured root package logger.
    """
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"
    else:
        effective_level = level.upper()

    config: dict = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s | %(message)s"},
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": effective_level,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            ROOT_LOGGER: {"handlers": ["console"], "level": "DEBUG", "propagate": False}
        },
    }

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json" if log_format == "json" else "detailed",
            "level": "DEBUG",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
        }
        config["loggers"][ROOT_LOGGER]["handlers"].append("file")

    logging.config.dictConfig(config)
    return logging.getLogger(ROOT_LOGGER)


def get_logger() -> logging.Logger:
    """Get the package logger."""
    return logging.getLogger(ROOT_LOGGER)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Get a logger for one pipeline stage.

    Example:
        >>> logger = get_category_logger(LogCategory.DRIFT)
        >>> logger.info("Drift check completed")
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{category.value}")


@contextmanager
def debug_context(
    logger: logging.Logger | None = None,
) -> Generator[logging.Logger, None, None]:
    """Temporarily enable debug-level logging on ``logger`` and its handlers."""
    target_logger = logger or get_logger()
    original_level = target_logger.level
    original_handler_levels = [handler.level for handler in target_logger.handlers]
    try:
        target_logger.setLevel(logging.DEBUG)
        for handler in target_logger.handlers:
            handler.setLevel(logging.DEBUG)
        yield target_logger
    finally:
        target_logger.setLevel(original_level)
        for handler, handler_level in zip(
            target_logger.handlers, original_handler_levels, strict=False
        ):
            handler.setLevel(handler_level)
