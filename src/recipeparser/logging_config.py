"""Structured logging configuration for recipeparser."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from recipeparser.config import get_settings

# Name of the document being parsed, e.g. a file path
source_ctx: ContextVar[str | None] = ContextVar("source", default=None)


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if source := source_ctx.get():
            log_data["source"] = source

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context_str = f" [source={source}]" if (source := source_ctx.get()) else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes the parse source."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        if source := source_ctx.get():
            extra["source"] = source
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for applications embedding the parser.

    Args:
        log_level: Minimum log level. Defaults to the configured settings.
        json_format: Use JSON format for logs. If None, decided by settings.
        log_file: Optional file path to write logs to.
    """
    settings = get_settings()

    if json_format is None:
        if settings.log_format:
            json_format = settings.log_format == "json"
        else:
            json_format = not sys.stderr.isatty() and settings.environment == "production"

    level_str = (log_level or settings.log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter: logging.Formatter = StructuredJsonFormatter() if json_format else ContextualFormatter()

    package_logger = logging.getLogger("recipeparser")
    package_logger.setLevel(level)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    # stdout carries the parse output of the CLI
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)

    get_logger(__name__).debug(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}"
    )


class LoggingContext:
    """Context manager for tagging log records with the parse source."""

    def __init__(self, source: str | None = None):
        self.source = source
        self._token: Any = None

    def __enter__(self) -> "LoggingContext":
        if self.source is not None:
            self._token = source_ctx.set(self.source)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            source_ctx.reset(self._token)
            self._token = None
