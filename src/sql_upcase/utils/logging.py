"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Automatic sanitization of sensitive fields
- Truncation of long text values (document snippets)
- Context binding support
- Dual output (stderr + optional file logging)

Configuration:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO
- LOG_TO_FILE: Enable file logging (1, true, yes). Default: disabled
- LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from sql_upcase.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("batch.completed", dialect="postgres", tokens_capitalized=12)
"""

import logging
import os
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping

import structlog
from pydantic import ValidationError
from structlog.types import EventDict, Processor

from sql_upcase.config import get_settings

# Query text can carry credentials (CREATE USER ... PASSWORD '...')
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*credential.*", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"

# Document text in log fields is cut to this many characters
MAX_TEXT_LENGTH = 120


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"password": "secret123", "dialect": "ansi"})
        {"password": "[REDACTED]", "dialect": "ansi"}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that sanitizes sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def truncate_long_text(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor shortening long string values such as document text.

    The event name is never shortened.
    """
    for key, value in event_dict.items():
        if key == "event" or not isinstance(value, str):
            continue
        overflow = len(value) - MAX_TEXT_LENGTH
        if overflow > 0:
            event_dict[key] = f"{value[:MAX_TEXT_LENGTH]}...(+{overflow} chars)"
    return event_dict


def _get_log_level() -> int:
    """Get log level from settings, falling back to the environment."""
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except ValidationError:
        # Logging must come up even when the rest of the configuration is invalid
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _should_log_to_file() -> bool:
    """Check if file logging is enabled via environment."""
    log_to_file = os.getenv("LOG_TO_FILE", "").lower()
    return log_to_file in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: sql-upcase-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"sql-upcase-{date_str}.log"


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering and sanitization.

    Output goes to stderr so that the CLI can stream capitalized text on
    stdout untouched.
    """
    level = _get_log_level()
    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(level)
    logging.root.addHandler(stderr_handler)

    if _should_log_to_file():
        log_file = _get_log_file_path()
        file_handler = TimedRotatingFileHandler(
            filename=str(log_file),
            when="midnight",
            interval=1,
            backupCount=30,  # 30-day retention
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        truncate_long_text,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering and sanitization
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Args:
        **kwargs: Context fields to bind (e.g., document="query.sql",
            dialect="postgres")

    Returns:
        A BoundLogger with the specified context already bound

    Example:
        >>> logger = bind_context(document="query.sql", dialect="postgres")
        >>> logger.info("batch.completed", tokens_capitalized=3)
    """
    return structlog.get_logger().bind(**kwargs)
