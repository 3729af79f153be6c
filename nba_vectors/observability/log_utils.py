"""
Logging utilities for safe structured logging.

Renders run context (per-target upload status, record counts, SDK error
details) into log record attributes. Short lists of scalars such as
``["nba-dense=completed", "nba-sparse=aborted"]`` are written out in full;
record batches and other large containers are reduced to their size so a
batch of upsert payloads never lands in a log line.

Dependencies: logging (stdlib), nba_vectors.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from nba_vectors.core.exceptions import NbaVectorsException

_SCALARS = (str, int, float, bool)
MAX_LISTED_ITEMS = 10


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Joined items for short scalar lists, a size summary for other
            containers, str(value) otherwise
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            if len(value) <= MAX_LISTED_ITEMS and all(isinstance(item, _SCALARS) for item in value):
                val_str = ", ".join(str(item) for item in value)
            else:
                val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached as record attributes
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with full context.

    Details carried by pipeline exceptions (target, status, path, ...) are
    attached alongside the explicit context; explicit keys win.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
        }
    )
    if isinstance(exc, NbaVectorsException):
        for key, val in exc.details.items():
            safe_context.setdefault(key, safe_log_value(val))
    logger.error(message, exc_info=exc, extra=safe_context)
