"""
Logging utilities for safe structured logging.

Context values are flattened to short strings and anything whose key looks
like a credential is masked, so tool arguments and connector configs can be
passed straight into ``extra``.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

REDACTED = "***"
SENSITIVE_KEY_PARTS = ("password", "secret", "token", "api_key", "apikey", "access_key", "credential")


def is_sensitive_key(key: str) -> bool:
    """True when ``key`` names something that must never reach the log."""
    lowered = key.lower()
    return any(part in lowered for part in SENSITIVE_KEY_PARTS)


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert any value to a bounded string for logging.

    Lists and tuples are summarized by size. Dicts list their keys, with
    no values, so tool payloads never flood the log.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        val_str = value
    elif isinstance(value, (list, tuple)):
        val_str = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        val_str = f"dict(keys={sorted(str(k) for k in value)})"
    else:
        val_str = str(value)

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def safe_context(**context) -> dict[str, str]:
    """Build an ``extra`` dict with masked credentials and bounded values."""
    return {
        key: REDACTED if is_sensitive_key(key) else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra=safe_context(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback, its type and message, plus context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional key-value pairs
    """
    extra = safe_context(**context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = str(exc)
    logger.error(message, exc_info=exc, extra=extra)
