"""Logging helpers that keep secrets and personal data out of production logs."""

import logging
import re
from typing import Any

from talento_api.config import get_settings

MAX_MESSAGE_LENGTH = 200

# Applied in order; URLs go first so query-string keys vanish with them
_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b[a-z][a-z0-9+]*://\S+", re.IGNORECASE), "[URL]"),
    (re.compile(r"\b(key|token|password|secret)=[^\s&]+", re.IGNORECASE), r"\1=[REDACTED]"),
    (re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+"), "[EMAIL]"),
    (re.compile(r"['\"]?(/[\w./-]+|[A-Z]:\\[^\s'\"]+)['\"]?"), "[PATH]"),
    (re.compile(r"\b[\w-]{32,}\b"), "[TOKEN]"),
)


def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Strip URLs, credentials, emails, paths and long tokens from an error.

    The Gemini endpoint carries its API key in the query string and SMTP
    errors echo addresses, so neither may reach a production log verbatim.

    Args:
        error: The exception to sanitize

    Returns:
        A message of at most ``MAX_MESSAGE_LENGTH`` characters
    """
    text = str(error)
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    if len(text) > MAX_MESSAGE_LENGTH:
        text = text[: MAX_MESSAGE_LENGTH - 3] + "..."
    return text


def _log(
    logger: logging.Logger,
    level: int,
    message: str,
    error: Exception | None,
    context: dict[str, Any],
) -> None:
    if is_debug_mode():
        text = f"{message}: {error}" if error else message
        logger.log(level, text, exc_info=error if level >= logging.ERROR else None, extra=context)
    elif error:
        logger.log(level, f"{message}: {sanitize_exception_message(error)}")
    else:
        logger.log(level, message)


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **context: Any,
) -> None:
    """Log an error, with the traceback only in debug mode.

    Args:
        logger: Module logger
        message: Fixed text without personal data
        error: Optional exception; sanitized outside debug mode
        **context: Extra record attributes, kept only in debug mode
    """
    _log(logger, logging.ERROR, message, error, context)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **context: Any,
) -> None:
    """Log a warning; same rules as ``log_error`` without the traceback."""
    _log(logger, logging.WARNING, message, error, context)
