"""Logging utilities for mlssync.

This module provides centralised logging configuration and helpers for
structured, contextual logging throughout the project.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

from pythonjsonlogger.json import JsonFormatter


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def current_log_context() -> dict[str, Any]:
    """Return a copy of the context fields active for the current task."""
    return dict(_log_context.get())


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        if not ctx:
            return super().format(record)
        original = record.msg
        ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
        record.msg = f"{record.msg} [{ctx_str}]"
        try:
            return super().format(record)
        finally:
            record.msg = original


class ContextualJsonFormatter(JsonFormatter):
    """JSON formatter that emits context fields as top-level keys."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        for key, value in _log_context.get().items():
            log_record.setdefault(key, value)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(sync_run_id=42, external_id="22520502"):
            logger.info("Created listing")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
    use_json: bool = False,
) -> None:
    """Configure application-wide logging.

    Call this once at startup (CLI main, scheduler entry point, etc.) to set
    up consistent logging across the application.

    Args:
        level: Log level for application loggers (default INFO).
        third_party_level: Log level for third-party libraries (default WARNING).
        use_json: If True, output JSON lines instead of plain text.
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter: logging.Formatter
    if use_json:
        formatter = ContextualJsonFormatter(_JSON_FORMAT)
    else:
        formatter = ContextualFormatter(_TEXT_FORMAT)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    # Quieten noisy third-party loggers
    for name in ("urllib3", "requests", "asyncio"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    If configure_logging() has not been called, a basic fallback configuration
    is applied to ensure the logger is usable.

    Args:
        name: Name of the logger (typically __name__).

    Returns:
        A logging.Logger instance.
    """
    logger = logging.getLogger(name)
    # Fallback if configure_logging was not called
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ContextualFormatter(_TEXT_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log an exception with context fields.

    Args:
        logger: Logger instance.
        message: Human-readable message describing the error.
        exc: The exception that was raised.
        **context: Additional context fields to include.
    """
    with log_context(**context):
        logger.exception("%s: %s", message, exc)
