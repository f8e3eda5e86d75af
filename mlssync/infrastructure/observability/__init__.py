"""Observability and logging facades."""

from .logging import (
    ContextualFormatter,
    ContextualJsonFormatter,
    configure_logging,
    current_log_context,
    get_logger,
    log_context,
    log_exception,
)
from .metrics import (
    MEDIA_SYNC_DURATION,
    Timer,
    format_prometheus,
    get_metrics_summary,
    get_registry,
    increment_counter,
    observe_histogram,
    record_record_failure,
    record_remote_fallback,
    record_sync_run,
)

__all__ = [
    # Logging
    "ContextualFormatter",
    "ContextualJsonFormatter",
    "configure_logging",
    "current_log_context",
    "get_logger",
    "log_context",
    "log_exception",
    # Metrics
    "MEDIA_SYNC_DURATION",
    "Timer",
    "format_prometheus",
    "get_metrics_summary",
    "get_registry",
    "increment_counter",
    "observe_histogram",
    "record_record_failure",
    "record_remote_fallback",
    "record_sync_run",
]
