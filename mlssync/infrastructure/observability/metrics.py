"""Simple in-process metrics collection for mlssync.

This module provides lightweight counters and histograms for tracking sync
health without external dependencies. Metrics are stored in memory and can be
logged after a run or rendered in Prometheus text format by a caller.
"""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Mapping


LabelKey = tuple[tuple[str, str | None], ...]


def _labels_to_key(labels: Mapping[str, str | None] | None) -> LabelKey:
    if labels is None:
        return ()
    return tuple(sorted(labels.items()))


# ---------------------------------------------------------------------------
# Metric storage
# ---------------------------------------------------------------------------


@dataclass
class Counter:
    """A monotonically increasing counter."""

    name: str
    help_text: str = ""
    _values: dict[LabelKey, float] = field(
        default_factory=lambda: defaultdict(float)
    )
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def inc(
        self, value: float = 1.0, labels: Mapping[str, str | None] | None = None
    ) -> None:
        """Increment the counter by the given value."""
        key = _labels_to_key(labels)
        with self._lock:
            self._values[key] += value

    def get(self, labels: Mapping[str, str | None] | None = None) -> float:
        """Get the current counter value."""
        key = _labels_to_key(labels)
        with self._lock:
            return self._values.get(key, 0.0)

    def items(self) -> list[tuple[LabelKey, float]]:
        with self._lock:
            return list(self._values.items())


@dataclass
class Histogram:
    """A histogram keeping count and sum per label set."""

    name: str
    help_text: str = ""
    _observations: dict[LabelKey, list[float]] = field(
        default_factory=lambda: defaultdict(list)
    )
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def observe(
        self, value: float, labels: Mapping[str, str | None] | None = None
    ) -> None:
        """Record an observation."""
        key = _labels_to_key(labels)
        with self._lock:
            self._observations[key].append(value)

    def get_stats(
        self, labels: Mapping[str, str | None] | None = None
    ) -> dict[str, float]:
        """Get summary statistics for the histogram."""
        key = _labels_to_key(labels)
        with self._lock:
            values = list(self._observations.get(key, []))
        if not values:
            return {"count": 0, "sum": 0.0, "avg": 0.0}
        return {
            "count": len(values),
            "sum": sum(values),
            "avg": sum(values) / len(values),
        }

    def label_keys(self) -> list[LabelKey]:
        with self._lock:
            return list(self._observations)


# ---------------------------------------------------------------------------
# Global metric registry
# ---------------------------------------------------------------------------


class MetricRegistry:
    """Global registry for all metrics."""

    def __init__(self) -> None:
        self._counters: dict[str, Counter] = {}
        self._histograms: dict[str, Histogram] = {}
        self._lock = threading.Lock()

    def counter(self, name: str, help_text: str = "") -> Counter:
        """Get or create a counter."""
        with self._lock:
            if name not in self._counters:
                self._counters[name] = Counter(name=name, help_text=help_text)
            return self._counters[name]

    def histogram(self, name: str, help_text: str = "") -> Histogram:
        """Get or create a histogram."""
        with self._lock:
            if name not in self._histograms:
                self._histograms[name] = Histogram(name=name, help_text=help_text)
            return self._histograms[name]

    def all_counters(self) -> dict[str, Counter]:
        with self._lock:
            return dict(self._counters)

    def all_histograms(self) -> dict[str, Histogram]:
        with self._lock:
            return dict(self._histograms)

    def reset(self) -> None:
        """Drop every registered metric (used between test cases)."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()


# Default global registry
_registry = MetricRegistry()


def get_registry() -> MetricRegistry:
    return _registry


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------


def increment_counter(
    name: str,
    value: float = 1.0,
    labels: Mapping[str, str | None] | None = None,
    help_text: str = "",
) -> None:
    """Increment a counter by name, creating it if needed."""
    _registry.counter(name, help_text).inc(value, labels)


def observe_histogram(
    name: str,
    value: float,
    labels: Mapping[str, str | None] | None = None,
    help_text: str = "",
) -> None:
    """Record an observation in a histogram, creating it if needed."""
    _registry.histogram(name, help_text).observe(value, labels)


class Timer:
    """Context manager for timing operations and recording to a histogram."""

    def __init__(
        self,
        histogram_name: str,
        labels: Mapping[str, str | None] | None = None,
        help_text: str = "",
    ) -> None:
        self.histogram_name = histogram_name
        self.labels = labels
        self.help_text = help_text
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed = time.perf_counter() - self._start
        observe_histogram(
            self.histogram_name, self.elapsed, self.labels, self.help_text
        )


# ---------------------------------------------------------------------------
# Predefined metrics for mlssync
# ---------------------------------------------------------------------------

SYNC_RUNS = "sync_runs_total"
SYNC_RUN_DURATION = "sync_run_duration_seconds"
SYNC_RECORDS = "sync_records_total"
SYNC_RECORD_FAILURES = "sync_record_failures_total"
REMOTE_FALLBACKS = "remote_fallbacks_total"
MEDIA_SYNC_DURATION = "media_sync_duration_seconds"


def record_sync_run(
    sync_type: str,
    status: str,
    duration: float,
    processed: int,
    created: int,
    updated: int,
) -> None:
    """Record a finalized sync run with its counters."""
    increment_counter(
        SYNC_RUNS,
        labels={"sync_type": sync_type, "status": status},
        help_text="Total sync runs",
    )
    observe_histogram(
        SYNC_RUN_DURATION,
        duration,
        labels={"sync_type": sync_type},
        help_text="Sync run duration in seconds",
    )
    for outcome, count in (
        ("processed", processed),
        ("created", created),
        ("updated", updated),
    ):
        increment_counter(
            SYNC_RECORDS,
            value=float(count),
            labels={"sync_type": sync_type, "outcome": outcome},
            help_text="Listing records handled by sync runs",
        )


def record_record_failure(kind: str) -> None:
    """Record a single listing or media record that failed to sync."""
    increment_counter(
        SYNC_RECORD_FAILURES,
        labels={"kind": kind},
        help_text="Per-record failures swallowed during sync",
    )


def record_remote_fallback(resource: str, reason: str) -> None:
    """Record a remote request answered from sample data instead of the API."""
    increment_counter(
        REMOTE_FALLBACKS,
        labels={"resource": resource, "reason": reason},
        help_text="Remote requests served from built-in sample data",
    )


# ---------------------------------------------------------------------------
# Export utilities
# ---------------------------------------------------------------------------


def _label_str(key: LabelKey, quoted: bool = False) -> str:
    if quoted:
        return ",".join(f'{k}="{v}"' for k, v in key)
    return ",".join(f"{k}={v}" for k, v in key) if key else "default"


def get_metrics_summary() -> dict[str, dict[str, object]]:
    """Return a summary of all metrics for logging or CLI display."""
    result: dict[str, dict[str, object]] = {"counters": {}, "histograms": {}}

    for name, counter in _registry.all_counters().items():
        result["counters"][name] = {
            _label_str(key): value for key, value in counter.items()
        }

    for name, histogram in _registry.all_histograms().items():
        result["histograms"][name] = {
            _label_str(key): histogram.get_stats(dict(key) if key else None)
            for key in histogram.label_keys()
        }

    return result


def format_prometheus() -> str:
    """Format metrics in Prometheus text exposition format."""
    lines: list[str] = []

    for name, counter in _registry.all_counters().items():
        if counter.help_text:
            lines.append(f"# HELP {name} {counter.help_text}")
        lines.append(f"# TYPE {name} counter")
        for key, value in counter.items():
            if key:
                lines.append(f"{name}{{{_label_str(key, quoted=True)}}} {value}")
            else:
                lines.append(f"{name} {value}")

    for name, histogram in _registry.all_histograms().items():
        if histogram.help_text:
            lines.append(f"# HELP {name} {histogram.help_text}")
        lines.append(f"# TYPE {name} summary")
        for key in histogram.label_keys():
            stats = histogram.get_stats(dict(key) if key else None)
            suffix = f"{{{_label_str(key, quoted=True)}}}" if key else ""
            lines.append(f"{name}_count{suffix} {stats['count']}")
            lines.append(f"{name}_sum{suffix} {stats['sum']}")

    return "\n".join(lines)
