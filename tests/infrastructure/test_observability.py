from __future__ import annotations

import json
import logging

from mlssync.infrastructure.observability import (
    ContextualFormatter,
    ContextualJsonFormatter,
    Timer,
    current_log_context,
    format_prometheus,
    get_metrics_summary,
    get_registry,
    log_context,
    log_exception,
    record_remote_fallback,
    record_sync_run,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("mlssync.test", logging.INFO, __file__, 1, message, None, None)


def test_log_context_nests_and_restores() -> None:
    with log_context(sync_run_id=7):
        with log_context(external_id="22520502"):
            assert current_log_context() == {"sync_run_id": 7, "external_id": "22520502"}
        assert current_log_context() == {"sync_run_id": 7}
    assert current_log_context() == {}


def test_contextual_formatter_appends_fields_without_mutating_record() -> None:
    formatter = ContextualFormatter("%(message)s")
    record = _record("Created listing")

    with log_context(sync_run_id=3, external_id="X1"):
        text = formatter.format(record)

    assert text == "Created listing [sync_run_id=3 external_id=X1]"
    assert record.msg == "Created listing"


def test_json_formatter_emits_context_as_keys() -> None:
    formatter = ContextualJsonFormatter("%(levelname)s %(message)s")

    with log_context(sync_run_id=5):
        payload = json.loads(formatter.format(_record("hello")))

    assert payload["message"] == "hello"
    assert payload["sync_run_id"] == 5


def test_log_exception_includes_traceback_and_context(caplog) -> None:
    logger = logging.getLogger("mlssync.tests.observability")

    try:
        raise ValueError("bad record")
    except ValueError as exc:
        with caplog.at_level(logging.ERROR, logger="mlssync.tests.observability"):
            log_exception(logger, "Failed to sync listing", exc, external_id="1")

    record = caplog.records[-1]
    assert record.getMessage() == "Failed to sync listing: bad record"
    assert record.exc_info is not None


def test_record_sync_run_updates_counters_and_prometheus_text() -> None:
    record_sync_run("properties", "success", 0.25, processed=3, created=2, updated=1)
    record_remote_fallback("Property", "unconfigured")

    registry = get_registry()
    assert registry.counter("sync_runs_total").get({"sync_type": "properties", "status": "success"}) == 1
    assert (
        registry.counter("sync_records_total").get({"sync_type": "properties", "outcome": "created"})
        == 2
    )

    summary = get_metrics_summary()
    assert summary["histograms"]["sync_run_duration_seconds"]["sync_type=properties"]["count"] == 1

    text = format_prometheus()
    assert "# TYPE sync_runs_total counter" in text
    assert 'sync_runs_total{status="success",sync_type="properties"} 1.0' in text
    assert 'remote_fallbacks_total{reason="unconfigured",resource="Property"} 1.0' in text
    assert 'sync_run_duration_seconds_count{sync_type="properties"} 1' in text


def test_timer_observes_elapsed_time() -> None:
    with Timer("unit_test_seconds", labels={"step": "a"}) as timer:
        pass

    stats = get_registry().histogram("unit_test_seconds").get_stats({"step": "a"})
    assert stats["count"] == 1
    assert timer.elapsed >= 0.0
