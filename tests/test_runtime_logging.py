from __future__ import annotations

from pathlib import Path

import roi_engine.runtime_logging as runtime_logging


def test_runtime_logging_append_and_read(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", Path(tmp_path) / "runtime_events.jsonl")

    runtime_logging.append_runtime_event(
        level="warning",
        event="wizard_transition_rejected",
        message="Next was requested before the current step was answered.",
        context={"state": "step_3"},
    )
    events = runtime_logging.read_runtime_events(limit=10)
    assert len(events) == 1
    assert events[0]["event"] == "wizard_transition_rejected"
    assert events[0]["level"] == "WARNING"
    assert events[0]["context"]["state"] == "step_3"


def test_runtime_logging_records_exception_details(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", Path(tmp_path) / "runtime_events.jsonl")

    try:
        raise LookupError("no cost entry")
    except LookupError as exc:
        runtime_logging.append_runtime_event("error", "unmapped_selection", str(exc), exc=exc)

    event = runtime_logging.read_runtime_events(limit=1)[0]
    assert event["exception_type"] == "LookupError"
    assert "no cost entry" in event["traceback"]


def test_runtime_logging_handles_malformed_lines(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    log_file = Path(tmp_path) / "runtime_events.jsonl"
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", log_file)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.write_text('{"event":"ok","level":"INFO","timestamp_utc":"2026-01-01T00:00:00+00:00","message":"ok","context":{}}\nnot-json\n\n', encoding="utf-8")

    events = runtime_logging.read_runtime_events(limit=10)
    assert len(events) == 2
    assert events[0]["event"] == "ok"
    assert events[1]["event"] == "log_parse_error"


def test_configure_log_root_expands_and_falls_back(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", runtime_logging.LOG_DIR)
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", runtime_logging.RUNTIME_EVENTS_LOG_FILE)

    assert runtime_logging.configure_log_root(str(tmp_path)) == Path(tmp_path)
    assert runtime_logging.RUNTIME_EVENTS_LOG_FILE == Path(tmp_path) / "runtime_events.jsonl"
    assert runtime_logging.configure_log_root("  ") == Path(".local_store")


def test_runtime_logging_survives_undecodable_bytes(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    log_file = Path(tmp_path) / "runtime_events.jsonl"
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", log_file)
    log_file.write_bytes(b'{"event":"ok"}\n\xff\xfe torn\n')

    events = runtime_logging.read_runtime_events(limit=10)
    assert [e["event"] for e in events] == ["ok", "log_parse_error"]


def test_unserializable_context_is_dropped_without_partial_line(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    log_file = Path(tmp_path) / "runtime_events.jsonl"
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", log_file)
    circular: dict = {}
    circular["self"] = circular

    runtime_logging.append_runtime_event("error", "integrity_findings", "loop", context=circular)
    runtime_logging.append_runtime_event("info", "results_revealed", "ok")

    assert [e["event"] for e in runtime_logging.read_runtime_events(limit=10)] == ["results_revealed"]


def test_exception_hook_chains_even_when_logging_fails(monkeypatch):
    chained = []
    monkeypatch.setattr(runtime_logging.sys, "excepthook", lambda *args: chained.append(args))
    monkeypatch.setattr(runtime_logging, "_EXCEPTION_HOOK_INSTALLED", False)
    monkeypatch.setattr(runtime_logging, "get_script_run_ctx", lambda: object())

    def _failing_append(**kwargs):
        raise ValueError("Circular reference detected")

    monkeypatch.setattr(runtime_logging, "append_runtime_event", _failing_append)

    runtime_logging.install_global_exception_logging()
    exc = RuntimeError("boom")
    runtime_logging.sys.excepthook(RuntimeError, exc, None)

    assert chained == [(RuntimeError, exc, None)]
