from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import roi_engine.runtime_logging as runtime_logging


APP_PATH = str(Path(__file__).resolve().parents[1] / "app.py")


def _widget_by_label(widgets, label: str):
    matches = [w for w in widgets if getattr(w, "label", "") == label]
    assert matches, f"Widget not found for label: {label}"
    return matches[0]


def _assert_no_app_exceptions(at: AppTest) -> None:
    assert len(at.exception) == 0


@pytest.fixture(autouse=True)
def isolated_runtime_log(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", Path(tmp_path) / "runtime_events.jsonl")


def _fresh_app() -> AppTest:
    at = AppTest.from_file(APP_PATH)
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    at.toggle(key="animate_results").set_value(False)
    at.run(timeout=120)
    return at


def _answer_all(at: AppTest, answers: dict) -> None:
    at.button(key="nav_next").click()
    at.run(timeout=120)
    for cat, option in answers.items():
        at.radio(key=f"answer_{cat.value}").set_value(option)
        at.run(timeout=120)
        at.button(key="nav_next").click()
        at.run(timeout=120)
        _assert_no_app_exceptions(at)


def test_app_initial_run_has_no_exceptions():
    at = AppTest.from_file(APP_PATH)
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    assert at.session_state["wizard"].state == "step_1"
    assert at.slider(key="team_size_input").value == 12


def test_next_is_disabled_until_step_is_answered():
    at = _fresh_app()
    at.button(key="nav_next").click()
    at.run(timeout=120)
    assert at.session_state["wizard"].state == "step_2"
    assert at.button(key="nav_next").disabled
    assert at.button(key="nav_next").label == "Next"

    at.radio(key="answer_time_tracking").set_value("paper")
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    assert not at.button(key="nav_next").disabled
    assert at.session_state["wizard"].selection.answer("time_tracking") == "paper"


def test_full_survey_reaches_results_and_prompts_capture(costliest_answers):
    at = _fresh_app()
    _answer_all(at, costliest_answers)

    wizard = at.session_state["wizard"]
    assert wizard.in_results
    assert _widget_by_label(at.metric, "Monthly Savings").value == "$1,657"
    assert _widget_by_label(at.metric, "ROI").value == "332%"
    assert at.session_state["capture_open"] is True

    events = [e["event"] for e in runtime_logging.read_runtime_events(limit=50)]
    assert "results_revealed" in events
    assert "capture_prompt_shown" in events
    assert "integrity_findings" not in events

    _widget_by_label(at.text_input, "Email address").set_value("crew@example.com")
    _widget_by_label(at.button, "Send My Analysis").click()
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    assert at.session_state["capture_submitted"] is True


def test_back_and_start_over_from_results(costliest_answers):
    at = _fresh_app()
    _answer_all(at, costliest_answers)

    at.button(key="nav_back_to_questions").click()
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    wizard = at.session_state["wizard"]
    assert wizard.state == "step_7"
    assert at.radio(key="answer_document_storage").value == "mix"

    at.button(key="nav_next").click()
    at.run(timeout=120)
    at.button(key="start_over").click()
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    wizard = at.session_state["wizard"]
    assert wizard.state == "step_1"
    assert not any(wizard.selection.answers.values())


def test_quick_estimate_defaults():
    at = AppTest.from_file(APP_PATH)
    at.run(timeout=120)
    _assert_no_app_exceptions(at)
    assert _widget_by_label(at.metric, "Estimated Annual Savings").value == "$34,800"
