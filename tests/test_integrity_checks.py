from __future__ import annotations

from dataclasses import replace

from roi_engine.aggregate import SelectionState, aggregate
from roi_engine.catalog import CATEGORY_ORDER, options_for
from roi_engine.integrity_checks import run_integrity_checks


def test_integrity_checks_pass_for_costliest_answers(costliest_selection):
    findings = run_integrity_checks(aggregate(costliest_selection), costliest_selection)
    assert findings == []


def test_integrity_checks_pass_for_representative_scenarios():
    scenarios = [SelectionState(team_size=12)]
    for size in (1, 7, 8, 25, 100):
        for idx in range(4):
            answers = {cat: options_for(cat)[idx] for cat in CATEGORY_ORDER}
            scenarios.append(SelectionState(team_size=size, answers=answers))
    scenarios.append(SelectionState(team_size=3, answers={CATEGORY_ORDER[0]: "paper"}))

    for selection in scenarios:
        findings = run_integrity_checks(aggregate(selection), selection)
        assert findings == [], f"Unexpected integrity findings for {selection}: {findings}"


def test_integrity_checks_detect_identity_break(costliest_selection):
    result = aggregate(costliest_selection)
    broken = replace(result, monthly_savings=result.monthly_savings + 1.0)
    check_names = {f["Check"] for f in run_integrity_checks(broken, costliest_selection)}
    assert "Monthly savings identity" in check_names
    assert "Annual savings identity" in check_names


def test_integrity_checks_detect_missing_breakdown_line(costliest_selection):
    result = aggregate(costliest_selection)
    broken = replace(result, breakdown=result.breakdown[:-1])
    check_names = {f["Check"] for f in run_integrity_checks(broken, costliest_selection)}
    assert "Breakdown coverage" in check_names
    assert "Hidden cost identity" in check_names


def test_integrity_checks_detect_mixed_cost_line(costliest_selection):
    result = aggregate(costliest_selection)
    first = result.breakdown[0]
    broken = replace(result, breakdown=(replace(first, direct_cost=5.0), *result.breakdown[1:]))
    findings = run_integrity_checks(broken, costliest_selection)
    mixed = [f for f in findings if f["Check"] == "Single cost shape per line"]
    assert mixed and mixed[0]["Abs Delta"] == 1.0
