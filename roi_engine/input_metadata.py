"""Input guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "team_size": {"min": 3, "max": 50, "note": "Most rope access crews using the calculator fall in this range."},
    "technicians": {"min": 1, "max": 50, "note": "Field technicians on payroll."},
    "projects_per_month": {"min": 1, "max": 100, "note": "Jobs started in a typical month."},
    "avg_hourly_rate": {"min": 25, "max": 200, "note": "Average billable rate across technicians."},
    "admin_hours_per_week": {"min": 5, "max": 60, "note": "Office time spent on paperwork, payroll and scheduling."},
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def help_with_guidance(key: str, base_help: str) -> str:
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base_help
    return f"{base_help} Typical range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}"


def advisory_warnings(inputs: dict) -> list[str]:
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs:
            continue
        try:
            v = float(inputs[key])
        except (TypeError, ValueError):
            continue
        if v < g["min"] or v > g["max"]:
            warnings.append(f"{key}={_fmt(v)} is outside the typical range [{_fmt(g['min'])}, {_fmt(g['max'])}].")
    return warnings
