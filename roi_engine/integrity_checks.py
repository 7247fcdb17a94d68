"""Identity checks over an aggregated savings result."""

from __future__ import annotations

from typing import Any

import numpy as np

from roi_engine.aggregate import AggregateResult, SelectionState, round_half_up
from roi_engine.catalog import CATEGORY_ORDER
from roi_engine.defaults import HOURLY_RATE
from roi_engine.tiers import tier_cost


def _finding(check: str, lhs_name: str, rhs_name: str, lhs: float, rhs: float) -> dict[str, Any]:
    return {
        "Check": check,
        "Abs Delta": float(abs(lhs - rhs)),
        "LHS": lhs_name,
        "RHS": rhs_name,
    }


def _check_identity(
    findings: list[dict[str, Any]],
    check_name: str,
    lhs_name: str,
    rhs_name: str,
    lhs: float,
    rhs: float,
    tol: float,
) -> None:
    if not np.isclose(float(lhs), float(rhs), rtol=0.0, atol=float(tol)):
        findings.append(_finding(check_name, lhs_name, rhs_name, float(lhs), float(rhs)))


def run_integrity_checks(result: AggregateResult, selection: SelectionState, tol: float = 1e-6) -> list[dict[str, Any]]:
    """Return integrity findings (empty list means all checks passed)."""
    findings: list[dict[str, Any]] = []
    lines = result.breakdown
    direct = np.array([line.direct_cost for line in lines], dtype=float)
    hidden = np.array([line.hidden_cost for line in lines], dtype=float)
    hours = np.array([line.hours_wasted for line in lines], dtype=float)

    identities = [
        ("Direct cost identity", "Total Direct Cost", "Sum of breakdown direct costs", result.total_direct_cost, direct.sum()),
        ("Hidden cost identity", "Total Hidden Cost", "Sum of breakdown hidden costs", result.total_hidden_cost, hidden.sum()),
        (
            "Current spending identity",
            "Total Current Spending",
            "Direct + Hidden",
            result.total_current_spending,
            result.total_direct_cost + result.total_hidden_cost,
        ),
        ("Tier identity", "Tier Cost", "Tier price for team size", result.tier_cost, tier_cost(selection.team_size)),
        (
            "Monthly savings identity",
            "Monthly Savings",
            "Current Spending - Tier Cost",
            result.monthly_savings,
            result.total_current_spending - result.tier_cost,
        ),
        ("Annual savings identity", "Annual Savings", "Monthly Savings x 12", result.annual_savings, result.monthly_savings * 12),
        (
            "ROI identity",
            "ROI %",
            "round(Monthly Savings / Tier Cost x 100)",
            result.roi_percent,
            round_half_up(result.monthly_savings / result.tier_cost * 100),
        ),
        ("Hours identity", "Hours Recovered Monthly", "Sum of breakdown hours", result.hours_recovered_monthly, hours.sum()),
        (
            "Annual hours identity",
            "Hours Recovered Annually",
            "Monthly Hours x 12",
            result.hours_recovered_annually,
            result.hours_recovered_monthly * 12,
        ),
        (
            "Time value identity",
            "Value of Time Recovered",
            "Annual Hours x Hourly Rate",
            result.value_of_time_recovered,
            result.hours_recovered_annually * HOURLY_RATE,
        ),
    ]
    for check_name, lhs_name, rhs_name, lhs, rhs in identities:
        _check_identity(findings, check_name, lhs_name, rhs_name, lhs, rhs, tol)

    answered = sum(1 for cat in CATEGORY_ORDER if selection.answers.get(cat) is not None)
    _check_identity(findings, "Breakdown coverage", "Breakdown lines", "Answered categories", len(lines), answered, tol)

    mixed = int(np.sum((direct != 0) & ((hidden != 0) | (hours != 0))))
    if mixed:
        findings.append(_finding("Single cost shape per line", "Lines with direct and hidden cost", "0", mixed, 0))

    return findings
