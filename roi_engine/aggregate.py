"""Current-cost aggregation and savings/ROI calculations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from roi_engine.catalog import (
    CATEGORY_ORDER,
    Category,
    DirectCost,
    HiddenCost,
    baseline_option,
    lookup,
)
from roi_engine.content import category_label, option_label
from roi_engine.defaults import CAPTURE_THRESHOLD_ANNUAL, HOURLY_RATE
from roi_engine.tiers import clamp_team_size, tier_cost


def _empty_answers() -> dict[Category, str | None]:
    return {cat: None for cat in CATEGORY_ORDER}


@dataclass
class SelectionState:
    team_size: int = 12
    answers: dict[Category, str | None] = field(default_factory=_empty_answers)

    def __post_init__(self) -> None:
        self.team_size = clamp_team_size(self.team_size)
        answers = _empty_answers()
        for key, value in (self.answers or {}).items():
            answers[Category.coerce(key)] = value
        self.answers = answers

    def answer(self, category: Any) -> str | None:
        return self.answers[Category.coerce(category)]

    def is_complete(self) -> bool:
        return all(v is not None for v in self.answers.values())

    def copy(self) -> "SelectionState":
        return SelectionState(team_size=self.team_size, answers=dict(self.answers))


@dataclass(frozen=True)
class BreakdownLine:
    category: Category
    category_label: str
    option: str
    option_label: str
    direct_cost: float
    hidden_cost: float
    hours_wasted: float


@dataclass(frozen=True)
class AggregateResult:
    team_size: int
    total_direct_cost: float
    total_hidden_cost: float
    total_current_spending: float
    tier_cost: int
    monthly_savings: float
    annual_savings: float
    roi_percent: int
    hours_recovered_monthly: float
    hours_recovered_annually: float
    value_of_time_recovered: float
    breakdown: tuple[BreakdownLine, ...]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def aggregate(selection: SelectionState) -> AggregateResult:
    """Project the current answers onto the cost tables; unanswered categories add nothing."""
    team_size = clamp_team_size(selection.team_size)
    total_direct = 0.0
    total_hidden = 0.0
    total_hours = 0.0
    lines: list[BreakdownLine] = []

    for cat in CATEGORY_ORDER:
        option = selection.answers.get(cat)
        if option is None:
            continue
        entry = lookup(cat, option)
        if isinstance(entry, DirectCost):
            cost = entry.monthly_cost(team_size)
            total_direct += cost
            direct, hidden, hours = cost, 0.0, 0.0
        elif isinstance(entry, HiddenCost):
            total_hidden += entry.monthly
            total_hours += entry.hours
            direct, hidden, hours = 0.0, entry.monthly, entry.hours
        else:
            raise TypeError(f"Unsupported cost entry for {cat.value}/{option}: {entry!r}")
        lines.append(
            BreakdownLine(
                category=cat,
                category_label=category_label(cat),
                option=option,
                option_label=option_label(cat, option),
                direct_cost=direct,
                hidden_cost=hidden,
                hours_wasted=hours,
            )
        )

    total_current = total_direct + total_hidden
    tier = tier_cost(team_size)
    monthly_savings = total_current - tier
    hours_annual = total_hours * 12

    return AggregateResult(
        team_size=team_size,
        total_direct_cost=total_direct,
        total_hidden_cost=total_hidden,
        total_current_spending=total_current,
        tier_cost=tier,
        monthly_savings=monthly_savings,
        annual_savings=monthly_savings * 12,
        roi_percent=round_half_up(monthly_savings / tier * 100),
        hours_recovered_monthly=total_hours,
        hours_recovered_annually=hours_annual,
        value_of_time_recovered=hours_annual * HOURLY_RATE,
        breakdown=tuple(lines),
    )


def all_baseline_selected(selection: SelectionState) -> bool:
    return all(selection.answers.get(cat) == baseline_option(cat) for cat in CATEGORY_ORDER)


def result_branch(result: AggregateResult, selection: SelectionState) -> str:
    """Pick the results headline: 'savings', 'consolidate' or 'near_optimal'."""
    if result.monthly_savings > 0:
        return "savings"
    if all_baseline_selected(selection):
        return "consolidate"
    return "near_optimal"


def should_prompt_capture(result: AggregateResult) -> bool:
    return result.monthly_savings > 0 and result.annual_savings > CAPTURE_THRESHOLD_ANNUAL


def live_preview(result: AggregateResult) -> dict[str, float] | None:
    if result.total_current_spending <= 0:
        return None
    preview = {"current_waste": result.total_current_spending}
    if result.monthly_savings > 0:
        preview["potential_savings"] = result.monthly_savings
    return preview


def breakdown_frame(result: AggregateResult) -> pd.DataFrame:
    columns = ["Category", "Current Method", "Direct Cost", "Hidden Cost", "Hours Wasted"]
    rows = [
        {
            "Category": line.category_label,
            "Current Method": line.option_label,
            "Direct Cost": line.direct_cost,
            "Hidden Cost": line.hidden_cost,
            "Hours Wasted": line.hours_wasted,
        }
        for line in result.breakdown
    ]
    return pd.DataFrame(rows, columns=columns)
