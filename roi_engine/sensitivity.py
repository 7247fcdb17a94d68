"""Team-size sweep of the savings estimate."""

from __future__ import annotations

import pandas as pd

from roi_engine.aggregate import SelectionState, aggregate
from roi_engine.defaults import TEAM_SIZE_MAX, TEAM_SIZE_MIN
from roi_engine.tiers import clamp_team_size, tier_name


DEFAULT_SWEEP_SIZES = list(range(TEAM_SIZE_MIN, 51))


def run_team_size_sweep(selection: SelectionState, sizes: list[int] | None = None) -> pd.DataFrame:
    """Re-run the aggregate for each team size, keeping the current answers."""
    if not sizes:
        sizes = DEFAULT_SWEEP_SIZES
    unique_sizes = sorted({clamp_team_size(s) for s in sizes if TEAM_SIZE_MIN <= int(s) <= TEAM_SIZE_MAX})

    rows = []
    for size in unique_sizes:
        scenario = selection.copy()
        scenario.team_size = size
        out = aggregate(scenario)
        rows.append(
            {
                "Team Size": size,
                "Tier": tier_name(size),
                "Tier Cost": out.tier_cost,
                "Current Spending": out.total_current_spending,
                "Monthly Savings": out.monthly_savings,
                "ROI %": out.roi_percent,
            }
        )
    return pd.DataFrame(rows, columns=["Team Size", "Tier", "Tier Cost", "Current Spending", "Monthly Savings", "ROI %"])
