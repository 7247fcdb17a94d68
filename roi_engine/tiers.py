"""Subscription tier selection by team size."""

from __future__ import annotations

from roi_engine.defaults import (
    TEAM_SIZE_MAX,
    TEAM_SIZE_MIN,
    TIER_1_MONTHLY,
    TIER_2_MONTHLY,
    TIER_THRESHOLD,
)


def clamp_team_size(value) -> int:
    try:
        size = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return TEAM_SIZE_MIN
    return min(max(size, TEAM_SIZE_MIN), TEAM_SIZE_MAX)


def tier_name(team_size: int) -> str:
    return "tier_1" if int(team_size) < TIER_THRESHOLD else "tier_2"


def tier_cost(team_size: int) -> int:
    """Monthly subscription price for a team; the threshold size pays the higher tier."""
    return TIER_1_MONTHLY if tier_name(team_size) == "tier_1" else TIER_2_MONTHLY
