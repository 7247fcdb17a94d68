"""Default calculator settings and static pricing constants."""

from __future__ import annotations


TEAM_SIZE_MIN = 1
TEAM_SIZE_MAX = 100

# Subscription tiers: teams below the threshold pay tier 1, the threshold and above pay tier 2.
TIER_1_MONTHLY = 299
TIER_2_MONTHLY = 499
TIER_THRESHOLD = 8

# Loaded admin labour rate used to value recovered hours.
HOURLY_RATE = 50

CAPTURE_THRESHOLD_ANNUAL = 5000

ANIMATION_DURATION_MS = 1500
ANIMATION_TICKS = 60


DEFAULTS = {
    "team_size": 12,
    "animation_duration_ms": ANIMATION_DURATION_MS,
    "animation_ticks": ANIMATION_TICKS,
}


QUICK_ESTIMATE_DEFAULTS = {
    "technicians": 5,
    "projects_per_month": 10,
    "avg_hourly_rate": 75,
    "admin_hours_per_week": 20,
}
