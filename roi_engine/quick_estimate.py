"""Slider-driven annual savings estimate from headline business figures."""

from __future__ import annotations

from dataclasses import dataclass

from roi_engine.aggregate import round_half_up


ADMIN_TIME_REDUCTION = 0.4
ADMIN_RATE_FACTOR = 0.5
PAYROLL_ERROR_RATE = 0.02
UNBILLED_CAPTURE_RATE = 0.05
HOURS_PER_WEEK = 40
WEEKS_PER_YEAR = 52
HOURS_PER_PROJECT = 8

SLIDER_BOUNDS = {
    "technicians": {"min": 1, "max": 50, "step": 1},
    "projects_per_month": {"min": 1, "max": 100, "step": 1},
    "avg_hourly_rate": {"min": 25, "max": 200, "step": 5},
    "admin_hours_per_week": {"min": 5, "max": 60, "step": 1},
}


@dataclass(frozen=True)
class QuickEstimate:
    admin_time: int
    payroll_errors: int
    billable_capture: int

    @property
    def total(self) -> int:
        return self.admin_time + self.payroll_errors + self.billable_capture


def estimate_quick_savings(
    technicians: float,
    projects_per_month: float,
    avg_hourly_rate: float,
    admin_hours_per_week: float,
) -> QuickEstimate:
    """Estimate annual savings from admin time, payroll errors and unbilled work.

    Admin savings assume 40% less paperwork valued at half the billable rate,
    payroll errors are 2% of payroll, and accurate tracking recovers 5% of
    billable hours (8 hours per project).
    """
    saved_admin_hours = admin_hours_per_week * WEEKS_PER_YEAR * ADMIN_TIME_REDUCTION
    admin_time = round_half_up(saved_admin_hours * avg_hourly_rate * ADMIN_RATE_FACTOR)

    annual_payroll = technicians * avg_hourly_rate * HOURS_PER_WEEK * WEEKS_PER_YEAR
    payroll_errors = round_half_up(annual_payroll * PAYROLL_ERROR_RATE)

    annual_billable = projects_per_month * 12 * HOURS_PER_PROJECT * avg_hourly_rate
    billable_capture = round_half_up(annual_billable * UNBILLED_CAPTURE_RATE)

    return QuickEstimate(admin_time=admin_time, payroll_errors=payroll_errors, billable_capture=billable_capture)
