"""Static cost model for the tooling survey categories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class UnmappedSelectionError(LookupError):
    """Raised when a (category, option) pair has no configured entry."""


class Category(str, Enum):
    TIME_TRACKING = "time_tracking"
    PROJECT_MANAGEMENT = "project_management"
    CRM = "crm"
    SAFETY_COMPLIANCE = "safety_compliance"
    SCHEDULING = "scheduling"
    DOCUMENT_STORAGE = "document_storage"

    @classmethod
    def coerce(cls, value: Any) -> "Category":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise UnmappedSelectionError(f"Unknown survey category: {value!r}") from None


# Survey order; the wizard asks one category per step in this order.
CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


@dataclass(frozen=True)
class DirectCost:
    """Recurring software fee for a baseline option."""

    per_seat: float
    base: float

    def monthly_cost(self, team_size: int) -> float:
        return self.per_seat * team_size + self.base


@dataclass(frozen=True)
class HiddenCost:
    """Implied monthly cost and wasted admin hours of a manual practice."""

    monthly: float
    hours: float


CostEntry = Union[DirectCost, HiddenCost]


COST_TABLE: dict[Category, dict[str, CostEntry]] = {
    Category.TIME_TRACKING: {
        "software": DirectCost(per_seat=7, base=0),
        "paper": HiddenCost(monthly=173, hours=7),
        "excel": HiddenCost(monthly=217, hours=8.7),
        "none": HiddenCost(monthly=350, hours=14),
    },
    Category.PROJECT_MANAGEMENT: {
        "software": DirectCost(per_seat=12, base=0),
        "whiteboard": HiddenCost(monthly=278, hours=10),
        "excel": HiddenCost(monthly=208, hours=7.5),
        "texts": HiddenCost(monthly=347, hours=12.5),
    },
    Category.CRM: {
        "software": DirectCost(per_seat=20, base=0),
        "email": HiddenCost(monthly=417, hours=15),
        "spreadsheet": HiddenCost(monthly=278, hours=10),
        "memory": HiddenCost(monthly=556, hours=20),
    },
    Category.SAFETY_COMPLIANCE: {
        "software": DirectCost(per_seat=0, base=55),
        "paper": HiddenCost(monthly=125, hours=4.5),
        "none": HiddenCost(monthly=208, hours=0),
        "photos": HiddenCost(monthly=139, hours=5),
    },
    Category.SCHEDULING: {
        "software": DirectCost(per_seat=6, base=0),
        "calls": HiddenCost(monthly=347, hours=12.5),
        "excel": HiddenCost(monthly=278, hours=10),
        "verbal": HiddenCost(monthly=417, hours=15),
    },
    Category.DOCUMENT_STORAGE: {
        "cloud": DirectCost(per_seat=0, base=15),
        "filing": HiddenCost(monthly=156, hours=5.5),
        "computer": HiddenCost(monthly=208, hours=7.5),
        "mix": HiddenCost(monthly=278, hours=10),
    },
}

# Order in which the survey lists each category's answers.
DISPLAY_ORDER: dict[Category, tuple[str, ...]] = {
    Category.TIME_TRACKING: ("paper", "excel", "software", "none"),
    Category.PROJECT_MANAGEMENT: ("whiteboard", "excel", "software", "texts"),
    Category.CRM: ("email", "spreadsheet", "software", "memory"),
    Category.SAFETY_COMPLIANCE: ("paper", "none", "software", "photos"),
    Category.SCHEDULING: ("calls", "excel", "software", "verbal"),
    Category.DOCUMENT_STORAGE: ("filing", "computer", "cloud", "mix"),
}


def _entries(category: Any) -> dict[str, CostEntry]:
    cat = Category.coerce(category)
    entries = COST_TABLE.get(cat)
    if entries is None:
        raise UnmappedSelectionError(f"No cost entries configured for category {cat.value!r}")
    return entries


def lookup(category: Any, option: str) -> CostEntry:
    """Return the cost entry for one survey answer; unknown pairs raise."""
    entries = _entries(category)
    try:
        return entries[option]
    except KeyError:
        raise UnmappedSelectionError(
            f"No cost entry for option {option!r} in category {Category.coerce(category).value!r}"
        ) from None


def options_for(category: Any) -> tuple[str, ...]:
    return tuple(_entries(category).keys())


def display_options(category: Any) -> tuple[str, ...]:
    return DISPLAY_ORDER[Category.coerce(category)]


def baseline_option(category: Any) -> str:
    for option, entry in _entries(category).items():
        if isinstance(entry, DirectCost):
            return option
    raise UnmappedSelectionError(f"No baseline option configured for category {Category.coerce(category).value!r}")


def is_baseline(category: Any, option: str) -> bool:
    return isinstance(lookup(category, option), DirectCost)


def validate_catalog() -> None:
    """Raise ValueError when the cost table breaks its shape rules."""
    problems: list[str] = []
    for cat in CATEGORY_ORDER:
        entries = COST_TABLE.get(cat)
        if not entries:
            problems.append(f"{cat.value}: no entries")
            continue
        direct = [opt for opt, e in entries.items() if isinstance(e, DirectCost)]
        if len(direct) != 1:
            problems.append(f"{cat.value}: expected exactly one baseline option, found {len(direct)}")
        for opt, entry in entries.items():
            if not isinstance(entry, (DirectCost, HiddenCost)):
                problems.append(f"{cat.value}/{opt}: entry is neither a direct nor a hidden cost")
        if set(DISPLAY_ORDER.get(cat, ())) != set(entries):
            problems.append(f"{cat.value}: display order does not match the configured options")
    if problems:
        raise ValueError("Cost catalog is misconfigured: " + "; ".join(problems))
