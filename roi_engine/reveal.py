"""Explanatory copy revealed right after a manual-practice answer is picked."""

from __future__ import annotations

from typing import Any

from roi_engine.catalog import CATEGORY_ORDER, Category, UnmappedSelectionError, is_baseline, options_for


REVEAL_MESSAGES: dict[Category, dict[str, str]] = {
    Category.TIME_TRACKING: {
        "paper": (
            "Manual payroll processing costs 7 hours per pay period (26 per year). That's 182 hours annually "
            "worth $9,100 in admin time alone, plus payroll errors averaging $1,200-3,600/year."
        ),
        "excel": (
            "Spreadsheet-based time tracking requires manual entry and constant error correction. "
            "You're spending 8.7 hours monthly just on time data management."
        ),
        "none": (
            "Without precise time tracking, payroll errors average 15-25% of labor costs. "
            "That's thousands of dollars in overpayments or compliance risks annually."
        ),
    },
    Category.PROJECT_MANAGEMENT: {
        "whiteboard": (
            "Without centralized project tracking, managers spend 10+ hours weekly coordinating teams, finding "
            "project details, and answering 'where should I go?' questions. That's 520 hours/year worth $26,000 "
            "in wasted coordination time."
        ),
        "excel": (
            "Spreadsheet project tracking requires constant manual updates and creates version control nightmares. "
            "You're spending 7.5 hours monthly on updates that could be automated."
        ),
        "texts": (
            "Group texts create no searchable records, constant interruptions, and miscommunication. "
            "You're spending 12.5 hours monthly on fragmented coordination."
        ),
    },
    Category.CRM: {
        "email": (
            "Without CRM, you're losing 3-5 contracts per year to missed follow-ups and poor contact management. "
            "That's $25,000-40,000 in annual lost revenue opportunity."
        ),
        "spreadsheet": (
            "Contact spreadsheets require 10 hours monthly to maintain and still miss critical follow-up opportunities."
        ),
        "memory": (
            "Relying on memory for client relationships means missed follow-ups, lost contracts, and inconsistent "
            "communication. The average cost is 3-5 lost contracts per year."
        ),
    },
    Category.SAFETY_COMPLIANCE: {
        "paper": (
            "Paper safety forms get lost, damaged, or are unavailable during audits. Companies with digital "
            "compliance save 10-20% on insurance premiums (average $2,500/year) and avoid $15,625 OSHA penalties "
            "for missing documentation."
        ),
        "none": (
            "Operating without formal safety documentation increases insurance premiums by 10-20% and exposes you "
            "to significant regulatory penalties."
        ),
        "photos": (
            "Phone photos without organization mean lost documentation and 5 hours monthly searching for "
            "compliance records during audits."
        ),
    },
    Category.SCHEDULING: {
        "calls": (
            "Manual scheduling creates double-booking conflicts, missed job assignments, and constant phone "
            "interruptions. You're spending 5+ hours per week just coordinating who goes where. "
            "That's 260 hours/year worth $13,000."
        ),
        "excel": (
            "Excel scheduling requires daily updates and lacks real-time visibility. Conflicts and missed "
            "assignments are common, costing 10 hours monthly in coordination."
        ),
        "verbal": (
            "Day-by-day verbal assignments create chaos, missed jobs, and frustrated employees. "
            "You're spending 15 hours monthly on avoidable scheduling confusion."
        ),
    },
    Category.DOCUMENT_STORAGE: {
        "filing": (
            "When insurance auditors or clients ask for documents, can you find them in 5 minutes or 45 minutes? "
            "Lost time searching for rope access plans, safety certificates, and project photos costs "
            "6.5 hours/month (78 hours/year = $3,900)."
        ),
        "computer": (
            "Personal computer folders mean lost files when employees leave, no backup, and 7.5 hours monthly "
            "searching for documents."
        ),
        "mix": (
            "Mixing physical and digital storage means searching multiple places for every document: "
            "10 hours monthly in wasted search time."
        ),
    },
}


def reveal_message(category: Any, option: str) -> str | None:
    """Return the reveal text for an answer, or None for the category's baseline software."""
    cat = Category.coerce(category)
    if is_baseline(cat, option):
        return None
    try:
        return REVEAL_MESSAGES[cat][option]
    except KeyError:
        raise UnmappedSelectionError(f"No reveal message for option {option!r} in category {cat.value!r}") from None


def validate_messages() -> None:
    """Raise ValueError when the message table drifts from the cost catalog's manual options."""
    problems: list[str] = []
    for cat in CATEGORY_ORDER:
        expected = {opt for opt in options_for(cat) if not is_baseline(cat, opt)}
        configured = set(REVEAL_MESSAGES.get(cat, {}))
        missing = sorted(expected - configured)
        extra = sorted(configured - expected)
        if missing:
            problems.append(f"{cat.value}: missing messages for {missing}")
        if extra:
            problems.append(f"{cat.value}: messages for unknown or baseline options {extra}")
    if problems:
        raise ValueError("Reveal messages are misconfigured: " + "; ".join(problems))
