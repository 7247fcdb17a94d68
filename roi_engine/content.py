"""Display copy for the savings calculator (category names, option labels, result text)."""

from __future__ import annotations

from typing import Any

from roi_engine.catalog import Category, UnmappedSelectionError


PRODUCT_NAME = "OnRopePro"

CATEGORY_LABELS: dict[Category, str] = {
    Category.TIME_TRACKING: "Time Tracking & Payroll",
    Category.PROJECT_MANAGEMENT: "Project Management",
    Category.CRM: "Client Relationship Management",
    Category.SAFETY_COMPLIANCE: "Safety & Compliance",
    Category.SCHEDULING: "Scheduling",
    Category.DOCUMENT_STORAGE: "Document Storage",
}

QUESTION_TITLES: dict[Category, str] = {
    Category.TIME_TRACKING: "How do you track employee hours and process payroll?",
    Category.PROJECT_MANAGEMENT: "How do you manage projects and coordinate your crews?",
    Category.CRM: "How do you keep track of clients and follow-ups?",
    Category.SAFETY_COMPLIANCE: "How do you handle safety forms and compliance records?",
    Category.SCHEDULING: "How do you schedule technicians to jobs?",
    Category.DOCUMENT_STORAGE: "Where do you keep plans, certificates and project photos?",
}

OPTION_LABELS: dict[Category, dict[str, str]] = {
    Category.TIME_TRACKING: {
        "paper": "Paper timesheets",
        "excel": "Excel or Google Sheets",
        "software": "Dedicated time-tracking software",
        "none": "We don't formally track hours",
    },
    Category.PROJECT_MANAGEMENT: {
        "whiteboard": "Whiteboard in the office",
        "excel": "Spreadsheets",
        "software": "Project management software",
        "texts": "Group texts and phone calls",
    },
    Category.CRM: {
        "email": "Email inbox",
        "spreadsheet": "Contact spreadsheet",
        "software": "CRM software",
        "memory": "Memory and business cards",
    },
    Category.SAFETY_COMPLIANCE: {
        "paper": "Paper forms and binders",
        "none": "No formal documentation",
        "software": "Safety compliance software",
        "photos": "Photos on phones",
    },
    Category.SCHEDULING: {
        "calls": "Phone calls each morning",
        "excel": "Excel schedule",
        "software": "Scheduling software",
        "verbal": "Day-by-day verbal assignments",
    },
    Category.DOCUMENT_STORAGE: {
        "filing": "Filing cabinets",
        "computer": "Folders on someone's computer",
        "cloud": "Cloud storage (Drive, Dropbox)",
        "mix": "A mix of paper and digital",
    },
}

TEAM_SIZE_QUESTION = {
    "title": "How many employees do you have?",
    "description": "Include technicians, supervisors and office staff.",
}

TIER_LABELS = {
    "tier_1": "Tier 1 pricing (under 8 employees)",
    "tier_2": "Tier 2 pricing (8 or more employees)",
}

INCLUDED_FEATURES = [
    "Time tracking & payroll",
    "Project management",
    "Client relationship management",
    "Safety & compliance forms",
    "Crew scheduling",
    "Document storage",
]

RESULT_COPY = {
    "title": "What Are Your Current Tools Really Costing You?",
    "subtitle": "Answer six quick questions to see your hidden admin costs.",
    "wasting_title": "You're currently spending",
    "already_optimized": "You're already running a tight operation",
    "current_setup_good": (
        "Your current setup is already cost-effective. "
        "{product} can still save you time by bringing everything into one place."
    ),
    "consolidate_message": (
        "You're paying ${cost:,.0f}/month across separate tools. "
        "{product} replaces all of them for ${tier_cost:,.0f}/month."
    ),
    "consolidate_benefits": "Consolidating into one platform gives you:",
    "current_waste": "Current waste",
    "potential_savings": "Potential savings",
    "capture_title": "Get your ${savings:,.0f}/year savings report",
    "capture_description": "We'll email a copy of this analysis with the full breakdown.",
}

CONSOLIDATION_BENEFITS = [
    "One login for your whole team",
    "Integrated data across payroll, projects and safety",
    "Built specifically for rope access companies",
]


def category_label(category: Any) -> str:
    cat = Category.coerce(category)
    try:
        return CATEGORY_LABELS[cat]
    except KeyError:
        raise UnmappedSelectionError(f"No label configured for category {cat.value!r}") from None


def question_title(category: Any) -> str:
    cat = Category.coerce(category)
    try:
        return QUESTION_TITLES[cat]
    except KeyError:
        raise UnmappedSelectionError(f"No question configured for category {cat.value!r}") from None


def option_label(category: Any, option: str) -> str:
    cat = Category.coerce(category)
    try:
        return OPTION_LABELS[cat][option]
    except KeyError:
        raise UnmappedSelectionError(f"No label configured for option {option!r} in category {cat.value!r}") from None


def result_copy(key: str, **params) -> str:
    return RESULT_COPY[key].format(product=PRODUCT_NAME, **params)
