from __future__ import annotations

import pytest

from roi_engine import reveal
from roi_engine.catalog import CATEGORY_ORDER, Category, UnmappedSelectionError, baseline_option, options_for
from roi_engine.reveal import reveal_message, validate_messages


def test_baseline_answers_have_no_message():
    for cat in CATEGORY_ORDER:
        assert reveal_message(cat, baseline_option(cat)) is None


def test_every_manual_answer_has_a_message():
    for cat in CATEGORY_ORDER:
        for option in options_for(cat):
            if option == baseline_option(cat):
                continue
            message = reveal_message(cat, option)
            assert isinstance(message, str) and message


def test_messages_are_category_specific():
    assert "payroll" in reveal_message(Category.TIME_TRACKING, "paper").lower()
    assert reveal_message(Category.TIME_TRACKING, "excel") != reveal_message(Category.PROJECT_MANAGEMENT, "excel")


def test_unknown_pair_raises():
    with pytest.raises(UnmappedSelectionError):
        reveal_message(Category.SCHEDULING, "carrier_pigeon")


def test_validate_messages_detects_missing_copy(monkeypatch):
    validate_messages()
    broken = {cat: dict(msgs) for cat, msgs in reveal.REVEAL_MESSAGES.items()}
    del broken[Category.CRM]["email"]
    monkeypatch.setattr(reveal, "REVEAL_MESSAGES", broken)
    with pytest.raises(ValueError, match="missing messages"):
        validate_messages()


def test_missing_message_for_mapped_option_raises(monkeypatch):
    broken = {cat: dict(msgs) for cat, msgs in reveal.REVEAL_MESSAGES.items()}
    del broken[Category.CRM]["email"]
    monkeypatch.setattr(reveal, "REVEAL_MESSAGES", broken)
    with pytest.raises(UnmappedSelectionError):
        reveal_message(Category.CRM, "email")
