from __future__ import annotations

import pytest

from roi_engine.aggregate import SelectionState
from roi_engine.catalog import CATEGORY_ORDER, COST_TABLE, HiddenCost, baseline_option
from roi_engine.wizard import Wizard


def _costliest_answers() -> dict:
    """Highest hidden-cost manual answer per category."""
    answers = {}
    for cat in CATEGORY_ORDER:
        hidden = {opt: e for opt, e in COST_TABLE[cat].items() if isinstance(e, HiddenCost)}
        answers[cat] = max(hidden, key=lambda opt: hidden[opt].monthly)
    return answers


@pytest.fixture
def costliest_answers() -> dict:
    return _costliest_answers()


@pytest.fixture
def empty_selection() -> SelectionState:
    return SelectionState(team_size=12)


@pytest.fixture
def costliest_selection(costliest_answers) -> SelectionState:
    return SelectionState(team_size=12, answers=costliest_answers)


@pytest.fixture
def baseline_selection() -> SelectionState:
    return SelectionState(team_size=5, answers={cat: baseline_option(cat) for cat in CATEGORY_ORDER})


@pytest.fixture
def wizard() -> Wizard:
    return Wizard(team_size=12)


@pytest.fixture
def answered_wizard(wizard, costliest_answers) -> Wizard:
    for cat, option in costliest_answers.items():
        wizard.set_answer(cat, option)
    return wizard
