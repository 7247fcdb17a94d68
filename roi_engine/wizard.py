"""Survey wizard state machine.

The wizard has seven question steps followed by a results view:

* ``step_1`` asks for the team size and can always be left forward.
* ``step_2`` .. ``step_7`` ask one category each, in ``CATEGORY_ORDER``; moving
  forward requires an answer for that step's category.
* ``results`` is entered from ``step_7`` and ``back`` returns to ``step_7``.

Transitions are looked up in ``TRANSITIONS``, keyed by ``(state, event)``.
A missing key or a failing guard rejects the event and leaves the state as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from roi_engine.aggregate import AggregateResult, SelectionState, aggregate
from roi_engine.catalog import CATEGORY_ORDER, Category, lookup
from roi_engine.defaults import DEFAULTS
from roi_engine.tiers import clamp_team_size


TEAM_SIZE_STATE = "step_1"
RESULTS_STATE = "results"
EVENT_NEXT = "next"
EVENT_BACK = "back"

STEP_CATEGORIES: dict[str, Category] = {f"step_{n}": cat for n, cat in enumerate(CATEGORY_ORDER, start=2)}
QUESTION_STATES: tuple[str, ...] = (TEAM_SIZE_STATE, *STEP_CATEGORIES)
TOTAL_STEPS = len(QUESTION_STATES)

Guard = Callable[[SelectionState, str], bool]


def _always(selection: SelectionState, state: str) -> bool:
    return True


def _step_answered(selection: SelectionState, state: str) -> bool:
    return selection.answers.get(STEP_CATEGORIES[state]) is not None


@dataclass(frozen=True)
class Transition:
    target: str
    guard: Guard = _always


def _build_transitions() -> dict[tuple[str, str], Transition]:
    table: dict[tuple[str, str], Transition] = {}
    for idx, state in enumerate(QUESTION_STATES):
        is_last = idx == len(QUESTION_STATES) - 1
        forward = RESULTS_STATE if is_last else QUESTION_STATES[idx + 1]
        guard = _always if state == TEAM_SIZE_STATE else _step_answered
        table[(state, EVENT_NEXT)] = Transition(forward, guard)
        if idx > 0:
            table[(state, EVENT_BACK)] = Transition(QUESTION_STATES[idx - 1])
    table[(RESULTS_STATE, EVENT_BACK)] = Transition(QUESTION_STATES[-1])
    return table


TRANSITIONS = _build_transitions()

Listener = Callable[[str, str], None]


class Wizard:
    def __init__(self, team_size: int | None = None) -> None:
        self._initial_team_size = DEFAULTS["team_size"] if team_size is None else team_size
        self.selection = SelectionState(team_size=self._initial_team_size)
        self.state = TEAM_SIZE_STATE
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with (previous_state, new_state) after each transition."""
        self._listeners.append(listener)

    def _fire(self, event: str) -> bool:
        transition = TRANSITIONS.get((self.state, event))
        if transition is None or not transition.guard(self.selection, self.state):
            return False
        previous = self.state
        self.state = transition.target
        for listener in list(self._listeners):
            listener(previous, self.state)
        return True

    def next(self) -> bool:
        return self._fire(EVENT_NEXT)

    def back(self) -> bool:
        return self._fire(EVENT_BACK)

    def can_advance(self) -> bool:
        transition = TRANSITIONS.get((self.state, EVENT_NEXT))
        return transition is not None and transition.guard(self.selection, self.state)

    def set_answer(self, category: Any, option: str) -> None:
        cat = Category.coerce(category)
        lookup(cat, option)
        self.selection.answers[cat] = option

    def set_team_size(self, value) -> int:
        self.selection.team_size = clamp_team_size(value)
        return self.selection.team_size

    def reset(self) -> None:
        previous = self.state
        self.selection = SelectionState(team_size=self._initial_team_size)
        self.state = TEAM_SIZE_STATE
        if previous != self.state:
            for listener in list(self._listeners):
                listener(previous, self.state)

    @property
    def in_results(self) -> bool:
        return self.state == RESULTS_STATE

    @property
    def step_number(self) -> int:
        if self.in_results:
            return TOTAL_STEPS
        return QUESTION_STATES.index(self.state) + 1

    @property
    def current_category(self) -> Category | None:
        return STEP_CATEGORIES.get(self.state)

    @property
    def progress(self) -> float:
        return self.step_number / TOTAL_STEPS

    def result(self) -> AggregateResult:
        return aggregate(self.selection)
