"""Count-up animation for the results reveal."""

from __future__ import annotations

import time
from typing import Callable

import numpy as np

from roi_engine.aggregate import AggregateResult, round_half_up, should_prompt_capture
from roi_engine.defaults import ANIMATION_DURATION_MS, ANIMATION_TICKS
from roi_engine.wizard import RESULTS_STATE


ANIMATED_FIELDS = (
    "total_current_spending",
    "monthly_savings",
    "annual_savings",
    "roi_percent",
    "hours_recovered_monthly",
)


def ease_out_schedule(ticks: int) -> np.ndarray:
    """Eased progress for ticks 1..ticks; the last entry is exactly 1.0."""
    progress = np.arange(1, ticks + 1, dtype=float) / float(ticks)
    return 1.0 - (1.0 - progress) ** 3


class AnimationHandle:
    """One run of the count-up; advanced tick by tick or by ``run``."""

    def __init__(self, result: AggregateResult, ticks: int, interval_s: float) -> None:
        self.result = result
        self.ticks = int(ticks)
        self.interval_s = float(interval_s)
        self.step = 0
        self.cancelled = False
        self._schedule = ease_out_schedule(self.ticks)
        self._values = {name: 0 for name in ANIMATED_FIELDS}

    @property
    def done(self) -> bool:
        return self.step >= self.ticks

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.done

    @property
    def capture_prompt(self) -> bool:
        return self.done and not self.cancelled and should_prompt_capture(self.result)

    def values(self) -> dict[str, float]:
        return dict(self._values)

    def final_values(self) -> dict[str, float]:
        return {name: getattr(self.result, name) for name in ANIMATED_FIELDS}

    def tick(self) -> dict[str, float] | None:
        if not self.active:
            return None
        self.step += 1
        if self.done:
            self._values = self.final_values()
        else:
            eased = float(self._schedule[self.step - 1])
            self._values = {
                name: round_half_up(getattr(self.result, name) * eased) for name in ANIMATED_FIELDS
            }
        return self.values()

    def cancel(self) -> None:
        self.cancelled = True

    def run(
        self,
        on_frame: Callable[[dict[str, float]], None],
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """Drive the remaining ticks; returns True when the run completed without cancellation."""
        while self.active:
            sleep(self.interval_s)
            if self.cancelled:
                break
            frame = self.tick()
            if frame is not None:
                on_frame(frame)
        return self.done and not self.cancelled


class RevealAnimation:
    """Owns at most one active ``AnimationHandle`` at a time."""

    def __init__(self, duration_ms: int = ANIMATION_DURATION_MS, ticks: int = ANIMATION_TICKS) -> None:
        if ticks <= 0:
            raise ValueError("ticks must be positive")
        if duration_ms < 0:
            raise ValueError("duration_ms must not be negative")
        self.duration_ms = duration_ms
        self.ticks = ticks
        self.handle: AnimationHandle | None = None

    @property
    def interval_s(self) -> float:
        return self.duration_ms / self.ticks / 1000.0

    def start(self, result: AggregateResult) -> AnimationHandle:
        self.cancel()
        self.handle = AnimationHandle(result, self.ticks, self.interval_s)
        return self.handle

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None

    def on_transition(self, result_provider: Callable[[], AggregateResult]) -> Callable[[str, str], None]:
        """Build a wizard listener that restarts on entering results and cancels on leaving."""

        def _listener(previous: str, current: str) -> None:
            if current == RESULTS_STATE:
                self.start(result_provider())
            elif previous == RESULTS_STATE:
                self.cancel()

        return _listener
