#!/usr/bin/env python3
"""
Filename: schedule.py
Author: Vojtěch Havlíček
Created: 2025-08-02
Description: Piecewise-constant schedules indexed by turn number.
License: MIT
"""

from bisect import bisect_right

from arena.constants import TEMPERATURE_DROP_TURN, TEMPERATURE_FINAL, TEMPERATURE_START


class StepSchedule:
    """
    A step schedule: `initial` until the first threshold, then the value
    paired with the last threshold that is <= turn.

    Example:
        StepSchedule(1.0, [(10, 0.3), (20, 0.1)])
        turns 0..9 -> 1.0, turns 10..19 -> 0.3, turns 20.. -> 0.1
    """

    def __init__(self, initial: float, steps=()):
        steps = [(int(turn), float(value)) for turn, value in steps]
        thresholds = [turn for turn, _ in steps]
        if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError(f"[StepSchedule] Thresholds must be strictly increasing, got {thresholds}")
        if thresholds and thresholds[0] < 0:
            raise ValueError(f"[StepSchedule] Thresholds must be non-negative, got {thresholds}")
        values = [float(initial)] + [value for _, value in steps]
        if any(value <= 0 for value in values):
            raise ValueError(f"[StepSchedule] Values must be positive, got {values}")

        self.initial = float(initial)
        self.steps = steps
        self._thresholds = thresholds

    @classmethod
    def constant(cls, value: float) -> "StepSchedule":
        return cls(value)

    def value_at(self, turn: int) -> float:
        if turn < 0:
            raise ValueError(f"[StepSchedule] Turn must be non-negative, got {turn}")
        idx = bisect_right(self._thresholds, turn)
        if idx == 0:
            return self.initial
        return self.steps[idx - 1][1]

    def __getitem__(self, turn: int) -> float:
        return self.value_at(turn)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StepSchedule):
            return NotImplemented
        return self.initial == other.initial and self.steps == other.steps

    def __repr__(self) -> str:
        return f"StepSchedule({self.initial}, {self.steps})"


def default_temperature_schedule() -> StepSchedule:
    """Explore at the start of the game, then play close to greedily."""
    return StepSchedule(TEMPERATURE_START, [(TEMPERATURE_DROP_TURN, TEMPERATURE_FINAL)])
