"""Countdown timers driven by explicit time steps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

_MAX_TIMES = 2**32 - 1


class TimerMode(Enum):
    """Whether a timer stops at its end or starts over."""

    ONCE = "once"
    REPEATING = "repeating"


@dataclass
class Timer:
    """A timer that advances only when ticked, measured in seconds."""

    duration: float
    mode: TimerMode = TimerMode.ONCE
    elapsed: float = 0.0
    finished: bool = False
    times_finished_this_tick: int = 0

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError("timer duration must not be negative")

    @property
    def just_finished(self) -> bool:
        """True if the timer reached its end during the last tick."""
        return self.times_finished_this_tick > 0

    def tick(self, dt: float) -> "Timer":
        """Advance the timer by ``dt`` seconds."""
        if dt < 0:
            raise ValueError("cannot tick a timer backwards")
        if self.mode is TimerMode.ONCE and self.finished:
            self.times_finished_this_tick = 0
            return self

        self.elapsed += dt
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif self.mode is TimerMode.REPEATING:
            if self.duration > 0:
                self.times_finished_this_tick = min(
                    int(self.elapsed // self.duration), _MAX_TIMES
                )
                self.elapsed = math.fmod(self.elapsed, self.duration)
            else:
                self.times_finished_this_tick = _MAX_TIMES
                self.elapsed = 0.0
        else:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        return self

    def reset(self) -> None:
        """Start the timer again from zero."""
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0

    def remaining(self) -> float:
        """Seconds left before the timer ends."""
        return max(self.duration - self.elapsed, 0.0)

    def set_duration(self, duration: float) -> None:
        """Change the length of the timer without resetting it."""
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = duration