"""Frame-based sprite animations that may also drift at a constant velocity."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from .geometry import Vec2
from .timing import Timer, TimerMode


class AnimationType(Enum):
    """What an animation does when it reaches its last frame."""

    REPEAT = "repeat"
    DESPAWN = "despawn"
    FREEZE = "freeze"


@dataclass
class Animation:
    """A sequence of frames shown at a fixed rate."""

    frames: List[Any]
    framerate: float
    variant: AnimationType = AnimationType.REPEAT
    frozen: bool = False
    current_frame: int = 0
    reverse: bool = False
    velocity: Vec2 = Vec2.ZERO
    position: Vec2 = Vec2.ZERO
    timer: Timer = field(init=False)

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("an animation needs at least one frame")
        if self.framerate <= 0:
            raise ValueError("framerate must be positive")
        self.timer = Timer(1.0 / self.framerate, TimerMode.REPEATING)

    def update(self, dt: float) -> bool:
        """Advance by ``dt`` seconds; return False once it should be removed."""
        self.position = self.position + self.velocity * dt
        self.timer.tick(dt)
        if self.frozen or not self.timer.just_finished:
            return True

        first, last = 0, len(self.frames) - 1
        if self.reverse:
            first, last = last, first

        if self.current_frame == last:
            if self.variant is AnimationType.REPEAT:
                self.current_frame = first
            elif self.variant is AnimationType.FREEZE:
                self.frozen = True
            else:
                return False
        elif self.reverse:
            self.current_frame -= 1
        else:
            self.current_frame += 1
        return True

    def image(self) -> Any:
        """The frame currently shown."""
        return self.frames[self.current_frame]