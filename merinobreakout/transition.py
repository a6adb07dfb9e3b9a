"""Banners shown between levels, and the rewards earned when a level is beaten."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .consts import (
    HINTS,
    LEVEL_COLORS,
    LEVEL_TITLES,
    NLEVELS,
    NLIVES,
    TRANSITION_BANNER_SECS,
    Secret,
)
from .timing import Timer, TimerMode
from .world import WHITE, Color, GameState, World

_SECRET_FOUND = "You Discovered a Secret\n(check the Shop)"
_PORTAL_UNLOCKED = "You permanently unlocked the\nportal in this level..."
_HELL_SEALED = (
    "The gates of Hell are sealed.\n"
    "Only those who possess the ancient knowledge may enter."
)
_CREDITS_HIDDEN = (
    "You completed the Game but tales of those \n"
    "who crafted this journey remain concealed.\n"
    "Only the most dedicated players shall \n"
    "witness these sacred scrolls."
)
_GAME_COMPLETED = (
    "You completed the game! Congratulations!\n"
    "Make sure to visit the CREDITs screen from the menu!\n"
)


@dataclass
class Transition:
    """A sequence of banners shown one after another."""

    texts: List[str]
    colors: List[Color]
    end_game: bool = False
    text: str = ""
    color: Color = WHITE
    idx: int = 0
    timer: Timer = field(default_factory=lambda: Timer(TRANSITION_BANNER_SECS, TimerMode.ONCE))

    def update(self, dt: float) -> Optional[GameState]:
        """Advance by ``dt`` seconds; return the next state once all banners are shown."""
        self.timer.tick(dt)
        if self.timer.just_finished or self.idx == 0:
            if self.idx < len(self.texts):
                self.text = self.texts[self.idx]
                self.color = self.colors[self.idx]
                self.idx += 1
                self.timer.reset()
            elif self.end_game:
                return GameState.MENU
            else:
                return GameState.GAME
        return None


def transition_enter(world: World) -> Transition:
    """Build the banners for entering ``world.current_level`` and grant earned codes."""
    progress = world.progress

    if world.nlives == 0:
        world.nlives = NLIVES
        return Transition(["Game Over"], [WHITE], end_game=True, text="Game Over")

    texts: List[str] = []
    colors: List[Color] = []
    end_game = False
    level = world.current_level

    if world.nlives > 0 and level > 0 and world.seconds_left > 0.0:
        prev = level - 1
        if not progress.secrets_generated[prev]:
            progress.generate_code("X", prev)
            texts.append(_SECRET_FOUND)
            colors.append(WHITE)
        elif not progress.levels_unlocked[prev]:
            progress.generate_code("L", prev)
            texts.append(_PORTAL_UNLOCKED)
            colors.append(WHITE)

    if level == 3 and not progress.secret_is_unlocked(Secret.HELL):
        texts.append(_HELL_SEALED)
        colors.append(WHITE)
        end_game = True
    elif level == NLEVELS and not progress.secret_is_unlocked(Secret.CREDITS):
        texts.append(_CREDITS_HIDDEN)
        colors.append(WHITE)
        end_game = True
    elif level == NLEVELS and progress.secrets_unlocked[Secret.CREDITS]:
        texts.append(_GAME_COMPLETED)
        colors.append(WHITE)
        end_game = True
    else:
        hint = world.rng.choice(HINTS)
        texts.append(f"Level #{level + 1}\n{LEVEL_TITLES[level]}\n\n\n{hint}")
        colors.append(LEVEL_COLORS[level])

    return Transition(texts, colors, end_game=end_game)