"""The state of one level in play, with the systems that drive it.

Handles bricks, paddle, portal, countdown and the timed information
message. Images and sounds are referred to by name; rendering and audio
are done elsewhere.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .animation import Animation, AnimationType
from .consts import (
    BALLAREA_MAXX,
    BALLAREA_MINX,
    BALL_IMPACT_FRAMES,
    BALL_INITIAL_ANGLE,
    BALL_INITIAL_SPEED,
    BALL_RADIUS,
    BARREL_CHANCE,
    BARREL_FRAMERATE,
    BARREL_FRAMES,
    BARREL_SPEED,
    BARREL_TYPES,
    BRICK_FRAMERATE,
    BRICK_FRAMES,
    BRICK_SIZE,
    BULLET_IMPACT_FRAMES,
    FRAC_PI_2,
    GAMEAREA_CENTER_X,
    GAMEAREA_MAXX,
    GAMEAREA_MINY,
    GRID_COLS,
    GRID_ROWS,
    GUN_LEFT_X,
    GUN_RIGHT_X,
    GUN_TIMER_SECS,
    GUN_Y,
    IBRICK_FRAMES,
    INFOAREA_TIMER,
    LEVELS,
    LEVEL_TIMERS,
    MEANIES_NFRAMES,
    MEANIES_SIZES,
    MEANIES_SPEED,
    MEANIES_TYPES,
    NLIVES,
    PADDLE_GUN,
    PADDLE_MAX_SPEED,
    PADDLE_MIN_SPEED,
    PADDLE_SIZES,
    PADDLE_Y,
    PORTAL_FRAMERATE,
    PORTAL_FRAMES,
    UNLOCKED_PORTAL_TIMER,
    Secret,
)
from .geometry import Body, Collision, Vec2, collision, rc_to_idx, rc_to_xy, xy_to_rc
from .progress import Progress
from .timing import Timer, TimerMode

Color = Tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
UNLOCKED_COLOR: Color = (0.1, 1.0, 0.1, 1.0)
HARD_COLOR: Color = (1.0, 0.1, 0.1, 1.0)

PADDLE_IMAGES = ("bat00", "bat33", "bat23", "bat43", "bat13")
PADDLE_SHADOW_IMAGES = ("bats00", "bats33", "bats23", "bats43", "bats13")


def _brick_impact_images() -> Tuple[Tuple[str, ...], ...]:
    frames: List[List[str]] = [
        [f"impact{b:x}{f:x}" for f in range(BRICK_FRAMES)] for b in range(13)
    ]
    frames.append([])
    frames.append([])
    for f in range(IBRICK_FRAMES):
        frames[12].append(f"impactd{f:x}")
        frames[13].append(f"impactd{f:x}")
    frames[14].extend(f"impactc{f:x}" for f in range(BRICK_FRAMES))
    return tuple(tuple(entry) for entry in frames)


BRICK_IMPACT_IMAGES = _brick_impact_images()
BARREL_IMAGES = tuple(
    tuple(f"barrel{b:x}{f:x}" for f in range(BARREL_FRAMES)) for b in range(BARREL_TYPES)
)
PORTAL_IMAGES = tuple(f"portal_exit{f:x}" for f in range(PORTAL_FRAMES))
BALL_IMPACT_IMAGES = tuple(f"impactc{f:x}" for f in range(BALL_IMPACT_FRAMES))
BULLET_IMPACT_IMAGES = tuple(f"impactf{f:x}" for f in range(BULLET_IMPACT_FRAMES))
MEANIE_IMAGES = tuple(
    tuple(f"meanie{m:x}{f:x}" for f in range(MEANIES_NFRAMES[m])) for m in range(MEANIES_TYPES)
)

PORTAL_POSITION = Vec2(GAMEAREA_MAXX - 55.0, GAMEAREA_MINY + 35.0)

_BRICK_CHARS = "0123456789abcde"


def brick_variant(char: str) -> Optional[int]:
    """Brick type for a level-map character, or None for an empty cell."""
    if char == " ":
        return None
    if len(char) != 1 or char not in _BRICK_CHARS:
        raise ValueError(f"invalid brick character: {char!r}")
    return _BRICK_CHARS.index(char)


class GameState(Enum):
    """The screens the game moves between."""

    SPLASH = "splash"
    MENU = "menu"
    SHOP = "shop"
    GAME = "game"
    TRANSITION = "transition"


class PortalState(Enum):
    """States of the level exit portal."""

    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


@dataclass(frozen=True)
class Controls:
    """Keys held during a frame; ``fire`` releases caught balls and fires the gun."""

    left: bool = False
    right: bool = False
    fast: bool = False
    fire: bool = False


@dataclass
class Effect:
    """A short-lived animation such as an explosion or impact."""

    anim: Animation

    @property
    def image(self) -> str:
        return self.anim.image()


@dataclass
class Paddle:
    """The player's paddle."""

    x: float = GAMEAREA_CENTER_X
    y: float = PADDLE_Y
    variant: int = 0
    gun_timer: Timer = field(default_factory=lambda: Timer(GUN_TIMER_SECS, TimerMode.ONCE))

    @property
    def size(self) -> Tuple[float, float]:
        return PADDLE_SIZES[self.variant]

    @property
    def image(self) -> str:
        return PADDLE_IMAGES[self.variant]

    @property
    def shadow_image(self) -> str:
        return PADDLE_SHADOW_IMAGES[self.variant]


@dataclass
class Ball:
    """A ball and its physics state."""

    x: float
    y: float
    direction: Vec2 = field(default_factory=lambda: Vec2.from_angle(BALL_INITIAL_ANGLE))
    speed: float = BALL_INITIAL_SPEED
    impacts: int = 0
    impacts_since_paddle: int = 0
    caught: bool = True
    in_collision: bool = False


@dataclass
class Bullet:
    """A bullet fired by the gun paddle."""

    x: float
    y: float


@dataclass
class Barrel:
    """A falling power-up barrel; its position lives in its animation."""

    variant: int
    anim: Animation

    @property
    def x(self) -> float:
        return self.anim.position.x

    @property
    def y(self) -> float:
        return self.anim.position.y


@dataclass
class Meanie:
    """A wandering enemy; its position lives in its animation."""

    variant: int
    anim: Animation
    speed: float = MEANIES_SPEED
    angle: float = -FRAC_PI_2

    @property
    def x(self) -> float:
        return self.anim.position.x

    @x.setter
    def x(self, value: float) -> None:
        self.anim.position = Vec2(value, self.anim.position.y)

    @property
    def y(self) -> float:
        return self.anim.position.y

    @y.setter
    def y(self, value: float) -> None:
        self.anim.position = Vec2(self.anim.position.x, value)

    @property
    def size(self) -> Tuple[float, float]:
        return MEANIES_SIZES[self.variant][self.anim.current_frame]


@dataclass
class Brick:
    """A brick in the grid; ``image`` is fixed when it is placed."""

    variant: int
    row: int
    col: int
    image: str
    shadow: bool = True

    @property
    def position(self) -> Tuple[float, float]:
        return rc_to_xy(self.row, self.col)


@dataclass
class Portal:
    """The exit portal at the bottom right of the game area."""

    state: PortalState
    anim: Animation


def _new_portal(state: PortalState) -> Portal:
    anim = Animation(
        list(PORTAL_IMAGES),
        PORTAL_FRAMERATE,
        AnimationType.FREEZE,
        frozen=state is PortalState.CLOSED,
        position=PORTAL_POSITION,
    )
    return Portal(state, anim)


class World:
    """Everything that exists while a level is played."""

    def __init__(self, progress: Progress, rng: Optional[random.Random] = None) -> None:
        self.progress = progress
        self.rng = rng if rng is not None else random.Random()
        self.grid: List[Optional[Brick]] = [None] * (GRID_ROWS * GRID_COLS)
        self.nlives = NLIVES
        self.nballs = 0
        self.nmeanies = 0
        self.current_level = 0
        self.bricks_left = 0
        self.portal_open = False
        self.seconds_left = 0.0
        self.avg_delta = 1.0 / 60.0
        self.paddle = Paddle()
        self.balls: List[Ball] = []
        self.bullets: List[Bullet] = []
        self.barrels: List[Barrel] = []
        self.meanies: List[Meanie] = []
        self.effects: List[Effect] = []
        self.portal = _new_portal(PortalState.CLOSED)
        self.countdown = Timer(0.0, TimerMode.ONCE)
        self.countdown_text = "0"
        self.countdown_color: Color = WHITE
        self.header = ""
        self.message = ""
        self.message_timer = Timer(INFOAREA_TIMER, TimerMode.ONCE)
        self.lives_text = "Lives: -"
        self.lives_displayed = 0
        self.background = "arena0"
        self.loop_sound: Optional[str] = None
        self.sounds: List[str] = []
        self.next_state: Optional[GameState] = None

    def enter_level(self) -> None:
        """Set up ``current_level``: paddle, first ball, bricks, portal and texts."""
        progress = self.progress
        level = self.current_level

        self.paddle = Paddle()
        self.balls = []
        self.bullets = []
        self.barrels = []
        self.meanies = []
        self.effects = []
        self.sounds = []
        self.loop_sound = None
        self.next_state = None

        self.nballs = 0
        self.spawn_ball(GAMEAREA_CENTER_X)
        self.nmeanies = 0

        self.seconds_left = LEVEL_TIMERS[level]
        self.header = "Beat Timer\nto Discover\nSecret"
        self.countdown_color = WHITE
        if progress.level_is_unlocked(level):
            self.header = "\nExit!"
            self.seconds_left = UNLOCKED_PORTAL_TIMER
            self.countdown_color = UNLOCKED_COLOR
        elif progress.secret_is_discovered(level):
            self.header = "Beat Time\nto Unlock\nLevel"
            self.seconds_left = LEVEL_TIMERS[level] - 30.0
            self.countdown_color = HARD_COLOR
        self.countdown = Timer(self.seconds_left, TimerMode.ONCE)
        self.countdown_text = f"{self.seconds_left:.0f}"

        self.message = ""
        self.message_timer = Timer(INFOAREA_TIMER, TimerMode.ONCE)

        self.portal_open = False
        if progress.level_is_unlocked(level):
            self.play("portal")
            self.portal = _new_portal(PortalState.OPENING)
        else:
            self.portal = _new_portal(PortalState.CLOSED)

        if level == 0:
            self.nlives = NLIVES
        self.lives_text = "Lives: -"
        self.lives_displayed = 0
        self.background = f"arena{level:x}"

        xray = progress.secret_is_unlocked(Secret.XRAY)
        self.bricks_left = 0
        self.grid = [None] * (GRID_ROWS * GRID_COLS)
        for r, row in enumerate(LEVELS[level]):
            for c, char in enumerate(row):
                variant = brick_variant(char)
                if variant is None:
                    continue
                image = "bricka" if variant == 14 and xray else f"brick{variant:x}"
                self.grid[rc_to_idx(r, c)] = Brick(
                    variant, r, c, image, shadow=variant != 14 or xray
                )
                if variant != 13:
                    self.bricks_left += 1

        if level == 3:
            self.loop_sound = "chime"
        else:
            self.play("start")

    def spawn_ball(self, paddle_x: float) -> Ball:
        """Put a new ball on top of the paddle, caught."""
        ball = Ball(
            x=paddle_x + 5.0,
            y=PADDLE_Y + self.paddle.size[1] / 2.0 + BALL_RADIUS,
        )
        self.balls.append(ball)
        self.nballs += 1
        return ball

    def spawn_barrel(self, x: float, y: float) -> Optional[Barrel]:
        """Maybe drop a power-up barrel from ``(x, y)``."""
        if self.rng.random() >= BARREL_CHANCE:
            return None
        weights = self.progress.barrel_weights()
        variant = self.rng.choices(range(BARREL_TYPES), weights=weights)[0]
        anim = Animation(
            list(BARREL_IMAGES[variant]),
            BARREL_FRAMERATE,
            AnimationType.REPEAT,
            velocity=Vec2(0.0, -BARREL_SPEED),
            position=Vec2(x, y),
        )
        barrel = Barrel(variant, anim)
        self.barrels.append(barrel)
        return barrel

    def collide_with_bricks(self, body: Body, direction) -> List[Collision]:
        """Hit the bricks around ``body`` moving along ``direction``; return the sides hit."""
        bx, by = body.pos
        dx, dy = direction
        body_r, body_c = xy_to_rc(bx, by)
        min_row = max(body_r - 1, 0)
        max_row = min(body_r + 1, GRID_ROWS - 1)
        min_col = max(body_c - 1, 0)
        max_col = min(body_c + 1, GRID_COLS - 1)

        collisions: List[Collision] = []
        for r in range(min_row, max_row + 1):
            for c in range(min_col, max_col + 1):
                idx = rc_to_idx(r, c)
                brick = self.grid[idx]
                if brick is None:
                    continue
                brick_x, brick_y = rc_to_xy(r, c)
                side = collision(body, (brick_x, brick_y), BRICK_SIZE)
                if side is None:
                    continue
                if (
                    (side is Collision.LEFT and dx <= 0.0)
                    or (side is Collision.RIGHT and dx >= 0.0)
                    or (side is Collision.BOTTOM and dy <= 0.0)
                    or (side is Collision.TOP and dy >= 0.0)
                ):
                    continue
                collisions.append(side)

                self.explode(brick_x, brick_y, BRICK_IMPACT_IMAGES[brick.variant])

                if brick.variant < 12 or brick.variant == 14:
                    self.grid[idx] = None
                    self.bricks_left -= 1
                    if self.bricks_left == 0:
                        self.nlives += 1
                    self.spawn_barrel(brick_x, brick_y)
                elif brick.variant == 12:
                    brick.variant = 11
        return collisions

    def show_message(self, text: str) -> None:
        """Show ``text`` in the info area for a few seconds."""
        self.message = text
        self.message_timer.reset()

    def explode(self, x: float, y: float, frames) -> Effect:
        """Start a one-shot animation at ``(x, y)``."""
        effect = Effect(
            Animation(
                list(frames),
                BRICK_FRAMERATE,
                AnimationType.DESPAWN,
                position=Vec2(x, y),
            )
        )
        self.effects.append(effect)
        return effect

    def play(self, sound: str) -> None:
        """Queue a sound effect to be played."""
        self.sounds.append(sound)

    def update_delta(self, frame_dt: float) -> float:
        """Fold a frame time into the smoothed time step and return it."""
        self.avg_delta = 0.8 * self.avg_delta + 0.2 * frame_dt
        return self.avg_delta

    def paddle_update(self, controls: Controls) -> None:
        """Move the paddle, carry or release caught balls and fire the gun."""
        paddle = self.paddle
        dt = self.avg_delta

        direction = (1.0 if controls.right else 0.0) - (1.0 if controls.left else 0.0)
        speed = PADDLE_MAX_SPEED if controls.fast else PADDLE_MIN_SPEED

        delta_x = 0.0
        if direction != 0.0:
            new_x = paddle.x + direction * speed * dt
            min_x = BALLAREA_MINX + paddle.size[0] / 2.0
            max_x = BALLAREA_MAXX - paddle.size[0] / 2.0
            if self.portal_open:
                max_x += 20.0
                if new_x > max_x:
                    self.current_level += 1
                    self.next_state = GameState.TRANSITION
                    return
            new_x = min(max(new_x, min_x), max_x)
            delta_x = new_x - paddle.x
            paddle.x = new_x

        for ball in self.balls:
            if ball.caught:
                ball.x += delta_x
                ball.caught = not controls.fire

        paddle.gun_timer.tick(dt)
        if paddle.variant == PADDLE_GUN and controls.fire and paddle.gun_timer.finished:
            self.bullets.append(Bullet(paddle.x + GUN_LEFT_X, paddle.y + GUN_Y))
            self.play("fire_bullet")
            self.bullets.append(Bullet(paddle.x + GUN_RIGHT_X, paddle.y + GUN_Y))
            paddle.gun_timer.reset()

    def portal_update(self) -> None:
        """Open the portal once the bricks are gone and track its animation."""
        portal = self.portal
        if self.bricks_left == 0 and portal.state is PortalState.CLOSED:
            portal.state = PortalState.OPENING
            portal.anim.frozen = False
            portal.anim.reverse = False
            self.play("portal")
        if portal.state is PortalState.OPENING and portal.anim.frozen:
            portal.state = PortalState.OPEN
            self.portal_open = True
        if portal.state is PortalState.CLOSING and portal.anim.frozen:
            portal.state = PortalState.CLOSED

    def countdown_update(self) -> None:
        """Run the level countdown and expire the info-area message."""
        dt = self.avg_delta
        self.countdown.tick(dt)
        remaining = math.ceil(self.countdown.remaining())
        if self.seconds_left != remaining:
            self.seconds_left = float(remaining)
            self.countdown_text = f"{self.seconds_left:.0f}"

        if self.countdown.just_finished and self.progress.level_is_unlocked(self.current_level):
            self.portal.anim.frozen = False
            self.portal.anim.reverse = True
            self.portal.state = PortalState.CLOSING
            self.portal_open = False
            self.play("portal")

        self.message_timer.tick(dt)
        if self.message_timer.just_finished:
            self.message = ""

    def animate(self) -> None:
        """Advance every animation; drop effects that have finished."""
        dt = self.avg_delta
        self.effects = [effect for effect in self.effects if effect.anim.update(dt)]
        self.barrels = [barrel for barrel in self.barrels if barrel.anim.update(dt)]
        kept = []
        for meanie in self.meanies:
            if meanie.anim.update(dt):
                kept.append(meanie)
            else:
                self.nmeanies -= 1
        self.meanies = kept
        self.portal.anim.update(dt)