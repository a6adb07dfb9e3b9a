"""Meanies: enemies that wander down the game area until something hits them."""

from __future__ import annotations

import math
from typing import List

from .animation import Animation, AnimationType
from .consts import (
    BALL_RADIUS,
    BULLET_SIZE,
    MEANIES_FRAMERATE,
    MEANIES_MAX,
    MEANIES_MAX_ANGLE,
    MEANIES_MAXX,
    MEANIES_MAXY,
    MEANIES_MIN_ANGLE,
    MEANIES_MINX,
    MEANIES_MINY,
    MEANIES_PER_SECOND,
    MEANIES_PORTAL_X,
    MEANIES_PORTAL_Y,
    MEANIES_TYPES,
    Secret,
)
from .geometry import RectBody, RoundBody, Vec2, collision
from .physics import BULLET_HIT_SOUNDS
from .world import BULLET_IMPACT_IMAGES, MEANIE_IMAGES, Meanie, World

_WANDER_STEP = math.pi / 16.0


def meanie_destroy(world: World, meanie: Meanie) -> None:
    """Blow ``meanie`` up and remove it from the level."""
    world.explode(meanie.x, meanie.y, BULLET_IMPACT_IMAGES)
    world.meanies = [m for m in world.meanies if m is not meanie]
    world.nmeanies -= 1


def _move(world: World, meanie: Meanie, dt: float) -> bool:
    """Move one meanie; return False if it left through the bottom."""
    if meanie.y > MEANIES_MAXY:
        meanie.y -= dt * meanie.speed
        return True

    # Random walk down the screen, reflecting the heading at its limits.
    meanie.angle += world.rng.uniform(-_WANDER_STEP, _WANDER_STEP)
    if meanie.angle < MEANIES_MIN_ANGLE:
        meanie.angle = 2.0 * MEANIES_MIN_ANGLE - meanie.angle
    elif meanie.angle > MEANIES_MAX_ANGLE:
        meanie.angle = 2.0 * MEANIES_MAX_ANGLE - meanie.angle

    direction = Vec2.from_angle(meanie.angle)
    meanie.y += dt * direction.y * meanie.speed
    meanie.x += dt * direction.x * meanie.speed
    if meanie.x < MEANIES_MINX:
        meanie.x = 2.0 * MEANIES_MINX - meanie.x
        meanie.angle = math.pi - meanie.angle
    elif meanie.x > MEANIES_MAXX:
        meanie.x = 2.0 * MEANIES_MAXX - meanie.x
        meanie.angle = -math.pi - meanie.angle

    if meanie.y < MEANIES_MINY:
        world.meanies = [m for m in world.meanies if m is not meanie]
        world.nmeanies -= 1
        return False
    return True


def _check_hits(world: World, meanie: Meanie) -> None:
    pos = (meanie.x, meanie.y)
    size = meanie.size
    paddle = world.paddle

    if collision(RectBody((paddle.x, paddle.y), paddle.size), pos, size) is not None:
        meanie_destroy(world, meanie)
        return

    for bullet in world.bullets:
        if collision(RectBody((bullet.x, bullet.y), BULLET_SIZE), pos, size) is not None:
            meanie_destroy(world, meanie)
            world.bullets = [b for b in world.bullets if b is not bullet]
            world.play(world.rng.choice(BULLET_HIT_SOUNDS))
            return

    for ball in world.balls:
        if ball.caught:
            continue
        if collision(RoundBody((ball.x, ball.y), BALL_RADIUS), pos, size) is not None:
            meanie_destroy(world, meanie)
            ball.direction = Vec2(ball.direction.x, -ball.direction.y)
            return


def _maybe_spawn(world: World, dt: float) -> None:
    if world.nmeanies >= MEANIES_MAX or not world.progress.secret_is_unlocked(Secret.MEANIES):
        return
    if world.rng.random() >= MEANIES_PER_SECOND * dt:
        return
    variant = world.rng.randrange(MEANIES_TYPES)
    portal = world.rng.randrange(len(MEANIES_PORTAL_X))
    anim = Animation(
        list(MEANIE_IMAGES[variant]),
        MEANIES_FRAMERATE,
        AnimationType.REPEAT,
        position=Vec2(MEANIES_PORTAL_X[portal], MEANIES_PORTAL_Y),
    )
    world.meanies.append(Meanie(variant, anim))
    world.nmeanies += 1


def meanies_update(world: World) -> None:
    """Move meanies, destroy those hit by paddle, bullets or balls, and spawn new ones."""
    dt = world.avg_delta
    current: List[Meanie] = list(world.meanies)
    for meanie in current:
        if _move(world, meanie, dt):
            _check_hits(world, meanie)
    _maybe_spawn(world, dt)