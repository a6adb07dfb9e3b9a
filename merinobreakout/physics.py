"""Ball, bullet, lives and power-up barrel systems for a level in play."""

from __future__ import annotations

import math
import random
from typing import List, Optional

from .consts import (
    BALLAREA_MAXX,
    BALLAREA_MAXY,
    BALLAREA_MINX,
    BALL_INITIAL_SPEED,
    BALL_MAX_SPEED,
    BALL_MIN_SPEED,
    BALL_NUDGE_IMPACTS,
    BALL_RADIUS,
    BALL_SPEED_DELTA,
    BALL_SPEEDUP_IMPACTS,
    BARREL_SIZE,
    BARREL_TITLES,
    BULLET_SIZE,
    BULLET_SPEED,
    GAMEAREA_CENTER_X,
    GAMEAREA_MINY,
    MULTIBALL_ANGLE_RANGE,
    MULTIBALL_MAX,
    PADDLE_GUN,
    PADDLE_LARGE,
    PADDLE_MAGNET,
    PADDLE_MAGNET_BORDER,
    PADDLE_MAX_ANGLE,
    PADDLE_MIN_ANGLE,
    PADDLE_SMALL,
)
from .geometry import Collision, RectBody, RoundBody, Vec2, collision
from .world import (
    BALL_IMPACT_IMAGES,
    BULLET_IMPACT_IMAGES,
    Ball,
    GameState,
    World,
)

BARREL_SOUNDS = (
    "bat_extend",
    "bat_gun",
    "bat_small",
    "magnet_barrel",
    "multiball",
    "speed_up",
    "powerup",  # Slow
    "powerup",  # Portal
    "extra_life",
    "powerup",  # Extra time
)
BULLET_HIT_SOUNDS = ("bullet_hit0", "bullet_hit1", "bullet_hit2", "bullet_hit3")

EXTRA_TIME_SECS = 30.0

_PADDLE_BARRELS = {0: PADDLE_LARGE, 1: PADDLE_GUN, 2: PADDLE_SMALL, 3: PADDLE_MAGNET}


def _percent(speed: float) -> int:
    return int(math.floor(speed / BALL_INITIAL_SPEED * 100.0 + 0.5))


def nudge_ball(direction: Vec2, max_rotation: float, rng: Optional[random.Random] = None) -> Vec2:
    """Rotate ``direction`` by a random angle, avoiding nearly axis-parallel results."""
    rng = rng if rng is not None else random.Random()
    rotation = Vec2.from_angle(rng.uniform(-max_rotation, max_rotation))
    new_direction = Vec2(*direction).rotate(rotation)
    if abs(new_direction.x) < 0.05 or abs(new_direction.y) < 0.05:
        new_direction = new_direction.rotate(Vec2.from_angle(0.1))
    return new_direction


def _bounce_off_paddle(world: World, ball: Ball, side: Collision) -> bool:
    """Apply a paddle hit; return True if the magnet caught the ball."""
    paddle = world.paddle
    p_w, p_h = paddle.size
    if side is Collision.TOP:
        if ball.direction.y < 0.0:
            slope = (PADDLE_MAX_ANGLE - PADDLE_MIN_ANGLE) / p_w
            p_maxx = paddle.x + p_w / 2.0
            p_minx = p_maxx - p_w
            dx = min(max(p_maxx - ball.x, 0.0), p_w)
            ball.direction = Vec2.from_angle(PADDLE_MIN_ANGLE + slope * dx)
            if (
                paddle.variant == PADDLE_MAGNET
                and p_minx + PADDLE_MAGNET_BORDER <= ball.x <= p_maxx - PADDLE_MAGNET_BORDER
            ):
                ball.caught = True
                ball.y = paddle.y + p_h / 2.0 + BALL_RADIUS
                world.play("magnet")
                return True
    elif side is Collision.LEFT:
        ball.direction = Vec2(-abs(ball.direction.x), ball.direction.y)
    elif side is Collision.RIGHT:
        ball.direction = Vec2(abs(ball.direction.x), ball.direction.y)
    else:
        ball.direction = Vec2(ball.direction.x, -abs(ball.direction.y))
    return False


def _bounce_off_brick(direction: Vec2, side: Collision) -> Vec2:
    if side is Collision.LEFT:
        return Vec2(-abs(direction.x), direction.y)
    if side is Collision.RIGHT:
        return Vec2(abs(direction.x), direction.y)
    if side is Collision.BOTTOM:
        return Vec2(direction.x, -abs(direction.y))
    return Vec2(direction.x, abs(direction.y))


def _move_ball(world: World, ball: Ball, dt: float) -> bool:
    """Move ``ball`` pixel by pixel through one frame; return False if it was lost."""
    paddle = world.paddle
    for _ in range(int(math.ceil(ball.speed * dt))):
        ball.x += ball.direction.x
        ball.y += ball.direction.y

        walls = []
        if ball.x - BALL_RADIUS < BALLAREA_MINX:
            ball.direction = Vec2(abs(ball.direction.x), ball.direction.y)
            walls.append((ball.x - BALL_RADIUS, ball.y))
        if ball.x + BALL_RADIUS > BALLAREA_MAXX:
            ball.direction = Vec2(-abs(ball.direction.x), ball.direction.y)
            walls.append((ball.x + BALL_RADIUS, ball.y))
        if ball.y + BALL_RADIUS > BALLAREA_MAXY:
            ball.direction = Vec2(ball.direction.x, -abs(ball.direction.y))
            walls.append((ball.x, ball.y + BALL_RADIUS))
        ball.impacts += len(walls)
        ball.impacts_since_paddle += len(walls)

        if ball.y + BALL_RADIUS < GAMEAREA_MINY:
            world.nballs -= 1
            return False

        for x, y in walls:
            world.explode(x, y, BALL_IMPACT_IMAGES)
            world.play("hit_wall")

        side = collision(RoundBody((ball.x, ball.y), BALL_RADIUS), (paddle.x, paddle.y), paddle.size)
        if side is not None:
            if not ball.in_collision:
                ball.impacts_since_paddle = 0
                if _bounce_off_paddle(world, ball, side):
                    break
                world.play("paddle")
                ball.in_collision = True
        else:
            ball.in_collision = False

        hits = world.collide_with_bricks(RoundBody((ball.x, ball.y), BALL_RADIUS), ball.direction)
        if hits:
            world.play("hit_brick")
        ball.impacts += len(hits)
        ball.impacts_since_paddle += len(hits)
        for side in hits:
            ball.direction = _bounce_off_brick(ball.direction, side)
    return True


def ball_update(world: World) -> None:
    """Move every free ball, bounce it off walls, paddle and bricks, and tune its speed."""
    dt = world.avg_delta
    survivors: List[Ball] = []
    for ball in list(world.balls):
        if ball.caught:
            survivors.append(ball)
            continue
        if _move_ball(world, ball, dt):
            survivors.append(ball)

        if ball.impacts > BALL_SPEEDUP_IMPACTS:
            ball.impacts = 0
            ball.speed = min(ball.speed * BALL_SPEED_DELTA, BALL_MAX_SPEED)
            world.show_message(f"Speed {_percent(ball.speed)}%")

        if ball.impacts_since_paddle > BALL_NUDGE_IMPACTS:
            ball.direction = nudge_ball(ball.direction, MULTIBALL_ANGLE_RANGE, world.rng)
            ball.impacts_since_paddle = 0
            world.show_message(f"Nudging Ball {_percent(ball.speed)}%")
    world.balls = survivors


def bullets_update(world: World) -> None:
    """Move bullets up; explode those that reach the top wall or hit a brick."""
    dt = world.avg_delta
    survivors = []
    for bullet in world.bullets:
        bullet.y += BULLET_SPEED * dt
        top = bullet.y + BULLET_SIZE[1] / 2.0
        if top > BALLAREA_MAXY or world.collide_with_bricks(
            RectBody((bullet.x, bullet.y), BULLET_SIZE), Vec2(0.0, 1.0)
        ):
            world.explode(bullet.x, top, BULLET_IMPACT_IMAGES)
            world.play(world.rng.choice(BULLET_HIT_SOUNDS))
        else:
            survivors.append(bullet)
    world.bullets = survivors


def lives_update(world: World) -> None:
    """Take a life when the last ball is lost and keep the lives text current."""
    if world.nballs == 0:
        world.nlives -= 1
        if world.nlives == 0:
            world.next_state = GameState.TRANSITION
            return
        world.paddle.variant = 0
        world.paddle.x = GAMEAREA_CENTER_X
        world.spawn_ball(world.paddle.x)
        world.play("start")

    if world.lives_displayed != world.nlives:
        world.lives_text = f"Lives: {world.nlives}"
        world.lives_displayed = world.nlives


def barrels_update(world: World) -> None:
    """Collect barrels touching the paddle, drop lost ones and apply power-ups."""
    paddle = world.paddle
    paddle_size = paddle.size
    new_variant = paddle.variant
    multiball = 0
    delta_speed = 1.0
    collected = 0

    kept = []
    for barrel in world.barrels:
        hit = collision(RectBody((barrel.x, barrel.y), BARREL_SIZE), (paddle.x, paddle.y), paddle_size)
        if hit is not None:
            variant = barrel.variant
            if variant in _PADDLE_BARRELS:
                new_variant = _PADDLE_BARRELS[variant]
            elif variant == 4:
                multiball += 1
            elif variant == 5:
                delta_speed *= BALL_SPEED_DELTA
            elif variant == 6:
                delta_speed /= BALL_SPEED_DELTA
            elif variant == 9:
                if math.ceil(world.countdown.remaining()) > 0:
                    world.countdown.set_duration(world.countdown.duration + EXTRA_TIME_SECS)
            world.show_message(BARREL_TITLES[variant])
            collected += 1
            world.play(BARREL_SOUNDS[variant])
        elif barrel.y < GAMEAREA_MINY:
            continue
        else:
            kept.append(barrel)
    world.barrels = kept

    if collected == 0:
        return

    if new_variant != paddle.variant:
        paddle.variant = new_variant

    balls: List[Ball] = []
    for ball in list(world.balls):
        if delta_speed != 1.0:
            ball.speed = min(max(ball.speed * delta_speed, BALL_MIN_SPEED), BALL_MAX_SPEED)
            ball.impacts = 0
            world.message = f"Speed {_percent(ball.speed)}%"

        if paddle.variant != PADDLE_MAGNET:
            ball.caught = False

        remaining = multiball
        split = False
        while remaining > 0 and not ball.caught and world.nballs < MULTIBALL_MAX - 1:
            remaining -= 1
            for _ in range(3):
                balls.append(
                    Ball(
                        x=ball.x,
                        y=ball.y,
                        direction=nudge_ball(ball.direction, MULTIBALL_ANGLE_RANGE, world.rng),
                        speed=ball.speed,
                        caught=False,
                    )
                )
            split = True
            world.nballs += 2
        if not split:
            balls.append(ball)
    world.balls = balls