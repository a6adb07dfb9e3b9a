import random

import pytest

from merinobreakout.consts import (
    BALLAREA_MINX,
    BALL_RADIUS,
    BARREL_SPEED,
    BRICK_HEIGHT,
    INFOAREA_TIMER,
    LEVELS,
    LEVEL_TIMERS,
    NLIVES,
    PADDLE_GUN,
    PADDLE_MIN_SPEED,
    PADDLE_SIZES,
    UNLOCKED_PORTAL_TIMER,
)
from merinobreakout.geometry import Collision, RoundBody, Vec2, rc_to_idx, rc_to_xy
from merinobreakout.progress import Progress
from merinobreakout.world import (
    BRICK_IMPACT_IMAGES,
    Controls,
    GameState,
    PortalState,
    World,
    brick_variant,
)


@pytest.fixture
def progress(tmp_path):
    return Progress(username="TESTER", save_path=tmp_path / "save.txt")


def make_world(progress, level=0, seed=1):
    world = World(progress, rng=random.Random(seed))
    world.current_level = level
    world.enter_level()
    return world


def count_bricks(level, skip=" d"):
    return sum(ch not in skip for row in LEVELS[level] for ch in row)


def test_brick_variant():
    assert brick_variant("0") == 0
    assert brick_variant("e") == 14
    assert brick_variant(" ") is None
    with pytest.raises(ValueError):
        brick_variant("z")


def test_enter_level_zero(progress):
    world = make_world(progress)
    assert world.bricks_left == count_bricks(0)
    assert world.nballs == 1 and len(world.balls) == 1
    assert world.balls[0].caught
    assert world.nlives == NLIVES
    assert world.seconds_left == LEVEL_TIMERS[0]
    assert world.countdown_text == "210"
    assert world.portal.state is PortalState.CLOSED
    assert "start" in world.sounds
    assert world.loop_sound is None


def test_gold_bricks_not_counted(progress):
    world = make_world(progress, level=2)
    assert world.bricks_left == count_bricks(2)
    placed = sum(b is not None for b in world.grid)
    assert placed == count_bricks(2, skip=" ")


def test_level_three_loops_chime(progress):
    world = make_world(progress, level=3)
    assert world.loop_sound == "chime"
    assert "start" not in world.sounds


def test_unlocked_level_opens_portal(progress):
    progress.generate_code("L", 0)
    world = make_world(progress)
    assert world.seconds_left == UNLOCKED_PORTAL_TIMER
    assert world.portal.state is PortalState.OPENING
    assert world.header == "\nExit!"
    assert "portal" in world.sounds


def test_discovered_secret_shortens_timer(progress):
    progress.generate_code("X", 0)
    world = make_world(progress)
    assert world.seconds_left == LEVEL_TIMERS[0] - 30.0


def test_hit_brick_from_above_destroys_it(progress):
    world = make_world(progress)
    bx, by = rc_to_xy(3, 4)
    before = world.bricks_left
    body = RoundBody((bx, by + BRICK_HEIGHT / 2 + BALL_RADIUS - 2), BALL_RADIUS)
    hits = world.collide_with_bricks(body, Vec2(0.0, -1.0))
    assert hits == [Collision.TOP]
    assert world.grid[rc_to_idx(3, 4)] is None
    assert world.bricks_left == before - 1
    assert world.effects[0].anim.frames == list(BRICK_IMPACT_IMAGES[0])


def test_moving_away_does_not_hit(progress):
    world = make_world(progress)
    bx, by = rc_to_xy(3, 4)
    body = RoundBody((bx, by + BRICK_HEIGHT / 2 + BALL_RADIUS - 2), BALL_RADIUS)
    assert world.collide_with_bricks(body, Vec2(0.0, 1.0)) == []
    assert world.grid[rc_to_idx(3, 4)].variant == 0


def test_last_brick_gives_extra_life(progress):
    world = make_world(progress)
    world.bricks_left = 1
    lives = world.nlives
    bx, by = rc_to_xy(3, 4)
    body = RoundBody((bx, by + BRICK_HEIGHT / 2 + BALL_RADIUS - 2), BALL_RADIUS)
    world.collide_with_bricks(body, Vec2(0.0, -1.0))
    assert world.bricks_left == 0
    assert world.nlives == lives + 1


def test_two_hit_brick_weakens(progress):
    world = make_world(progress, level=5)
    bx, by = rc_to_xy(4, 4)
    before = world.bricks_left
    body = RoundBody((bx, by + BRICK_HEIGHT / 2 + BALL_RADIUS - 2), BALL_RADIUS)
    assert world.collide_with_bricks(body, Vec2(0.0, -1.0)) == [Collision.TOP]
    assert world.grid[rc_to_idx(4, 4)].variant == 11
    assert world.bricks_left == before


def test_gold_brick_indestructible(progress):
    world = make_world(progress, level=2)
    bx, by = rc_to_xy(18, 3)
    body = RoundBody((bx, by - BRICK_HEIGHT / 2 - BALL_RADIUS + 2), BALL_RADIUS)
    assert world.collide_with_bricks(body, Vec2(0.0, 1.0)) == [Collision.BOTTOM]
    assert world.grid[rc_to_idx(18, 3)].variant == 13


def test_spawned_barrels_follow_weights(progress):
    world = make_world(progress)
    barrels = [b for b in (world.spawn_barrel(0.0, 0.0) for _ in range(300)) if b]
    assert barrels
    weights = progress.barrel_weights()
    assert all(weights[b.variant] > 0 for b in barrels)
    assert all(b.anim.velocity == Vec2(0.0, -BARREL_SPEED) for b in barrels)
    assert len(world.barrels) == len(barrels)


def test_paddle_moves_caught_ball(progress):
    world = make_world(progress)
    x0 = world.paddle.x
    ball_x0 = world.balls[0].x
    world.paddle_update(Controls(right=True))
    step = PADDLE_MIN_SPEED * world.avg_delta
    assert world.paddle.x == pytest.approx(x0 + step)
    assert world.balls[0].x == pytest.approx(ball_x0 + step)
    assert world.balls[0].caught
    world.paddle_update(Controls(fire=True))
    assert not world.balls[0].caught


def test_paddle_clamped_at_wall(progress):
    world = make_world(progress)
    world.avg_delta = 1.0
    world.paddle_update(Controls(left=True, fast=True))
    assert world.paddle.x == BALLAREA_MINX + PADDLE_SIZES[0][0] / 2.0


def test_paddle_through_open_portal(progress):
    world = make_world(progress)
    world.portal_open = True
    world.avg_delta = 1.0
    world.paddle_update(Controls(right=True, fast=True))
    assert world.current_level == 1
    assert world.next_state is GameState.TRANSITION


def test_gun_fires_after_cooldown(progress):
    world = make_world(progress)
    world.paddle.variant = PADDLE_GUN
    world.avg_delta = 0.25
    world.paddle_update(Controls(fire=True))
    assert world.bullets == []
    world.paddle_update(Controls(fire=True))
    assert len(world.bullets) == 2
    assert "fire_bullet" in world.sounds


def test_portal_opens_when_bricks_cleared(progress):
    world = make_world(progress)
    world.bricks_left = 0
    world.portal_update()
    assert world.portal.state is PortalState.OPENING
    for _ in range(60):
        world.animate()
    world.portal_update()
    assert world.portal.state is PortalState.OPEN
    assert world.portal_open


def test_countdown_ticks(progress):
    world = make_world(progress)
    world.avg_delta = 1.0
    world.countdown_update()
    assert world.seconds_left == LEVEL_TIMERS[0] - 1
    assert world.countdown_text == "209"


def test_message_expires(progress):
    world = make_world(progress)
    world.show_message("hello")
    assert world.message == "hello"
    world.avg_delta = INFOAREA_TIMER
    world.countdown_update()
    assert world.message == ""


def test_unlocked_portal_closes_at_zero(progress):
    progress.generate_code("L", 0)
    world = make_world(progress)
    world.portal_open = True
    world.avg_delta = UNLOCKED_PORTAL_TIMER + 1
    world.countdown_update()
    assert world.portal.state is PortalState.CLOSING
    assert not world.portal_open
    assert world.portal.anim.reverse


def test_update_delta_converges(progress):
    world = World(progress)
    for _ in range(200):
        world.update_delta(0.05)
    assert world.avg_delta == pytest.approx(0.05)


def test_explosion_removed_after_animation(progress):
    world = make_world(progress)
    world.explode(0.0, 0.0, ["a", "b"])
    assert len(world.effects) == 1
    world.avg_delta = 0.06
    for _ in range(5):
        world.animate()
    assert world.effects == []