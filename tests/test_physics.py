import math
import random

import pytest

from merinobreakout.animation import Animation
from merinobreakout.consts import (
    BALLAREA_MAXY,
    BALLAREA_MINX,
    BALL_INITIAL_SPEED,
    BALL_RADIUS,
    BALL_SPEED_DELTA,
    BARREL_FRAMERATE,
    BARREL_TITLES,
    GAMEAREA_CENTER_X,
    GAMEAREA_MINY,
    NLIVES,
    PADDLE_LARGE,
    PADDLE_MAGNET,
)
from merinobreakout.geometry import Vec2, rc_to_idx, rc_to_xy
from merinobreakout.physics import (
    BARREL_SOUNDS,
    BULLET_HIT_SOUNDS,
    ball_update,
    barrels_update,
    bullets_update,
    lives_update,
    nudge_ball,
)
from merinobreakout.progress import Progress
from merinobreakout.timing import Timer
from merinobreakout.world import (
    BARREL_IMAGES,
    Ball,
    Barrel,
    Brick,
    Bullet,
    GameState,
    World,
)


@pytest.fixture
def world(tmp_path):
    progress = Progress("TESTER", save_path=tmp_path / "save.txt")
    return World(progress, rng=random.Random(3))


def _place_brick(world, r, c, variant=0):
    world.grid[rc_to_idx(r, c)] = Brick(variant, r, c, f"brick{variant:x}")


def _barrel(variant, x, y):
    anim = Animation(list(BARREL_IMAGES[variant]), BARREL_FRAMERATE, position=Vec2(x, y))
    return Barrel(variant, anim)


@pytest.mark.parametrize("seed", range(20))
def test_nudge_keeps_unit_length_and_bounded_rotation(seed):
    direction = Vec2.from_angle(1.0)
    result = nudge_ball(direction, math.pi / 4, random.Random(seed))
    assert result.length() == pytest.approx(1.0)
    turned = math.atan2(result.y, result.x) - 1.0
    assert abs(turned) <= math.pi / 4 + 0.1 + 1e-9


def test_nudge_avoids_horizontal_direction():
    result = nudge_ball(Vec2(1.0, 0.0), 1e-12, random.Random(0))
    assert math.atan2(result.y, result.x) == pytest.approx(0.1)


def test_caught_ball_does_not_move(world):
    ball = Ball(x=0.0, y=0.0, caught=True)
    world.balls = [ball]
    ball_update(world)
    assert (ball.x, ball.y) == (0.0, 0.0)
    assert world.balls == [ball]


def test_ball_bounces_off_left_wall(world):
    ball = Ball(x=BALLAREA_MINX + BALL_RADIUS + 0.5, y=0.0, direction=Vec2(-1.0, 0.0), caught=False)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert ball.direction.x > 0
    assert ball.impacts == 1
    assert "hit_wall" in world.sounds
    assert len(world.effects) == 1


def test_ball_lost_below_bottom(world):
    ball = Ball(x=0.0, y=GAMEAREA_MINY - BALL_RADIUS - 0.5, direction=Vec2(0.0, -1.0), caught=False)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert world.balls == []
    assert world.nballs == 0


def test_ball_bounces_straight_up_from_paddle_centre(world):
    paddle = world.paddle
    top = paddle.y + paddle.size[1] / 2.0
    ball = Ball(
        x=paddle.x, y=top + BALL_RADIUS + 0.5, direction=Vec2(0.0, -1.0),
        caught=False, impacts_since_paddle=10,
    )
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert ball.direction.y > 0
    assert abs(ball.direction.x) < 1e-6
    assert ball.impacts_since_paddle == 0
    assert "paddle" in world.sounds


def test_magnet_paddle_catches_ball(world):
    world.paddle.variant = PADDLE_MAGNET
    paddle = world.paddle
    top = paddle.y + paddle.size[1] / 2.0
    ball = Ball(x=paddle.x, y=top + BALL_RADIUS + 0.5, direction=Vec2(0.0, -1.0), caught=False)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert ball.caught
    assert ball.y == pytest.approx(top + BALL_RADIUS)
    assert "magnet" in world.sounds


def test_ball_breaks_brick_and_bounces(world):
    _place_brick(world, 5, 7)
    world.bricks_left = 5
    _, brick_y = rc_to_xy(5, 7)
    brick_x, _ = rc_to_xy(5, 7)
    ball = Ball(x=brick_x, y=brick_y - 9.0 - BALL_RADIUS - 0.5, direction=Vec2(0.0, 1.0), caught=False)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert world.grid[rc_to_idx(5, 7)] is None
    assert world.bricks_left == 4
    assert ball.direction.y < 0
    assert "hit_brick" in world.sounds


def test_ball_speeds_up_after_many_impacts(world):
    ball = Ball(x=-80.0, y=0.0, direction=Vec2(0.0, 1.0), caught=False, impacts=51)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert ball.impacts == 0
    assert ball.speed == pytest.approx(BALL_INITIAL_SPEED * BALL_SPEED_DELTA)
    assert world.message == "Speed 115%"


def test_ball_nudged_after_many_impacts_away_from_paddle(world):
    ball = Ball(x=-80.0, y=0.0, direction=Vec2(0.0, 1.0), caught=False, impacts_since_paddle=76)
    world.balls = [ball]
    world.nballs = 1
    ball_update(world)
    assert ball.impacts_since_paddle == 0
    assert world.message.startswith("Nudging Ball")
    assert ball.direction.length() == pytest.approx(1.0)


def test_bullet_moves_up(world):
    bullet = Bullet(x=-80.0, y=0.0)
    world.bullets = [bullet]
    bullets_update(world)
    assert world.bullets == [bullet]
    assert bullet.y == pytest.approx(400.0 * world.avg_delta)


def test_bullet_explodes_at_top_wall(world):
    world.bullets = [Bullet(x=-80.0, y=BALLAREA_MAXY - 5.0)]
    bullets_update(world)
    assert world.bullets == []
    assert len(world.effects) == 1
    assert world.sounds[-1] in BULLET_HIT_SOUNDS


def test_bullet_destroys_brick(world):
    _place_brick(world, 5, 7)
    world.bricks_left = 3
    brick_x, brick_y = rc_to_xy(5, 7)
    world.bullets = [Bullet(x=brick_x, y=brick_y - 20.0)]
    bullets_update(world)
    assert world.bullets == []
    assert world.grid[rc_to_idx(5, 7)] is None
    assert world.bricks_left == 2


def test_losing_last_ball_costs_a_life(world):
    world.paddle.variant = PADDLE_LARGE
    world.paddle.x = 0.0
    world.nballs = 0
    world.nlives = NLIVES
    lives_update(world)
    assert world.nlives == NLIVES - 1
    assert world.nballs == 1
    assert world.paddle.variant == 0
    assert world.paddle.x == GAMEAREA_CENTER_X
    assert world.balls[0].caught
    assert world.lives_text == f"Lives: {NLIVES - 1}"
    assert "start" in world.sounds


def test_losing_final_life_ends_game(world):
    world.nballs = 0
    world.nlives = 1
    lives_update(world)
    assert world.nlives == 0
    assert world.next_state is GameState.TRANSITION


def test_lives_text_follows_lives(world):
    world.nballs = 1
    world.nlives = 5
    lives_update(world)
    assert world.lives_text == "Lives: 5"
    assert world.lives_displayed == 5


def test_extend_barrel_changes_paddle(world):
    world.barrels = [_barrel(0, world.paddle.x, world.paddle.y)]
    barrels_update(world)
    assert world.barrels == []
    assert world.paddle.variant == PADDLE_LARGE
    assert world.message == BARREL_TITLES[0]
    assert world.sounds[-1] == BARREL_SOUNDS[0]


def test_fast_barrel_speeds_balls(world):
    ball = Ball(x=0.0, y=0.0, caught=False, impacts=7)
    world.balls = [ball]
    world.barrels = [_barrel(5, world.paddle.x, world.paddle.y)]
    barrels_update(world)
    assert ball.speed == pytest.approx(BALL_INITIAL_SPEED * BALL_SPEED_DELTA)
    assert ball.impacts == 0
    assert world.message.startswith("Speed")


def test_extra_time_barrel_extends_countdown(world):
    world.countdown = Timer(100.0)
    world.barrels = [_barrel(9, world.paddle.x, world.paddle.y)]
    barrels_update(world)
    assert world.countdown.duration == pytest.approx(100.0 + 30.0)


def test_multiball_barrel_splits_ball(world):
    ball = Ball(x=0.0, y=0.0, direction=Vec2.from_angle(1.0), caught=False, speed=420.0)
    world.balls = [ball]
    world.nballs = 1
    world.barrels = [_barrel(4, world.paddle.x, world.paddle.y)]
    barrels_update(world)
    assert len(world.balls) == 3
    assert world.nballs == 3
    assert ball not in world.balls
    assert all(b.speed == 420.0 and not b.caught for b in world.balls)


def test_barrel_releases_caught_ball(world):
    ball = Ball(x=0.0, y=0.0, caught=True)
    world.balls = [ball]
    world.barrels = [_barrel(0, world.paddle.x, world.paddle.y)]
    barrels_update(world)
    assert not ball.caught


def test_barrel_below_bottom_is_dropped(world):
    world.barrels = [_barrel(0, 100.0, GAMEAREA_MINY - 5.0)]
    barrels_update(world)
    assert world.barrels == []
    assert world.paddle.variant == 0


def test_barrel_away_from_paddle_stays(world):
    barrel = _barrel(0, 0.0, 100.0)
    world.barrels = [barrel]
    barrels_update(world)
    assert world.barrels == [barrel]
    assert world.message == ""