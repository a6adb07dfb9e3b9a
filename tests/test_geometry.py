import math

import pytest

from merinobreakout.consts import (
    BALLAREA_MAXY,
    BALLAREA_MINX,
    BRICK_SIZE,
    GRID_COLS,
    GRID_ROWS,
)
from merinobreakout.geometry import (
    Collision,
    RectBody,
    RoundBody,
    Vec2,
    collision,
    rc_to_idx,
    rc_to_xy,
    xy_to_rc,
)


def test_from_angle_zero_points_right():
    assert tuple(Vec2.from_angle(0.0)) == pytest.approx((1.0, 0.0))


def test_rotate_by_quarter_turn():
    rotated = Vec2(1.0, 0.0).rotate(Vec2.from_angle(math.pi / 2))
    assert tuple(rotated) == pytest.approx((0.0, 1.0), abs=1e-12)


@pytest.mark.parametrize("angle", [-2.0, -0.3, 0.7, 1.9, 3.0])
def test_rotate_preserves_length_and_adds_angles(angle):
    v = Vec2(3.0, 4.0)
    rotated = v.rotate(Vec2.from_angle(angle))
    assert rotated.length() == pytest.approx(v.length())
    expected = Vec2.from_angle(math.atan2(4.0, 3.0) + angle) * v.length()
    assert tuple(rotated) == pytest.approx(tuple(expected))


def test_vector_arithmetic():
    a = Vec2(1.0, 2.0)
    b = Vec2(3.0, 5.0)
    assert a + b - b == a
    assert (a * 2.0) / 2.0 == a
    assert -a + a == Vec2.ZERO


def test_rect_no_collision_when_apart():
    assert collision(RectBody(Vec2(100.0, 0.0), (10.0, 10.0)), (0.0, 0.0), (10.0, 10.0)) is None


@pytest.mark.parametrize(
    "pos,size,side",
    [
        ((-8.0, 0.0), (10.0, 2.0), Collision.LEFT),
        ((8.0, 0.0), (10.0, 2.0), Collision.RIGHT),
        ((0.0, -8.0), (2.0, 10.0), Collision.BOTTOM),
        ((0.0, 8.0), (2.0, 10.0), Collision.TOP),
    ],
)
def test_rect_collision_sides(pos, size, side):
    assert collision(RectBody(pos, size), Vec2(0.0, 0.0), (10.0, 10.0)) is side


def test_round_collision_from_above_and_side():
    obst = (0.0, 0.0)
    size = (20.0, 20.0)
    assert collision(RoundBody((0.0, 15.0), 10.0), obst, size) is Collision.TOP
    assert collision(RoundBody((-15.0, 0.0), 10.0), obst, size) is Collision.LEFT
    assert collision(RoundBody((15.0, 0.0), 10.0), obst, size) is Collision.RIGHT
    assert collision(RoundBody((0.0, -15.0), 10.0), obst, size) is Collision.BOTTOM


def test_round_touching_edge_counts_and_corner_gap_does_not():
    size = (20.0, 20.0)
    assert collision(RoundBody((0.0, 20.0), 10.0), (0.0, 0.0), size) is Collision.TOP
    # Near a corner the circle misses even though its bounding box overlaps.
    assert collision(RoundBody((18.0, 18.0), 10.0), (0.0, 0.0), size) is None


def test_unknown_body_type_raises():
    with pytest.raises(TypeError):
        collision((0.0, 0.0), (0.0, 0.0), (1.0, 1.0))


def test_grid_round_trip_for_every_cell():
    for r in range(GRID_ROWS):
        for c in range(GRID_COLS):
            x, y = rc_to_xy(r, c)
            assert xy_to_rc(x, y) == (r, c)


def test_first_cell_lies_in_corner_of_ball_area():
    x, y = rc_to_xy(0, 0)
    assert x - BRICK_SIZE[0] / 2 > BALLAREA_MINX
    assert y + BRICK_SIZE[1] / 2 < BALLAREA_MAXY


def test_xy_to_rc_saturates_outside_area():
    assert xy_to_rc(BALLAREA_MINX - 100.0, BALLAREA_MAXY + 100.0) == (0, 0)


def test_rc_to_idx_is_row_major():
    assert rc_to_idx(0, 0) == 0
    assert rc_to_idx(1, 0) == GRID_COLS
    assert rc_to_idx(GRID_ROWS - 1, GRID_COLS - 1) == GRID_ROWS * GRID_COLS - 1