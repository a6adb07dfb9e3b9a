"""Vectors, collision shapes and brick-grid coordinate conversions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator, Optional, Tuple, Union

from .consts import (
    BALLAREA_MAXY,
    BALLAREA_MINX,
    BRICK_HEIGHT,
    BRICK_WIDTH,
    GRID_COLS,
)


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float
    y: float

    ZERO: ClassVar["Vec2"]

    @classmethod
    def from_angle(cls, angle: float) -> "Vec2":
        """Unit vector pointing at ``angle`` radians."""
        return cls(math.cos(angle), math.sin(angle))

    def rotate(self, other: "Vec2") -> "Vec2":
        """Rotate by the angle of ``other`` (complex multiplication)."""
        return Vec2(
            self.x * other.x - self.y * other.y,
            self.y * other.x + self.x * other.y,
        )

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vec2":
        return Vec2(self.x / k, self.y / k)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)


Vec2.ZERO = Vec2(0.0, 0.0)

Pair = Union[Vec2, Tuple[float, float]]


class Collision(Enum):
    """Side of an obstacle that a body hit."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class RectBody:
    """Axis-aligned rectangle given by its centre and full size."""

    pos: Pair
    size: Pair


@dataclass(frozen=True)
class RoundBody:
    """Circle given by its centre and radius."""

    pos: Pair
    radius: float


Body = Union[RectBody, RoundBody]


def collision(body: Body, obst_pos: Pair, obst_size: Pair) -> Optional[Collision]:
    """Return the side on which ``body`` touches a rectangular obstacle, if any."""
    ox, oy = obst_pos
    ow, oh = obst_size
    omin_x, omax_x = ox - ow / 2.0, ox + ow / 2.0
    omin_y, omax_y = oy - oh / 2.0, oy + oh / 2.0

    if isinstance(body, RectBody):
        bx, by = body.pos
        bw, bh = body.size
        if not (
            bx - bw / 2.0 <= omax_x
            and bx + bw / 2.0 >= omin_x
            and by - bh / 2.0 <= omax_y
            and by + bh / 2.0 >= omin_y
        ):
            return None
        # The smaller overlap indicates the collision side.
        x_overlap = (bw + ow) / 2.0 - abs(bx - ox)
        y_overlap = (bh + oh) / 2.0 - abs(by - oy)
        if x_overlap < y_overlap:
            return Collision.LEFT if bx < ox else Collision.RIGHT
        return Collision.BOTTOM if by < oy else Collision.TOP

    if isinstance(body, RoundBody):
        bx, by = body.pos
        cx = min(max(bx, omin_x), omax_x)
        cy = min(max(by, omin_y), omax_y)
        dx = bx - cx
        dy = by - cy
        if dx * dx + dy * dy > body.radius * body.radius:
            return None
        if abs(dx) > abs(dy):
            return Collision.LEFT if bx < cx else Collision.RIGHT
        return Collision.BOTTOM if by < cy else Collision.TOP

    raise TypeError(f"unsupported body: {body!r}")


def _to_index(value: float) -> int:
    """Truncate towards zero, saturating negatives and NaN at zero."""
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(value)


def xy_to_rc(x: float, y: float) -> Tuple[int, int]:
    """Convert world coordinates to a (row, column) grid cell."""
    return (
        _to_index((BALLAREA_MAXY - y) / BRICK_HEIGHT - 0.5),
        _to_index((x - BALLAREA_MINX) / BRICK_WIDTH - 0.5),
    )


def rc_to_xy(r: int, c: int) -> Tuple[float, float]:
    """Convert a grid cell to the world coordinates of its centre."""
    return (
        BALLAREA_MINX + (c + 0.5) * BRICK_WIDTH,
        BALLAREA_MAXY - (r + 0.5) * BRICK_HEIGHT,
    )


def rc_to_idx(r: int, c: int) -> int:
    """Convert a grid cell to its index in the flat grid list."""
    return r * GRID_COLS + c