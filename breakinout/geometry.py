"""Two-dimensional vectors, random helpers and ball/box collision tests."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def scale(self, factor: float) -> Vector2:
        """Return this vector multiplied by ``factor``."""
        return Vector2(self.x * factor, self.y * factor)

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; a zero vector stays zero."""
        length = self.length()
        if length > 0:
            return Vector2(self.x / length, self.y / length)
        return self


def random_float(minimum: float = 0.0, maximum: float = 1.0) -> float:
    """A random float between ``minimum`` and ``maximum`` inclusive."""
    return random.uniform(minimum, maximum)


def random_int(minimum: int = 0, maximum: int = 10) -> int:
    """A random integer between ``minimum`` and ``maximum`` inclusive."""
    if maximum < minimum:
        raise ValueError(f"empty range: {minimum}..{maximum}")
    return random.randint(minimum, maximum)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def snap_to_nearest(value: int, snap: int) -> int:
    """Round ``value`` to a multiple of ``snap`` with truncating integer division."""
    if snap == 0:
        return value
    return _trunc_div(value + _trunc_div(snap, 2), snap) * snap


def check_collision(
    ball_pos: Vector2, ball_radius: float, box_pos: Vector2, box_size: Vector2
) -> bool:
    """True when the ball's bounding square overlaps the box."""
    return (
        ball_pos.x + ball_radius >= box_pos.x
        and ball_pos.x - ball_radius <= box_pos.x + box_size.x
        and ball_pos.y + ball_radius >= box_pos.y
        and ball_pos.y - ball_radius <= box_pos.y + box_size.y
    )


def get_collision_offset(
    ball_pos: Vector2, ball_radius: float, box_pos: Vector2, box_size: Vector2
) -> Vector2:
    """Per-axis shift that moves the ball out against the nearer box edge."""
    if ball_pos.x < box_pos.x:
        dx = box_pos.x - (ball_pos.x + ball_radius)
    else:
        dx = box_pos.x + box_size.x - (ball_pos.x - ball_radius)
    if ball_pos.y < box_pos.y:
        dy = box_pos.y - (ball_pos.y + ball_radius)
    else:
        dy = box_pos.y + box_size.y - (ball_pos.y - ball_radius)
    return Vector2(dx, dy)