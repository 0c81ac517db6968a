"""Collision checks against the static wall map.

All coordinates are normalized to the unit square. Only perfectly
horizontal or vertical segments block movement; diagonal segments are
ignored.
"""
from __future__ import annotations

import random
from typing import Iterable, NamedTuple, Tuple

_EPS = 1e-9
_SPAWN_ATTEMPTS = 1000


class WallSegment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_vertical(self) -> bool:
        return abs(self.x1 - self.x2) < _EPS

    @property
    def is_horizontal(self) -> bool:
        return abs(self.y1 - self.y2) < _EPS


def clamp01(n: float) -> float:
    return max(0.0, min(1.0, n))


def is_blocked(x: float, y: float, walls: Iterable[WallSegment], radius: float) -> bool:
    """Return *True* if a disk of *radius* at (x, y) touches any wall strip."""
    for x1, y1, x2, y2 in walls:
        if abs(x1 - x2) < _EPS:
            if min(y1, y2) - radius <= y <= max(y1, y2) + radius and abs(x - x1) <= radius:
                return True
        elif abs(y1 - y2) < _EPS:
            if min(x1, x2) - radius <= x <= max(x1, x2) + radius and abs(y - y1) <= radius:
                return True
    return False


def resolve_move(
    from_x: float,
    from_y: float,
    to_x: float,
    to_y: float,
    walls: Iterable[WallSegment],
    radius: float,
) -> Tuple[float, float]:
    """Move towards (to_x, to_y), sliding along walls where possible.

    Candidates are tried in order: the full move, X only, Y only. If all of
    them are blocked the (clamped) origin is returned unchanged.
    """
    walls = tuple(walls)
    tx, ty = clamp01(to_x), clamp01(to_y)
    fx, fy = clamp01(from_x), clamp01(from_y)

    for cx, cy in ((tx, ty), (tx, fy), (fx, ty)):
        if not is_blocked(cx, cy, walls, radius):
            return cx, cy
    return fx, fy


def random_free_position(
    walls: Iterable[WallSegment], radius: float, rng: random.Random
) -> Tuple[float, float]:
    """Uniform random point in the unit square that no wall strip touches.

    Falls back to the map center if sampling keeps hitting walls.
    """
    walls = tuple(walls)
    for _ in range(_SPAWN_ATTEMPTS):
        x, y = rng.random(), rng.random()
        if not is_blocked(x, y, walls, radius):
            return x, y
    return 0.5, 0.5


def load_walls(raw: Iterable[Iterable[float]]) -> Tuple[WallSegment, ...]:
    return tuple(WallSegment(*segment) for segment in raw)


__all__ = ["WallSegment", "clamp01", "is_blocked", "resolve_move", "random_free_position", "load_walls"]
