import random

import pytest

from catmouse.constants import WALL_SEGMENTS
from catmouse.geometry import WallSegment, clamp01, is_blocked, load_walls, resolve_move

WALLS = load_walls(WALL_SEGMENTS)
R = 0.028


def test_clamp01():
    assert clamp01(-0.5) == 0.0
    assert clamp01(1.5) == 1.0
    assert clamp01(0.25) == 0.25


def test_vertical_wall_blocks_within_radius():
    # (0.12, 0.14) - (0.12, 0.34)
    assert is_blocked(0.12, 0.20, WALLS, R)
    assert is_blocked(0.12 + R - 0.001, 0.20, WALLS, R)
    assert not is_blocked(0.12 + R + 0.001, 0.20, WALLS, R)
    # strip is padded past the end points
    assert is_blocked(0.12, 0.34 + R - 0.001, WALLS, R)
    assert not is_blocked(0.12, 0.34 + R + 0.001, WALLS, R)


def test_horizontal_wall_blocks_within_radius():
    # (0.30, 0.70) - (0.50, 0.70)
    assert is_blocked(0.40, 0.70, WALLS, R)
    assert is_blocked(0.40, 0.70 - R + 0.001, WALLS, R)
    assert not is_blocked(0.40, 0.70 - R - 0.001, WALLS, R)


def test_diagonal_segments_never_block():
    walls = [WallSegment(0.0, 0.0, 1.0, 1.0)]
    assert not is_blocked(0.5, 0.5, walls, R)


def test_open_move_is_accepted():
    assert resolve_move(0.6, 0.9, 0.65, 0.92, WALLS, R) == (0.65, 0.92)


def test_destination_is_clamped():
    assert resolve_move(0.98, 0.98, 1.4, 1.2, WALLS, R) == (1.0, 1.0)
    assert resolve_move(0.02, 0.95, -3.0, 0.95, WALLS, R) == (0.0, 0.95)


def test_slides_along_x_first():
    walls = [WallSegment(0.0, 0.5, 1.0, 0.5)]
    # heading diagonally into a horizontal wall keeps the X progress
    assert resolve_move(0.2, 0.4, 0.3, 0.49, walls, R) == (0.3, 0.4)


def test_slides_along_y_when_x_blocked():
    walls = [WallSegment(0.5, 0.0, 0.5, 1.0)]
    assert resolve_move(0.4, 0.2, 0.49, 0.3, walls, R) == (0.4, 0.3)


def test_fully_blocked_move_keeps_origin():
    walls = [WallSegment(0.5, 0.0, 0.5, 1.0), WallSegment(0.0, 0.5, 1.0, 0.5)]
    assert resolve_move(0.4, 0.4, 0.49, 0.49, walls, R) == (0.4, 0.4)


def test_origin_is_clamped_when_rejected():
    walls = [WallSegment(0.0, 0.0, 0.0, 1.0), WallSegment(0.0, 0.0, 1.0, 0.0)]
    assert resolve_move(-0.2, -0.2, 0.01, 0.01, walls, R) == (0.0, 0.0)


@pytest.mark.parametrize("seed", range(5))
def test_resolved_moves_never_enter_walls_or_leave_map(seed):
    rng = random.Random(seed)
    x, y = 0.65, 0.9
    assert not is_blocked(x, y, WALLS, R)
    for _ in range(500):
        tx = x + rng.uniform(-0.2, 0.2)
        ty = y + rng.uniform(-0.2, 0.2)
        x, y = resolve_move(x, y, tx, ty, WALLS, R)
        assert 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0
        assert not is_blocked(x, y, WALLS, R)


def test_random_free_position_is_never_blocked():
    from catmouse.geometry import random_free_position

    rng = random.Random(11)
    for _ in range(500):
        x, y = random_free_position(WALLS, R, rng)
        assert 0 <= x <= 1 and 0 <= y <= 1
        assert not is_blocked(x, y, WALLS, R)


def test_random_free_position_falls_back_to_center():
    from catmouse.geometry import random_free_position

    # one huge wall strip covering the whole square
    walls = load_walls([(0.5, -1.0, 0.5, 2.0)])
    assert random_free_position(walls, 1.0, random.Random(0)) == (0.5, 0.5)
