from collections import Counter

import pytest

from chromaroll.game.game_core import ALL_COLORS, Color, Position, START_POS
from chromaroll.game.generator import build_color_pool, generate_grid, make_rng


def test_reference_board_is_balanced():
    grid = generate_grid(rng=make_rng(11))
    assert len(grid) == 5 and all(len(row) == 5 for row in grid)
    assert grid[START_POS.y][START_POS.x] == Color.START

    counts = Counter(tile for row in grid for tile in row)
    assert counts[Color.START] == 1
    assert counts[Color.MATCHED] == 0
    for color in ALL_COLORS:
        assert counts[color] == 4


def test_same_seed_same_board():
    assert generate_grid(rng=make_rng(3)) == generate_grid(rng=make_rng(3))


def test_different_seeds_differ():
    assert generate_grid(rng=make_rng(1)) != generate_grid(rng=make_rng(2))


def test_remainder_cells_are_pre_cleared():
    # 15 playable cells, 6 colors -> 2 tiles each, 3 left over
    grid = generate_grid(4, Position(1, 1), ALL_COLORS, make_rng(0))
    counts = Counter(tile for row in grid for tile in row)
    assert counts[Color.MATCHED] == 3
    assert all(counts[c] == 2 for c in ALL_COLORS)
    # leftovers are the last cells in row-major order
    assert grid[3][1:] == [Color.MATCHED] * 3


def test_build_color_pool_truncates():
    assert len(build_color_pool(5, ALL_COLORS)) == 24
    assert len(build_color_pool(4, ALL_COLORS)) == 12
    assert build_color_pool(2, [Color.RED]) == [Color.RED] * 3


@pytest.mark.parametrize("kwargs", [
    {"n": 0},
    {"palette": []},
    {"palette": [Color.RED, Color.MATCHED]},
    {"start": Position(5, 0)},
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_grid(rng=make_rng(0), **kwargs)
