from itertools import product

import pytest

from chromaroll.game.game_core import (
    Color, DIRECTIONS, Direction, INITIAL_CUBE_FACES, Position, START_POS, is_matchable
)
from chromaroll.game.generator import generate_grid, make_rng
from chromaroll.game.rotation import rotate
from chromaroll.game.scoring import efficiency
from chromaroll.game.solver import simulate_optimal_clear, solve_nearest


def _replay(grid, position, orientation, path):
    """Final (position, orientation) after path, or None if it leaves the grid."""
    for d in path:
        position = position.moved(d)
        if not position.in_bounds(len(grid)):
            return None
        orientation = rotate(orientation, d)
    return position, orientation


def _brute_force_min(grid, position, orientation, max_depth):
    for k in range(max_depth + 1):
        for seq in product(DIRECTIONS, repeat=k):
            end = _replay(grid, position, orientation, seq)
            if end is not None and is_matchable(grid[end[0].y][end[0].x], end[1]):
                return k
    return None


def test_already_on_a_match_returns_empty_path(uniform_grid):
    grid = uniform_grid(Color.RED)
    grid[2][2] = Color.PINK
    assert solve_nearest(grid, START_POS, INITIAL_CUBE_FACES) == []


def test_single_roll_paths(uniform_grid):
    assert solve_nearest(uniform_grid(Color.YELLOW), START_POS, INITIAL_CUBE_FACES) == [Direction.RIGHT]
    assert solve_nearest(uniform_grid(Color.RED), START_POS, INITIAL_CUBE_FACES) == [Direction.UP]
    assert solve_nearest(uniform_grid(Color.BLUE), START_POS, INITIAL_CUBE_FACES) == [Direction.DOWN]
    assert solve_nearest(uniform_grid(Color.GREEN), START_POS, INITIAL_CUBE_FACES) == [Direction.LEFT]


def test_path_ends_on_matchable_cell(uniform_grid):
    grid = uniform_grid(Color.PINK)
    path = solve_nearest(grid, START_POS, INITIAL_CUBE_FACES)
    assert path
    end_pos, end_faces = _replay(grid, START_POS, INITIAL_CUBE_FACES, path)
    assert end_pos != START_POS
    assert end_faces.bottom == Color.PINK


def test_unreachable_returns_none():
    grid = [[Color.MATCHED] * 3 for _ in range(3)]
    grid[1][1] = Color.START
    assert solve_nearest(grid, Position(1, 1), INITIAL_CUBE_FACES) is None


def test_cutoff_limits_depth(uniform_grid):
    grid = uniform_grid(Color.YELLOW)
    assert solve_nearest(grid, START_POS, INITIAL_CUBE_FACES, max_path_length=0) is None
    assert solve_nearest(grid, START_POS, INITIAL_CUBE_FACES, max_path_length=1) == [Direction.RIGHT]


def test_solver_does_not_touch_grid():
    grid = generate_grid(rng=make_rng(5))
    snapshot = [list(row) for row in grid]
    solve_nearest(grid, START_POS, INITIAL_CUBE_FACES)
    assert grid == snapshot


def test_solver_is_deterministic():
    grid = generate_grid(rng=make_rng(8))
    assert solve_nearest(grid, START_POS, INITIAL_CUBE_FACES) == solve_nearest(grid, START_POS, INITIAL_CUBE_FACES)


@pytest.mark.parametrize("seed", range(6))
def test_path_length_is_minimal_on_small_boards(seed):
    start = Position(1, 1)
    grid = generate_grid(3, start, [Color.RED, Color.YELLOW], make_rng(seed))
    path = solve_nearest(grid, start, INITIAL_CUBE_FACES)
    best = _brute_force_min(grid, start, INITIAL_CUBE_FACES, max_depth=6)

    if best is None:
        assert path is None or len(path) > 6
    else:
        assert path is not None
        assert len(path) == best


def test_simulation_on_reference_board():
    grid = generate_grid(rng=make_rng(7))
    snapshot = [list(row) for row in grid]
    sim = simulate_optimal_clear(grid, START_POS, INITIAL_CUBE_FACES)

    assert grid == snapshot
    assert sim.moves == len(sim.path)
    assert sim.efficiency == efficiency(sim.moves, 25)
    assert sim.total_cells == 25
    assert 1 <= sim.matched_count <= 25
    if sim.cleared:
        assert sim.matched_count == 25


def test_simulation_replays_to_matches():
    grid = generate_grid(rng=make_rng(4))
    sim = simulate_optimal_clear(grid, START_POS, INITIAL_CUBE_FACES)

    live = [list(row) for row in grid]
    pos, faces = START_POS, INITIAL_CUBE_FACES
    matches = 0
    for d in sim.path:
        pos = pos.moved(d)
        faces = rotate(faces, d)
        if is_matchable(live[pos.y][pos.x], faces):
            live[pos.y][pos.x] = Color.MATCHED
            matches += 1
    assert matches + 1 == sim.matched_count


def test_simulation_on_cleared_board():
    grid = [[Color.MATCHED] * 5 for _ in range(5)]
    grid[2][2] = Color.START
    sim = simulate_optimal_clear(grid, START_POS, INITIAL_CUBE_FACES)
    assert sim.moves == 0
    assert sim.efficiency == 0
    assert sim.cleared
    assert sim.to_dict()["path"] == []
