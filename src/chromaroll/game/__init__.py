"""
Chromatic Roller game package
"""

from .game_core import (
    Color, Direction, GameStatus, ErrorCode, Position, Orientation,
    RollResult, GameState, DIRECTIONS, FACINGS, GRID_SIZE, START_POS,
    ALL_COLORS, INITIAL_CUBE_FACES, new_game, is_matchable
)

from .rotation import ROLL_PERMUTATIONS, rotate, orientation_key

from .generator import make_rng, build_color_pool, generate_grid

from .rolling import apply_roll

from .solver import (
    MAX_PATH_LENGTH,
    SimulationResult,
    solve_nearest,
    simulate_optimal_clear
)

from .scoring import efficiency

from .loader import (
    GridLoadError,
    grid_to_data,
    grid_from_data,
    load_grid_from_json,
    save_grid_to_json
)

__all__ = [
    # Core types
    'Color', 'Direction', 'GameStatus', 'ErrorCode', 'Position',
    'Orientation', 'RollResult', 'GameState', 'DIRECTIONS', 'FACINGS',
    'GRID_SIZE', 'START_POS', 'ALL_COLORS', 'INITIAL_CUBE_FACES',
    'new_game', 'is_matchable',
    # Rotation
    'ROLL_PERMUTATIONS', 'rotate', 'orientation_key',
    # Generator
    'make_rng', 'build_color_pool', 'generate_grid',
    # Transition
    'apply_roll',
    # Solver
    'MAX_PATH_LENGTH', 'SimulationResult', 'solve_nearest', 'simulate_optimal_clear',
    # Scoring
    'efficiency',
    # Loader
    'GridLoadError', 'grid_to_data', 'grid_from_data',
    'load_grid_from_json', 'save_grid_to_json',
]
