"""
Game session environment for Chromatic Roller.

Wraps the pure game core with the session concerns around it: the roll
gate (one roll in flight at a time), high-score hand-off on a win, the
reference run that gives the par move count, board import/export and a
text rendering for console play.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from chromaroll.core.base import BaseEnvironment, BaseScoreStore, InMemoryScoreStore, Observation
from chromaroll.core.config import BoardConfig, SolverConfig
from chromaroll.game.game_core import (
    Color, Direction, ErrorCode, GameState, GameStatus, RollResult, new_game
)
from chromaroll.game.generator import generate_grid, make_rng
from chromaroll.game.loader import load_grid_from_json, save_grid_to_json
from chromaroll.game.rolling import apply_roll
from chromaroll.game.scoring import efficiency
from chromaroll.game.solver import SimulationResult, simulate_optimal_clear, solve_nearest


_TILE_SYMBOLS = {
    Color.GREEN: "G",
    Color.RED: "R",
    Color.BLUE: "B",
    Color.YELLOW: "Y",
    Color.PINK: "P",
    Color.WHITE: "W",
    Color.MATCHED: ".",
    Color.START: "S",
}


class RollerEnvironment(BaseEnvironment):
    """One player session over a sequence of boards."""

    def __init__(self,
                 config: BoardConfig,
                 solver_config: Optional[SolverConfig] = None,
                 score_store: Optional[BaseScoreStore] = None,
                 rng: Optional[np.random.Generator] = None):
        super().__init__(config)
        self.solver_config: SolverConfig = solver_config or SolverConfig()
        self.score_store: BaseScoreStore = score_store or InMemoryScoreStore()
        self.rng: np.random.Generator = rng if rng is not None else make_rng(config.seed)
        self.game_state: Optional[GameState] = None
        self.high_score: int = 0
        self.par: Optional[SimulationResult] = None
        self.last_result: Optional[RollResult] = None
        self._pending: Optional[Direction] = None

    # ------------------------------------------------------------------ #
    # BaseEnvironment API
    # ------------------------------------------------------------------ #
    def reset(self, grid: Optional[Sequence[Sequence[Color]]] = None) -> Observation:
        """
        Start a new game.

        Args:
            grid: board to play; defaults to the configured board file, else a
                freshly generated board from the environment's random source

        Returns:
            first Observation
        """
        if grid is None:
            if self.config.board_file:
                grid = load_grid_from_json(self.config.board_file, self.config.grid_size, self.config.start)
            else:
                grid = generate_grid(
                    self.config.grid_size,
                    self.config.start,
                    self.config.palette_colors,
                    self.rng,
                )
        self.game_state = new_game(grid, self.config.start, self.config.faces)
        self._pending = None
        self.par = None
        self.last_result = None
        self.high_score = self.score_store.load()
        return self._create_observation()

    def step(self, direction: Direction) -> Observation:
        """Request a roll and complete it immediately."""
        result = self.begin_roll(direction)
        if result.success:
            result = self.complete_roll()
        self.last_result = result
        return self._create_observation()

    def next_path(self) -> Optional[List[Direction]]:
        """Shortest path from the live state to the nearest matchable cell."""
        state = self._require_state()
        if state.is_terminal():
            return None
        return solve_nearest(state.grid, state.position, state.orientation,
                             self.solver_config.max_path_length)

    # ------------------------------------------------------------------ #
    # Roll gate
    # ------------------------------------------------------------------ #
    def begin_roll(self, direction: Direction) -> RollResult:
        """Accept a roll request unless the game is over or a roll is in flight."""
        state = self._require_state()
        if state.is_terminal():
            return RollResult(
                success=False,
                error=ErrorCode.GAME_OVER,
                status=state.status,
                position=state.position,
                message=f"Game is over ({state.status.value})",
            )
        if self._pending is not None:
            return RollResult(
                success=False,
                error=ErrorCode.ROLL_IN_PROGRESS,
                status=state.status,
                position=state.position,
                message=f"Roll {self._pending.value} still in progress",
            )
        self._pending = direction
        return RollResult(
            success=True,
            error=ErrorCode.OK,
            status=state.status,
            position=state.position,
            message=f"Rolling {direction.value}",
        )

    def complete_roll(self) -> RollResult:
        """Apply the pending roll. A win records the score and computes par."""
        state = self._require_state()
        if self._pending is None:
            return RollResult(
                success=False,
                error=ErrorCode.NO_ROLL_PENDING,
                status=state.status,
                position=state.position,
                message="No roll in progress",
            )
        direction, self._pending = self._pending, None
        result = apply_roll(state, direction)
        if result.success and state.status == GameStatus.WON:
            self.high_score = self.score_store.submit(self.efficiency)
            self.par = simulate_optimal_clear(
                state.initial_grid,
                self.config.start,
                self.config.faces,
                self.solver_config.max_path_length,
            )
        self.last_result = result
        return result

    @property
    def roll_pending(self) -> bool:
        return self._pending is not None

    @property
    def efficiency(self) -> int:
        state = self._require_state()
        return efficiency(state.moves, state.total_cells)

    # ------------------------------------------------------------------ #
    # Import / export
    # ------------------------------------------------------------------ #
    def export_board(self, path: Union[str, Path]) -> Path:
        """Write the initial grid of the current game."""
        state = self._require_state()
        return save_grid_to_json(state.initial_grid, path)

    def load_board(self, path: Union[str, Path]) -> Observation:
        """Load a board file and start a new game on it. A bad file leaves the session as it was."""
        grid = load_grid_from_json(path, self.config.grid_size, self.config.start)
        return self.reset(grid)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _require_state(self) -> GameState:
        if self.game_state is None:
            raise RuntimeError("Environment has no game; call reset() first")
        return self.game_state

    def _create_observation(self) -> Observation:
        state = self._require_state()
        return Observation(
            position=state.position,
            orientation=state.orientation,
            tile=state.cell(state.position).name.lower(),
            moves=state.moves,
            matched_count=state.matched_count,
            total_cells=state.total_cells,
            status=state.status,
            description=self.describe(),
            last_result=self.last_result,
        )

    def describe(self) -> str:
        """Text board (top row is y = N-1) plus a status block."""
        state = self._require_state()
        lines = []
        for y in range(state.size - 1, -1, -1):
            cells = []
            for x in range(state.size):
                symbol = _TILE_SYMBOLS[state.grid[y][x]]
                if x == state.position.x and y == state.position.y:
                    cells.append(f"[{symbol}]")
                else:
                    cells.append(f" {symbol} ")
            lines.append(f"{y} " + "".join(cells))
        lines.append("  " + "".join(f" {x} " for x in range(state.size)))

        lines.append(f"Cube at {state.position.to_tuple()}, bottom face: {state.orientation.bottom.name.lower()}, "
                     f"tile under cube: {state.cell(state.position).name.lower()}")
        lines.append(f"Moves: {state.moves}, matched: {state.matched_count}/{state.total_cells}, "
                     f"efficiency: {self.efficiency}%, high score: {self.high_score}%")
        if state.status == GameStatus.WON:
            line = "Board cleared."
            if self.par is not None:
                line += f" Par: {self.par.moves} moves ({self.par.efficiency}%)"
            lines.append(line)
        elif state.status == GameStatus.LOST:
            lines.append("The cube fell off the grid.")
        return "\n".join(lines)
