"""
Breadth-first path solver

The solver is greedy: it finds the shortest path to the nearest matchable
cell. simulate_optimal_clear repeats that until nothing is reachable, which
gives a reference move count, not a globally optimal tour.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Sequence, Set, Tuple

from chromaroll.game.game_core import (
    Color, Direction, Grid, Orientation, Position, DIRECTIONS,
    copy_grid, count_cleared, is_matchable
)
from chromaroll.game.rotation import rotate
from chromaroll.game.scoring import efficiency

MAX_PATH_LENGTH = 16


@dataclass
class SearchNode:
    position: Position
    orientation: Orientation
    path: List[Direction]


def _state_key(position: Position, orientation: Orientation) -> Tuple:
    return (position.x, position.y) + orientation.key


def solve_nearest(grid: Sequence[Sequence[Color]],
                  position: Position,
                  orientation: Orientation,
                  max_path_length: int = MAX_PATH_LENGTH) -> Optional[List[Direction]]:
    """
    Shortest roll sequence to the nearest cell that would be matched on arrival

    Args:
        grid: live grid (read only)
        position: cube position
        orientation: cube orientation
        max_path_length: nodes with this many moves are tested but not expanded

    Returns:
        list of directions, or None when no goal is reachable within the cutoff
    """
    size = len(grid)
    queue: Deque[SearchNode] = deque([SearchNode(position, orientation, [])])
    visited: Set[Tuple] = {_state_key(position, orientation)}

    while queue:
        current = queue.popleft()
        tile = grid[current.position.y][current.position.x]
        if is_matchable(tile, current.orientation):
            return current.path

        if len(current.path) >= max_path_length:
            continue

        for direction in DIRECTIONS:
            next_pos = current.position.moved(direction)
            if not next_pos.in_bounds(size):
                continue
            next_faces = rotate(current.orientation, direction)
            key = _state_key(next_pos, next_faces)
            if key not in visited:
                visited.add(key)
                queue.append(SearchNode(next_pos, next_faces, current.path + [direction]))

    return None


@dataclass
class SimulationResult:
    """Reference full-board run"""
    moves: int
    efficiency: int
    matched_count: int
    total_cells: int
    path: List[Direction] = field(default_factory=list)

    @property
    def cleared(self) -> bool:
        return self.matched_count == self.total_cells

    def to_dict(self) -> dict:
        return {
            "moves": self.moves,
            "efficiency": self.efficiency,
            "matched_count": self.matched_count,
            "total_cells": self.total_cells,
            "cleared": self.cleared,
            "path": [d.value for d in self.path],
        }


def simulate_optimal_clear(initial_grid: Sequence[Sequence[Color]],
                           start: Position,
                           orientation: Orientation,
                           max_path_length: int = MAX_PATH_LENGTH) -> SimulationResult:
    """
    Greedy full-board reference run on a private copy of the grid

    Args:
        initial_grid: board to clear (not modified)
        start: cube start position
        orientation: cube start orientation
        max_path_length: solver cutoff

    Returns:
        SimulationResult with the accumulated move total
    """
    grid: Grid = copy_grid(initial_grid)
    total_cells = len(grid) * len(grid)
    matched = count_cleared(grid)
    position, faces = start, orientation
    full_path: List[Direction] = []

    while matched < total_cells:
        path = solve_nearest(grid, position, faces, max_path_length)
        if path is None:
            break
        for direction in path:
            faces = rotate(faces, direction)
            position = position.moved(direction)
        full_path.extend(path)
        grid[position.y][position.x] = Color.MATCHED
        matched += 1

    moves = len(full_path)
    return SimulationResult(
        moves=moves,
        efficiency=efficiency(moves, total_cells),
        matched_count=matched,
        total_cells=total_cells,
        path=full_path,
    )
