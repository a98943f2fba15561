"""
Board import/export - JSON array of rows of color tags (row-major, grid[y][x])
"""

import json
from pathlib import Path
from typing import Any, List, Sequence, Union

from chromaroll.game.game_core import Color, Grid, Position, GRID_SIZE, START_POS


class GridLoadError(ValueError):
    """Raised when board data is malformed"""


def grid_to_data(grid: Sequence[Sequence[Color]]) -> List[List[str]]:
    """Convert a grid to a JSON-compatible array of color tags"""
    return [[tile.value for tile in row] for row in grid]


def grid_from_data(data: Any,
                   size: int = GRID_SIZE,
                   start: Position = START_POS) -> Grid:
    """
    Validate and convert parsed JSON data into a grid

    Args:
        data: parsed JSON (expected: list of `size` lists of `size` tags)
        size: expected grid dimension
        start: start cell, must hold the START sentinel

    Returns:
        Grid

    Raises:
        GridLoadError: on any shape or content problem
    """
    if not isinstance(data, list):
        raise GridLoadError("Board data must be an array of rows")
    if len(data) != size:
        raise GridLoadError(f"Wrong row count: expected {size}, got {len(data)}")

    grid: Grid = []
    for y, row in enumerate(data):
        if not isinstance(row, list) or len(row) != size:
            raise GridLoadError(f"Row {y} must be an array of {size} color tags")
        try:
            grid.append([Color.parse(tag) for tag in row])
        except ValueError as e:
            raise GridLoadError(f"Row {y}: {e}") from e

    if grid[start.y][start.x] != Color.START:
        raise GridLoadError(f"Start cell {start.to_tuple()} must hold the start marker")

    return grid


def load_grid_from_json(json_path: Union[str, Path],
                        size: int = GRID_SIZE,
                        start: Position = START_POS) -> Grid:
    """
    Load a board from a JSON file

    Args:
        json_path: path to the board file
        size: expected grid dimension
        start: start cell

    Returns:
        Grid

    Raises:
        GridLoadError: if the file cannot be read or parsed, or the board is malformed
    """
    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise GridLoadError(f"Cannot read board file {json_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise GridLoadError(f"Failed to parse board file {json_path}: {e}") from e

    return grid_from_data(data, size=size, start=start)


def save_grid_to_json(grid: Sequence[Sequence[Color]], json_path: Union[str, Path]) -> Path:
    """Write a board to a JSON file, creating parent directories"""
    path = Path(json_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(grid_to_data(grid), f)
    return path
