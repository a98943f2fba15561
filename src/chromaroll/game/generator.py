"""
Board generation - shuffle a balanced color pool around the start cell
"""

from typing import List, Optional, Sequence

import numpy as np

from chromaroll.game.game_core import (
    Color, Grid, Position, ALL_COLORS, GRID_SIZE, START_POS
)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source for board generation (seeded for reproducibility)"""
    return np.random.default_rng(seed)


def build_color_pool(n: int, palette: Sequence[Color]) -> List[Color]:
    """
    Each palette color repeated floor((n*n - 1) / len(palette)) times.

    The remainder is truncated, not redistributed.
    """
    tiles_per_color = (n * n - 1) // len(palette)
    pool: List[Color] = []
    for color in palette:
        pool.extend([color] * tiles_per_color)
    return pool


def generate_grid(n: int = GRID_SIZE,
                  start: Position = START_POS,
                  palette: Sequence[Color] = ALL_COLORS,
                  rng: Optional[np.random.Generator] = None) -> Grid:
    """
    Generate a randomized board

    Args:
        n: grid dimension
        start: start cell, receives the START sentinel
        palette: playable colors
        rng: random source; a fresh unseeded generator when omitted

    Returns:
        n x n grid indexed grid[y][x]. Cells left over after the truncated
        pool runs out are pre-set to MATCHED.
    """
    if n <= 0:
        raise ValueError(f"Grid size must be positive, got {n}")
    if not palette:
        raise ValueError("Palette must not be empty")
    if any(color.is_sentinel for color in palette):
        raise ValueError("Palette must not contain sentinel colors")
    if not start.in_bounds(n):
        raise ValueError(f"Start position {start.to_tuple()} is outside a {n}x{n} grid")

    if rng is None:
        rng = make_rng()

    pool = build_color_pool(n, palette)
    order = rng.permutation(len(pool))
    shuffled = [pool[i] for i in order]

    grid: Grid = []
    pool_idx = 0
    for y in range(n):
        row: List[Color] = []
        for x in range(n):
            if x == start.x and y == start.y:
                row.append(Color.START)
            elif pool_idx < len(shuffled):
                row.append(shuffled[pool_idx])
                pool_idx += 1
            else:
                row.append(Color.MATCHED)
        grid.append(row)
    return grid
