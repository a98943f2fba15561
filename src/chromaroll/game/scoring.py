"""Move efficiency score"""

from chromaroll.game.game_core import GRID_SIZE


def efficiency(move_count: int, cell_count: int = GRID_SIZE * GRID_SIZE) -> int:
    """
    Integer percent floor(cell_count / move_count * 100); 0 when no moves were made.

    The numerator is always the total cell count of the board.
    """
    if move_count <= 0:
        return 0
    return (cell_count * 100) // move_count
