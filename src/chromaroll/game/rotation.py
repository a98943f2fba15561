"""
Cube roll permutations

Each roll is a 4-cycle over the facings that touch the roll axis; the two
facings on the axis keep their colors.
"""

from typing import Dict, Tuple

from chromaroll.game.game_core import Direction, Orientation, Position


# new_facing -> old_facing, only for the facings that move
ROLL_PERMUTATIONS: Dict[Direction, Dict[str, str]] = {
    Direction.UP: {"top": "back", "front": "top", "bottom": "front", "back": "bottom"},
    Direction.DOWN: {"top": "front", "front": "bottom", "bottom": "back", "back": "top"},
    Direction.LEFT: {"top": "right", "right": "bottom", "bottom": "left", "left": "top"},
    Direction.RIGHT: {"top": "left", "left": "bottom", "bottom": "right", "right": "top"},
}


def rotate(orientation: Orientation, direction: Direction) -> Orientation:
    """
    Roll the cube over its bottom edge in the given direction

    Args:
        orientation: current facings
        direction: roll direction

    Returns:
        new Orientation; the argument is not modified
    """
    facings = {
        "top": orientation.top,
        "bottom": orientation.bottom,
        "front": orientation.front,
        "back": orientation.back,
        "left": orientation.left,
        "right": orientation.right,
    }
    moved = {new: facings[old] for new, old in ROLL_PERMUTATIONS[direction].items()}
    facings.update(moved)
    return Orientation(**facings)


def roll(position: Position, orientation: Orientation,
         direction: Direction) -> Tuple[Position, Orientation]:
    """Candidate position and orientation after one roll (no bounds check)"""
    return position.moved(direction), rotate(orientation, direction)


def orientation_key(orientation: Orientation) -> Tuple:
    """(top, front) pair; determines the full orientation within the reachable rotation group"""
    return orientation.key
