"""
Roll transition - the single way a game state changes
"""

from chromaroll.game.game_core import (
    Direction, ErrorCode, GameState, GameStatus, RollResult, Color, is_matchable
)
from chromaroll.game.rotation import roll


def apply_roll(state: GameState, direction: Direction) -> RollResult:
    """
    Apply one roll to the state in place

    Precondition: state.status is PLAYING. A terminal state is rejected
    with GAME_OVER and left untouched.

    Args:
        state: game state (mutated)
        direction: roll direction

    Returns:
        RollResult
    """
    if state.is_terminal():
        return RollResult(
            success=False,
            error=ErrorCode.GAME_OVER,
            status=state.status,
            position=state.position,
            message=f"Game is over ({state.status.value})"
        )

    # 1. Candidate position and orientation
    next_pos, next_faces = roll(state.position, state.orientation, direction)

    # 2. Falling off the grid; position, orientation and grid keep pre-move values
    if not next_pos.in_bounds(state.size):
        state.status = GameStatus.LOST
        return RollResult(
            success=False,
            error=ErrorCode.OUT_OF_BOUNDS,
            status=state.status,
            position=state.position,
            message=f"Cube fell off the grid rolling {direction.value} from {state.position.to_tuple()}"
        )

    # 3. Count the move and check for a match
    state.moves += 1
    matched = False
    if is_matchable(state.cell(next_pos), next_faces):
        state.grid[next_pos.y][next_pos.x] = Color.MATCHED
        state.matched_count += 1
        matched = True

    # 4. Win check
    if state.is_complete():
        state.status = GameStatus.WON

    # 5. Commit
    state.position = next_pos
    state.orientation = next_faces

    message = f"Rolled {direction.value} to {next_pos.to_tuple()}"
    if matched:
        message += " (matched)"
    return RollResult(
        success=True,
        error=ErrorCode.OK,
        status=state.status,
        position=next_pos,
        matched=matched,
        message=message
    )
