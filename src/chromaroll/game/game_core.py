"""
Chromatic Roller - Core Logic
Core data structures for the rolling-cube tile matching game.
"""

from typing import List, Tuple, Optional, Sequence
from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Tile / face colors. Values are the hex tags used in exported boards."""
    GREEN = "#22c55e"
    RED = "#ef4444"
    BLUE = "#3b82f6"
    YELLOW = "#eab308"
    PINK = "#f472b6"
    WHITE = "#ffffff"
    # Sentinels
    MATCHED = "#171717"
    START = "#71717a"

    @property
    def is_sentinel(self) -> bool:
        return self in (Color.MATCHED, Color.START)

    @staticmethod
    def parse(tag: str) -> "Color":
        """Parse a hex tag or a color name (case-insensitive)."""
        if not isinstance(tag, str):
            raise ValueError(f"Color tag must be a string, got {tag!r}")
        text = tag.strip().lower()
        for color in Color:
            if text == color.value or text == color.name.lower():
                return color
        raise ValueError(f"Unknown color tag: {tag!r}")


class Direction(Enum):
    """Roll directions"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return {
            Direction.UP: (0, +1),
            Direction.DOWN: (0, -1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (+1, 0),
        }[self]

    @property
    def opposite(self) -> "Direction":
        return {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }[self]


# Expansion order of the solver; fixes tie-breaking between equal-length paths
DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class ErrorCode(Enum):
    """Roll outcome codes"""
    OK = "OK"
    OUT_OF_BOUNDS = "OutOfBounds"
    GAME_OVER = "GameOver"
    ROLL_IN_PROGRESS = "RollInProgress"
    NO_ROLL_PENDING = "NoRollPending"


@dataclass(frozen=True)
class Position:
    """Grid coordinates, grid is indexed grid[y][x]"""
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def to_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @staticmethod
    def from_list(lst: Sequence[int]) -> "Position":
        return Position(int(lst[0]), int(lst[1]))


@dataclass(frozen=True)
class Orientation:
    """The color held by each of the six cube facings. Immutable; see rotation.rotate."""
    top: Color
    bottom: Color
    front: Color
    back: Color
    left: Color
    right: Color

    @property
    def key(self) -> Tuple[Color, Color]:
        """Canonical key for visited-state tracking"""
        return (self.top, self.front)

    def colors(self) -> List[Color]:
        return [self.top, self.bottom, self.front, self.back, self.left, self.right]

    def to_dict(self) -> dict:
        return {
            "top": self.top.value,
            "bottom": self.bottom.value,
            "front": self.front.value,
            "back": self.back.value,
            "left": self.left.value,
            "right": self.right.value,
        }

    @staticmethod
    def from_dict(data: dict) -> "Orientation":
        return Orientation(**{facing: Color.parse(data[facing]) for facing in FACINGS})


FACINGS = ("top", "bottom", "front", "back", "left", "right")

# Reference board
GRID_SIZE = 5
START_POS = Position(2, 2)
ALL_COLORS: List[Color] = [
    Color.GREEN,
    Color.RED,
    Color.BLUE,
    Color.YELLOW,
    Color.PINK,
    Color.WHITE,
]
INITIAL_CUBE_FACES = Orientation(
    top=Color.WHITE,
    bottom=Color.PINK,
    front=Color.RED,
    back=Color.BLUE,
    left=Color.GREEN,
    right=Color.YELLOW,
)

Grid = List[List[Color]]


@dataclass
class RollResult:
    """Outcome of a roll request"""
    success: bool
    error: ErrorCode
    status: GameStatus
    position: Optional[Position] = None
    matched: bool = False
    message: str = ""


@dataclass
class GameState:
    """Game state"""
    initial_grid: Tuple[Tuple[Color, ...], ...]  # immutable snapshot
    grid: Grid                                    # live grid, cells flip to MATCHED
    position: Position
    orientation: Orientation
    moves: int = 0
    matched_count: int = 1
    status: GameStatus = GameStatus.PLAYING

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    def cell(self, pos: Position) -> Color:
        return self.grid[pos.y][pos.x]

    def is_complete(self) -> bool:
        return self.matched_count == self.total_cells

    def is_terminal(self) -> bool:
        return self.status != GameStatus.PLAYING


def is_matchable(tile: Color, orientation: Orientation) -> bool:
    """A tile can be solved when it is not a sentinel and equals the bottom face"""
    return not tile.is_sentinel and tile == orientation.bottom


def count_cleared(grid: Sequence[Sequence[Color]]) -> int:
    """Cells that need no match: the start cell plus any already matched cell"""
    return sum(1 for row in grid for tile in row if tile.is_sentinel)


def copy_grid(grid: Sequence[Sequence[Color]]) -> Grid:
    return [list(row) for row in grid]


def freeze_grid(grid: Sequence[Sequence[Color]]) -> Tuple[Tuple[Color, ...], ...]:
    return tuple(tuple(row) for row in grid)


def new_game(grid: Sequence[Sequence[Color]],
             start: Position = START_POS,
             faces: Orientation = INITIAL_CUBE_FACES) -> GameState:
    """
    Create a fresh game state from a grid

    Args:
        grid: square grid of colors, indexed grid[y][x]
        start: cube home cell
        faces: initial cube orientation

    Returns:
        GameState in PLAYING status
    """
    size = len(grid)
    if size == 0 or any(len(row) != size for row in grid):
        raise ValueError("Grid must be a non-empty square matrix")
    if not start.in_bounds(size):
        raise ValueError(f"Start position {start.to_tuple()} is outside a {size}x{size} grid")

    return GameState(
        initial_grid=freeze_grid(grid),
        grid=copy_grid(grid),
        position=start,
        orientation=faces,
        moves=0,
        matched_count=count_cleared(grid),
        status=GameStatus.PLAYING,
    )
