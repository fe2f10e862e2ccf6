"""
The Board Engine implements all rules that affect the `position` (in othello: which cells hold which stones).

Every function here is pure: a board is never modified, a move produces a new one.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import DRAW, Color, Winner, opponent
from src.othello.position import BOARD_SIZE, DIRECTIONS, Position, Vector, all_positions

Cell = Optional[Color]
Grid = tuple[tuple[Cell, ...], ...]

ROW_CHAR_TO_CELL: dict[str, Cell] = {".": None, "B": Color.BLACK, "W": Color.WHITE}
CELL_TO_ROW_CHAR: dict[Cell, str] = {value: key for key, value in ROW_CHAR_TO_CELL.items()}


@dataclass(frozen=True)
class Board:
    grid: Grid

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.grid):
            raise ValueError(f"A board must have {BOARD_SIZE}x{BOARD_SIZE} cells.")

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_rows(cls, rows: list[str]) -> Self:
        """Construct a board from 8 strings of 8 characters, top row first.

        ex. the starting position:
        ........
        ........
        ........
        ...WB...
        ...BW...
        ........
        ........
        ........
        * "B" is a black stone, "W" a white stone and "." an empty cell.
        """
        return cls(tuple(tuple(ROW_CHAR_TO_CELL[char] for char in row) for row in rows))

    def to_rows(self) -> list[str]:
        return ["".join(CELL_TO_ROW_CHAR[cell] for cell in row) for row in self.grid]

    def cell(self, position: Position) -> Cell:
        return self.grid[position.row][position.col]

    def with_stones(self, positions: list[Position], color: Color) -> Self:
        """A new board with the given cells set to `color` (this board is left untouched)."""
        rows = [list(row) for row in self.grid]
        for position in positions:
            rows[position.row][position.col] = color
        return type(self)(tuple(tuple(row) for row in rows))


STARTING_ROWS = [
    "........",
    "........",
    "........",
    "...WB...",
    "...BW...",
    "........",
    "........",
    "........",
]


def initial_board() -> Board:
    """Two stones of each color in the center, crossed."""
    return Board.from_rows(STARTING_ROWS)


# --- CAPTURE RULES ---
def captures_in_direction(
    board: Board, position: Position, color: Color, direction: Vector
) -> list[Position]:
    """
    Walk away from `position` while the cells hold opposing stones.
    ---

    The run only counts when it is closed off by a stone of `color`. Running off the board or into an empty cell captures nothing.
    """
    opposing = opponent(color)
    run: list[Position] = []
    target = position.step(direction)
    while target.is_within_bounds() and board.cell(target) == opposing:
        run.append(target)
        target = target.step(direction)

    if run and target.is_within_bounds() and board.cell(target) == color:
        return run
    return []


def legal_captures(board: Board, position: Position, color: Color) -> list[Position]:
    """
    All stones that flip when `color` plays on `position`.
    ---

    This is the one place that decides legality: a move is legal iff it captures at least one stone.
    An occupied cell captures nothing.
    """
    if board.cell(position) is not None:
        return []

    captured: list[Position] = []
    for direction in DIRECTIONS:
        captured.extend(captures_in_direction(board, position, color, direction))
    return captured


def is_legal_move(board: Board, position: Position, color: Color) -> bool:
    return len(legal_captures(board, position, color)) > 0


def legal_moves(board: Board, color: Color) -> frozenset[Position]:
    return frozenset(
        position for position in all_positions() if is_legal_move(board, position, color)
    )


def apply_move(board: Board, position: Position, color: Color) -> Board:
    """Place a stone and flip the captured ones. An illegal move returns the very same board object."""
    captured = legal_captures(board, position, color)
    if not captured:
        return board
    return board.with_stones([position, *captured], color)


# --- COUNTING / END OF GAME ---
def count_stones(board: Board) -> dict[Color, int]:
    cells = [cell for row in board.grid for cell in row]
    return {color: cells.count(color) for color in Color}


def empty_count(board: Board) -> int:
    return sum(row.count(None) for row in board.grid)


def is_terminal(board: Board) -> bool:
    """The game ends when neither side can move (not just the side to move)."""
    return not legal_moves(board, Color.BLACK) and not legal_moves(board, Color.WHITE)


def winner(board: Board) -> Winner:
    """Most stones wins. Only meaningful once the board is terminal, but computable at any time."""
    counts = count_stones(board)
    if counts[Color.BLACK] > counts[Color.WHITE]:
        return Color.BLACK
    if counts[Color.WHITE] > counts[Color.BLACK]:
        return Color.WHITE
    return DRAW
