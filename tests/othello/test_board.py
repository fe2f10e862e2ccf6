"""Unit tests for /src/othello/board.py"""

import pytest

from src.core.shared_types import DRAW, Color
from src.othello.board import (
    STARTING_ROWS,
    Board,
    apply_move,
    captures_in_direction,
    count_stones,
    empty_count,
    initial_board,
    is_legal_move,
    is_terminal,
    legal_captures,
    legal_moves,
    winner,
)
from src.othello.position import BOARD_SIZE, DIRECTIONS, Position

EMPTY_ROWS = ["." * 8] * 8


def rows_with(*cells: tuple[int, int, str]) -> list[str]:
    """Empty board rows, with the given (row, col, char) cells filled in."""
    grid = [list(row) for row in EMPTY_ROWS]
    for row, col, char in cells:
        grid[row][col] = char
    return ["".join(row) for row in grid]


# -- CREATION LOGIC ---
def test_initial_board() -> None:
    """Four stones in the center, crossed. All other cells are empty."""
    board = initial_board()
    assert board.cell(Position(3, 3)) == Color.WHITE
    assert board.cell(Position(3, 4)) == Color.BLACK
    assert board.cell(Position(4, 3)) == Color.BLACK
    assert board.cell(Position(4, 4)) == Color.WHITE
    assert count_stones(board) == {Color.BLACK: 2, Color.WHITE: 2}
    assert empty_count(board) == 60


def test_rows_roundtrip() -> None:
    assert Board.from_rows(STARTING_ROWS).to_rows() == STARTING_ROWS


def test_board_must_be_8_by_8() -> None:
    with pytest.raises(ValueError):
        Board.from_rows(["........"] * 7)

    with pytest.raises(ValueError):
        Board.from_rows(["......."] * 8)


# -- CAPTURES ---
def test_captures_single_direction() -> None:
    """A run of white stones closed by a black stone flips entirely."""
    board = Board.from_rows(rows_with((0, 1, "W"), (0, 2, "W"), (0, 3, "B")))
    east = (0, 1)
    assert captures_in_direction(board, Position(0, 0), Color.BLACK, east) == [
        Position(0, 1),
        Position(0, 2),
    ]


def test_no_capture_when_run_hits_the_edge() -> None:
    board = Board.from_rows(rows_with((0, 6, "W"), (0, 7, "W")))
    assert legal_captures(board, Position(0, 5), Color.BLACK) == []


def test_no_capture_when_run_hits_an_empty_cell() -> None:
    board = Board.from_rows(rows_with((0, 1, "W"), (0, 3, "B")))
    assert legal_captures(board, Position(0, 0), Color.BLACK) == []


def test_no_capture_without_opposing_stones_in_between() -> None:
    """Directly adjacent own stone: there is nothing to capture."""
    board = Board.from_rows(rows_with((0, 1, "B")))
    assert legal_captures(board, Position(0, 0), Color.BLACK) == []


def test_occupied_cell_captures_nothing() -> None:
    board = initial_board()
    assert legal_captures(board, Position(3, 3), Color.BLACK) == []
    assert legal_captures(board, Position(3, 4), Color.WHITE) == []


def test_captures_in_several_directions() -> None:
    """Black plays the center of a star of white stones, each arm closed by black."""
    cells = []
    for dr, dc in DIRECTIONS:
        cells.append((3 + dr, 3 + dc, "W"))
        cells.append((3 + 2 * dr, 3 + 2 * dc, "B"))
    board = Board.from_rows(rows_with(*cells))

    captured = legal_captures(board, Position(3, 3), Color.BLACK)
    assert len(captured) == 8
    assert set(captured) == {Position(3 + dr, 3 + dc) for dr, dc in DIRECTIONS}


def test_captures_lie_strictly_between_move_and_anchor() -> None:
    """Every captured stone is on a straight line from the move, with an own stone right after the run."""
    board = initial_board()
    for position in legal_moves(board, Color.BLACK):
        for captured in legal_captures(board, position, Color.BLACK):
            dr = captured.row - position.row
            dc = captured.col - position.col
            assert dr == 0 or dc == 0 or abs(dr) == abs(dc)
            step = ((dr > 0) - (dr < 0), (dc > 0) - (dc < 0))
            cell = position.step(step)
            while cell != captured:
                assert board.cell(cell) == Color.WHITE
                cell = cell.step(step)
            assert board.cell(captured) == Color.WHITE


# -- LEGAL MOVES ---
def test_opening_moves() -> None:
    assert legal_moves(initial_board(), Color.BLACK) == frozenset(
        {Position(2, 3), Position(3, 2), Position(4, 5), Position(5, 4)}
    )
    assert legal_moves(initial_board(), Color.WHITE) == frozenset(
        {Position(2, 4), Position(3, 5), Position(4, 2), Position(5, 3)}
    )


def test_is_legal_move() -> None:
    board = initial_board()
    assert is_legal_move(board, Position(2, 3), Color.BLACK)
    assert not is_legal_move(board, Position(0, 0), Color.BLACK)
    assert not is_legal_move(board, Position(2, 3), Color.WHITE)


def test_legal_moves_has_no_hidden_state() -> None:
    board = initial_board()
    assert legal_moves(board, Color.BLACK) == legal_moves(board, Color.BLACK)


# -- APPLY MOVE ---
def test_apply_move_flips_captured_stones() -> None:
    board = initial_board()
    new_board = apply_move(board, Position(2, 3), Color.BLACK)

    assert new_board.cell(Position(2, 3)) == Color.BLACK
    assert new_board.cell(Position(3, 3)) == Color.BLACK
    assert count_stones(new_board) == {Color.BLACK: 4, Color.WHITE: 1}

    # original board untouched
    assert board == initial_board()
    assert board.cell(Position(3, 3)) == Color.WHITE


@pytest.mark.parametrize(
    "position, color",
    [
        (Position(0, 0), Color.BLACK),  # captures nothing
        (Position(3, 3), Color.BLACK),  # occupied
        (Position(2, 3), Color.WHITE),  # legal for black only
    ],
)
def test_illegal_move_returns_same_board(position: Position, color: Color) -> None:
    board = initial_board()
    assert apply_move(board, position, color) is board


def test_stone_count_adds_up_to_64() -> None:
    """Play a few opening moves and check the cell count along the way."""
    board = initial_board()
    color = Color.BLACK
    for _ in range(10):
        moves = sorted(legal_moves(board, color))
        if not moves:
            break
        board = apply_move(board, moves[0], color)
        counts = count_stones(board)
        assert counts[Color.BLACK] + counts[Color.WHITE] + empty_count(board) == BOARD_SIZE**2
        color = Color.WHITE if color == Color.BLACK else Color.BLACK


# -- END OF GAME ---
@pytest.mark.parametrize("char, color", [("B", Color.BLACK), ("W", Color.WHITE)])
def test_full_board_of_one_color(char: str, color: Color) -> None:
    board = Board.from_rows([char * 8] * 8)
    assert is_terminal(board)
    assert winner(board) == color


def test_empty_board_is_terminal_draw() -> None:
    board = Board.empty()
    assert is_terminal(board)
    assert winner(board) == DRAW


def test_initial_board_is_not_terminal() -> None:
    assert not is_terminal(initial_board())
    assert winner(initial_board()) == DRAW


def test_terminal_with_empty_cells_left() -> None:
    """Isolated stones of both colors: nobody can capture anything."""
    board = Board.from_rows(rows_with((0, 0, "B"), (0, 1, "B"), (7, 7, "W")))
    assert is_terminal(board)
    assert winner(board) == Color.BLACK
