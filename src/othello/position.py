"""
A position (cell) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Othello board is always 8x8.
BOARD_SIZE = 8

Vector = tuple[int, int]

# The 8 compass directions as (row, col) steps, in row-major order: NW, N, NE, W, E, SW, S, SE
DIRECTIONS: tuple[Vector, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def step(self, direction: Vector) -> Position:
        dr, dc = direction
        return Position(self.row + dr, self.col + dc)


def all_positions() -> list[Position]:
    """Every cell of the board, row by row."""
    return [Position(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]
