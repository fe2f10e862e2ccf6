"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Final, Literal


class Color(StrEnum):
    BLACK = "black"
    WHITE = "white"


class Role(StrEnum):
    HOST = "host"
    GUEST = "guest"


class GameMode(StrEnum):
    LOCAL = "local"
    PVP = "pvp"


class GameResult(StrEnum):
    """Result recorded by the server once the final score is reported."""

    BLACK_WIN = "black_win"
    WHITE_WIN = "white_win"
    DRAW = "draw"


# Winner of a finished game: one of the colors, or a draw.
DRAW: Final = "draw"
Winner = Color | Literal["draw"]


def opponent(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK
