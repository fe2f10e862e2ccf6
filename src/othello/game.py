"""
Turn taking on top of the Board Engine.

A GameState is never modified. Every accepted move produces a new one, and a rejected move hands back the exact same object,
so callers can check `new_state is old_state` to see that nothing happened.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Self
from uuid import UUID

from src.core.shared_types import Color, Winner, opponent
from src.othello.board import (
    Board,
    apply_move,
    count_stones,
    initial_board,
    is_terminal,
    legal_moves,
    winner,
)
from src.othello.position import Position


class Phase(Enum):
    IN_PROGRESS = auto()
    TERMINAL = auto()


@dataclass(frozen=True)
class Move:
    """A stone placed by an explicit color. Moves from the server's log carry the mover's color with them."""

    position: Position
    color: Color


@dataclass(frozen=True)
class GameState:
    board: Board
    current_player: Color
    is_game_over: bool
    black_count: int
    white_count: int
    winner: Optional[Winner]
    valid_moves: frozenset[Position] = field(default_factory=frozenset)
    last_move: Optional[Position] = None
    game_id: Optional[UUID] = None

    @property
    def phase(self) -> Phase:
        return Phase.TERMINAL if self.is_game_over else Phase.IN_PROGRESS

    @property
    def to_move(self) -> Optional[Color]:
        """Color expected to play next, None once the game is over."""
        return None if self.is_game_over else self.current_player

    def with_game_id(self, game_id: Optional[UUID]) -> Self:
        return replace(self, game_id=game_id)


def new_game_state(game_id: Optional[UUID] = None) -> GameState:
    """Starting position: black to move."""
    board = initial_board()
    counts = count_stones(board)
    return GameState(
        board=board,
        current_player=Color.BLACK,
        is_game_over=False,
        black_count=counts[Color.BLACK],
        white_count=counts[Color.WHITE],
        winner=None,
        valid_moves=legal_moves(board, Color.BLACK),
        last_move=None,
        game_id=game_id,
    )


def advance(
    board: Board,
    just_moved: Color,
    last_move: Optional[Position] = None,
    game_id: Optional[UUID] = None,
) -> GameState:
    """
    Decide who plays on `board` after `just_moved` placed a stone.
    ----

    1. Neither color can move --> terminal state, no valid moves.
    2. The opponent can move --> opponent to move.
    3. The opponent cannot move --> their turn is skipped and `just_moved` plays again.
       (Step 1 guarantees `just_moved` has a move in that case.)
    """
    counts = count_stones(board)
    common = {
        "board": board,
        "black_count": counts[Color.BLACK],
        "white_count": counts[Color.WHITE],
        "last_move": last_move,
        "game_id": game_id,
    }

    if is_terminal(board):
        return GameState(
            current_player=opponent(just_moved),
            is_game_over=True,
            winner=winner(board),
            valid_moves=frozenset(),
            **common,
        )

    next_color = opponent(just_moved)
    next_moves = legal_moves(board, next_color)
    if not next_moves:
        # pass: the opponent is skipped silently
        next_color = just_moved
        next_moves = legal_moves(board, just_moved)

    return GameState(
        current_player=next_color,
        is_game_over=False,
        winner=None,
        valid_moves=next_moves,
        **common,
    )


def play_move(
    state: GameState, position: Position, color: Optional[Color] = None
) -> GameState:
    """
    Attempt a move.
    ----

    Without a color the state's current player moves (local play).
    With a color the move is replayed exactly as logged, whatever this state believes about whose turn it is.

    Returns `state` itself when the move is rejected.
    """
    if state.is_game_over or not position.is_within_bounds():
        return state

    mover = state.current_player if color is None else color
    new_board = apply_move(state.board, position, mover)
    if new_board is state.board:
        return state

    return advance(new_board, mover, last_move=position, game_id=state.game_id)
