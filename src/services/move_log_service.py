"""
Server side of the two-player game: an append-only move log per game.

The service never checks the rules of the game. It stores what the players send (after checking the capability secret)
and hands the log back in order. Each client replays the log with its own Board Engine.
"""

import logging
from uuid import UUID, uuid4

from src.api.models import (
    EndGameRequest,
    JoinGameRequest,
    JoinGameResponse,
    MoveResponse,
    PlaceStoneRequest,
    PollMovesRequest,
    PollMovesResponse,
    StartGameRequest,
    StartGameResponse,
    SuccessResponse,
)
from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import GameRecord, MoveRecord
from src.core.shared_types import Color, GameMode, GameResult
from src.db.repository import GameRepository

log = logging.getLogger(__name__)


def game_result(black_count: int, white_count: int) -> GameResult:
    if black_count > white_count:
        return GameResult.BLACK_WIN
    if white_count > black_count:
        return GameResult.WHITE_WIN
    return GameResult.DRAW


class MoveLogService:
    """Orchestration of the move log operations on top of the repository."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    def start_game(self, request: StartGameRequest) -> StartGameResponse:
        """New game. A game between two devices also hands out the host's secret."""
        host_secret = str(uuid4()) if request.mode == GameMode.PVP else None
        game = self.repo.create_game(GameRecord(game_id=uuid4(), host_secret=host_secret))
        log.info("Started %s game %s", request.mode, game.game_id)
        return StartGameResponse(game_id=game.game_id, host_secret=host_secret)

    def join_game(self, request: JoinGameRequest) -> JoinGameResponse:
        """Second player joins. Only one guest can ever join a game."""
        guest_secret = str(uuid4())
        if not self.repo.set_guest_secret(request.game_id, guest_secret):
            raise GameStateError("guest already joined or game not found")
        log.info("Guest joined game %s", request.game_id)
        return JoinGameResponse(guest_secret=guest_secret)

    def place_stone(self, request: PlaceStoneRequest) -> SuccessResponse:
        """
        Append a move to the log.
        ----

        1. The game must exist and not be finished.
        2. Games with secrets: black moves need the host secret, white moves the guest secret.
        3. The move gets the next sequence number.
        """
        game = self._fetch_game(request.game_id)
        if game.is_finished:
            raise GameStateError(f"Game {request.game_id} is already finished.")

        self._assert_secret(game, request.color, request.secret)

        sequence = self.repo.count_moves(request.game_id) + 1
        self.repo.record_move(
            MoveRecord(
                game_id=request.game_id,
                color=request.color,
                col=request.col,
                row=request.row,
                sequence=sequence,
            )
        )
        log.debug(
            "Game %s: move %d %s at (%d, %d)",
            request.game_id,
            sequence,
            request.color,
            request.row,
            request.col,
        )
        return SuccessResponse(success=True)

    def end_game(self, request: EndGameRequest) -> SuccessResponse:
        """Record the final score. Both players report it, so repeated reports are expected."""
        result = game_result(request.black_count, request.white_count)
        stored = self.repo.end_game(
            request.game_id, request.black_count, request.white_count, result
        )
        if stored is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        log.info(
            "Game %s ended %d-%d (%s)",
            request.game_id,
            request.black_count,
            request.white_count,
            result,
        )
        return SuccessResponse(success=True)

    def poll_moves(self, request: PollMovesRequest) -> PollMovesResponse:
        """All moves logged after the given sequence number, in order."""
        self._fetch_game(request.game_id)
        moves = self.repo.moves_after(request.game_id, request.after_sequence)
        return PollMovesResponse(
            moves=[
                MoveResponse(
                    game_id=move.game_id,
                    color=Color(move.color),
                    col=move.col,
                    row=move.row,
                    sequence=move.sequence,
                )
                for move in moves
            ]
        )

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> GameRecord:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

    def _assert_secret(self, game: GameRecord, color: Color, secret: str | None) -> None:
        """Games started without a host secret (same device games) accept any move."""
        if game.host_secret is None:
            return

        expected = game.host_secret if color == Color.BLACK else game.guest_secret
        if expected is None or secret != expected:
            raise GameStateError("invalid secret")
