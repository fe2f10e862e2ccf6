"""Requests and Response models of the game server operations"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode
from src.othello.position import BOARD_SIZE


# --- REQUEST MODELS ---
class StartGameRequest(BaseModel):
    mode: GameMode = GameMode.PVP


class JoinGameRequest(BaseModel):
    game_id: UUID


class PlaceStoneRequest(BaseModel):
    game_id: UUID
    color: Color
    col: int
    row: int
    secret: Optional[str] = None

    @field_validator(*["col", "row"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"col and row must be between 0 and {BOARD_SIZE - 1}, got {value}."
            )
        return value


class EndGameRequest(BaseModel):
    game_id: UUID
    black_count: int
    white_count: int

    @field_validator(*["black_count", "white_count"])
    @classmethod
    def validate_count(cls, value: int) -> int:
        if not 0 <= value <= BOARD_SIZE * BOARD_SIZE:
            raise InvalidRequestError(f"Stone count out of range: {value}.")
        return value


class PollMovesRequest(BaseModel):
    game_id: UUID
    after_sequence: int = 0


# --- RESPONSE MODELS ---
class StartGameResponse(BaseModel):
    game_id: UUID
    host_secret: Optional[str] = None


class JoinGameResponse(BaseModel):
    guest_secret: str


class SuccessResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class MoveResponse(BaseModel):
    game_id: UUID
    color: Color
    col: int
    row: int
    sequence: int


class PollMovesResponse(BaseModel):
    moves: list[MoveResponse]
