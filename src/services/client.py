"""
Client side view of the game server.

The controllers only know the `GameServerClient` protocol. How requests travel (HTTP, in-process call, ...) is up to the implementation.

Contract:
* start_game / join_game / poll_moves raise TransportError when the call fails or is refused.
* place_stone / end_game report refusal through SuccessResponse(success=False, ...) and raise TransportError only when the call itself fails.
* Anything else raised is a bug in the client. The polling task logs it and keeps polling.
"""

from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from src.api.models import (
    EndGameRequest,
    JoinGameRequest,
    JoinGameResponse,
    PlaceStoneRequest,
    PollMovesRequest,
    PollMovesResponse,
    StartGameRequest,
    StartGameResponse,
    SuccessResponse,
)
from src.core.exceptions import GameError, TransportError
from src.services.move_log_service import MoveLogService

RequestT = TypeVar("RequestT", bound=BaseModel)


class GameServerClient(Protocol):
    async def start_game(self, request: StartGameRequest) -> StartGameResponse: ...
    async def join_game(self, request: JoinGameRequest) -> JoinGameResponse: ...
    async def place_stone(self, request: PlaceStoneRequest) -> SuccessResponse: ...
    async def end_game(self, request: EndGameRequest) -> SuccessResponse: ...
    async def poll_moves(self, request: PollMovesRequest) -> PollMovesResponse: ...


class InProcessGameServerClient:
    """Calls the move log service directly. Service errors are translated the way a server would answer them."""

    def __init__(self, service: MoveLogService) -> None:
        self.service = service

    async def start_game(self, request: StartGameRequest) -> StartGameResponse:
        try:
            return self.service.start_game(request)
        except GameError as exc:
            raise TransportError(str(exc)) from exc

    async def join_game(self, request: JoinGameRequest) -> JoinGameResponse:
        try:
            return self.service.join_game(request)
        except GameError as exc:
            raise TransportError(str(exc)) from exc

    async def place_stone(self, request: PlaceStoneRequest) -> SuccessResponse:
        try:
            return self.service.place_stone(request)
        except GameError as exc:
            return SuccessResponse(success=False, message=str(exc))

    async def end_game(self, request: EndGameRequest) -> SuccessResponse:
        try:
            return self.service.end_game(request)
        except GameError as exc:
            return SuccessResponse(success=False, message=str(exc))

    async def poll_moves(self, request: PollMovesRequest) -> PollMovesResponse:
        try:
            return self.service.poll_moves(request)
        except GameError as exc:
            raise TransportError(str(exc)) from exc


def build_request(model: type[RequestT], **data: object) -> RequestT:
    """Build a request model. Data the server would refuse becomes a TransportError on the client side."""
    try:
        return model(**data)
    except (ValidationError, GameError) as exc:
        raise TransportError(f"Invalid {model.__name__}: {exc}") from exc
