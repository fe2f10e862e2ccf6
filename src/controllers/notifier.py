"""
Fire-and-forget notifications to the game server.

Local play never waits for the server: each notification runs as a background task, and a failure is only logged.
Notifications go out one at a time, in the order they were made, so the server logs moves in the order they were played.
"""

import asyncio
import logging
from typing import Coroutine, Optional
from uuid import UUID

from src.api.models import EndGameRequest, PlaceStoneRequest
from src.core.exceptions import TransportError
from src.core.shared_types import Color
from src.othello.position import Position
from src.services.client import GameServerClient, build_request

log = logging.getLogger(__name__)


class ServerNotifier:
    def __init__(self, client: GameServerClient) -> None:
        self.client = client
        self._pending: set[asyncio.Task[None]] = set()
        self._in_order = asyncio.Lock()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def move_played(
        self,
        game_id: UUID,
        color: Color,
        position: Position,
        secret: Optional[str] = None,
    ) -> None:
        self._spawn(self._record_move(game_id, color, position, secret))

    def game_finished(self, game_id: UUID, black_count: int, white_count: int) -> None:
        self._spawn(self._report_result(game_id, black_count, white_count))

    async def drain(self) -> None:
        """Wait for the notifications still in flight."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _spawn(self, coroutine: Coroutine[object, object, None]) -> None:
        task = asyncio.get_running_loop().create_task(coroutine)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _record_move(
        self, game_id: UUID, color: Color, position: Position, secret: Optional[str]
    ) -> None:
        async with self._in_order:
            try:
                request = build_request(
                    PlaceStoneRequest,
                    game_id=game_id,
                    color=color,
                    col=position.col,
                    row=position.row,
                    secret=secret,
                )
                response = await self.client.place_stone(request)
            except TransportError:
                log.warning("Failed to record move for game %s", game_id, exc_info=True)
                return
        if not response.success:
            log.warning("Failed to record move for game %s: %s", game_id, response.message)

    async def _report_result(self, game_id: UUID, black_count: int, white_count: int) -> None:
        async with self._in_order:
            try:
                request = build_request(
                    EndGameRequest,
                    game_id=game_id,
                    black_count=black_count,
                    white_count=white_count,
                )
                response = await self.client.end_game(request)
            except TransportError:
                log.warning("Failed to end game %s", game_id, exc_info=True)
                return
        if not response.success:
            log.warning("Failed to end game %s: %s", game_id, response.message)
