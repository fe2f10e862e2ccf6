"""Same-device game: both colors play on this controller, the server (if any) only keeps a copy of the moves."""

import logging
from typing import Optional

from src.api.models import StartGameRequest
from src.core.exceptions import TransportError
from src.core.shared_types import GameMode
from src.controllers.notifier import ServerNotifier
from src.othello.game import GameState, new_game_state, play_move
from src.othello.position import Position
from src.services.client import GameServerClient

log = logging.getLogger(__name__)


class LocalGameController:
    """Drives the Turn Resolver from user input. No turn checks: whoever clicks plays the color to move."""

    def __init__(self, client: Optional[GameServerClient] = None) -> None:
        self.client = client
        self.notifier = ServerNotifier(client) if client is not None else None
        self.state: GameState = new_game_state()
        self.is_started = False

    async def start(self) -> GameState:
        """Start a game. Without a game id from the server, the game is simply not recorded."""
        game_id = None
        if self.client is not None:
            try:
                response = await self.client.start_game(StartGameRequest(mode=GameMode.LOCAL))
                game_id = response.game_id
            except TransportError:
                log.warning("Failed to start game on the server", exc_info=True)

        self.state = new_game_state(game_id)
        self.is_started = True
        return self.state

    def submit_move(self, row: int, col: int) -> GameState:
        """Play the current player's stone. An illegal move, or any move before start(), changes nothing and returns the same state."""
        previous = self.state
        if not self.is_started:
            return previous

        position = Position(row, col)
        next_state = play_move(previous, position)
        if next_state is previous:
            return previous

        self.state = next_state
        if self.notifier is not None and next_state.game_id is not None:
            self.notifier.move_played(next_state.game_id, previous.current_player, position)
            if next_state.is_game_over:
                self.notifier.game_finished(
                    next_state.game_id, next_state.black_count, next_state.white_count
                )
        return next_state

    def restart(self) -> GameState:
        self.is_started = False
        self.state = new_game_state()
        return self.state

    async def drain(self) -> None:
        if self.notifier is not None:
            await self.notifier.drain()
