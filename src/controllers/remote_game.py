"""
Two-device game kept in sync through the server's move log.
----

Each side plays its own moves locally first (optimistic) and tells the server afterwards.
The opponent's moves are found by polling the log for everything after the reconciliation cursor,
the highest sequence number the server has acknowledged to us. The log is a catch-up stream:
moves are replayed one by one with their own color, never by copying a full state from the server.

Whose turn it is always follows from the local GameState, never from anything the server says.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional
from uuid import UUID

from src.api.models import JoinGameRequest, MoveResponse, PollMovesRequest, StartGameRequest
from src.controllers.notifier import ServerNotifier
from src.core.config import get_settings
from src.core.exceptions import DesyncError, TransportError
from src.core.shared_types import Color, GameMode, Role, opponent
from src.othello.game import GameState, Move, new_game_state, play_move
from src.othello.position import Position
from src.services.client import GameServerClient, build_request

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeerState:
    role: Role
    my_color: Color
    secret: str
    last_sequence: int = 0
    waiting_for_opponent: bool = False
    is_my_turn: bool = False


def is_my_turn(state: GameState, my_color: Color) -> bool:
    return state.current_player == my_color and not state.is_game_over


class RemoteSyncController:
    """Owns the local GameState and the PeerState of one side of a two-device game."""

    def __init__(
        self, client: GameServerClient, poll_interval: Optional[float] = None
    ) -> None:
        self.client = client
        self.notifier = ServerNotifier(client)
        self.poll_interval = (
            poll_interval if poll_interval is not None else get_settings().poll_interval_seconds
        )
        self.state: GameState = new_game_state()
        self.peer: Optional[PeerState] = None
        self.error: Optional[str] = None
        self.sync_error: Optional[str] = None
        # moves applied locally, in log order (own optimistic moves included)
        self.history: list[Move] = []
        self._session = 0
        self._poll_task: Optional[asyncio.Task[None]] = None

    @property
    def is_started(self) -> bool:
        return self.peer is not None

    # --- LOBBY ---
    async def create_game(self) -> bool:
        """Host a new game. The host plays black and may move before the guest has joined."""
        self.error = None
        try:
            response = await self.client.start_game(StartGameRequest(mode=GameMode.PVP))
        except TransportError:
            log.warning("Failed to create game", exc_info=True)
            self.error = "Failed to create game"
            return False
        if response.host_secret is None:
            log.warning("Server started game %s without a host secret", response.game_id)
            self.error = "Failed to create game"
            return False

        self._begin(
            response.game_id,
            PeerState(
                role=Role.HOST,
                my_color=Color.BLACK,
                secret=response.host_secret,
                waiting_for_opponent=True,
                is_my_turn=True,
            ),
        )
        return True

    async def join_game(self, game_id: UUID | str) -> bool:
        """Join a game by the id the host shared. Failure is shown in the lobby with the server's message."""
        self.error = None
        try:
            request = build_request(JoinGameRequest, game_id=game_id)
            response = await self.client.join_game(request)
        except TransportError as exc:
            log.warning("Failed to join game %s", game_id, exc_info=True)
            self.error = str(exc) or "Failed to join game"
            return False

        self._begin(
            request.game_id,
            PeerState(
                role=Role.GUEST,
                my_color=Color.WHITE,
                secret=response.guest_secret,
                waiting_for_opponent=False,
                is_my_turn=False,
            ),
        )
        return True

    def restart(self) -> None:
        """Back to the lobby. Requests still in flight are not cancelled, their answers get ignored."""
        self.stop_polling()
        self._session += 1
        self.state = new_game_state()
        self.peer = None
        self.error = None
        self.sync_error = None
        self.history = []

    def _begin(self, game_id: UUID, peer: PeerState) -> None:
        self.stop_polling()
        self._session += 1
        self.state = new_game_state(game_id)
        self.peer = peer
        self.sync_error = None
        self.history = []
        log.info("Game %s started as %s (%s)", game_id, peer.role, peer.my_color)

    # --- LOCAL MOVES ---
    def submit_move(self, row: int, col: int) -> GameState:
        """
        Play one of our own stones.
        ---

        Out of turn or illegal: nothing happens, the same state is returned.
        Otherwise the new state is kept right away and the server is told in the background.
        """
        peer = self.peer
        previous = self.state
        if peer is None or not peer.is_my_turn or previous.game_id is None:
            return previous

        position = Position(row, col)
        next_state = play_move(previous, position, peer.my_color)
        if next_state is previous:
            return previous

        self.state = next_state
        self.history.append(Move(position, peer.my_color))
        self.peer = replace(peer, is_my_turn=is_my_turn(next_state, peer.my_color))

        self.notifier.move_played(previous.game_id, peer.my_color, position, peer.secret)
        if next_state.is_game_over:
            self._report_result(next_state)
        return next_state

    # --- RECONCILIATION ---
    def should_poll(self) -> bool:
        """No need to ask the server while we are the ones expected to move (once the guest is known to be there)."""
        peer = self.peer
        if peer is None or self.state.game_id is None or self.state.is_game_over:
            return False
        return not (peer.is_my_turn and not peer.waiting_for_opponent)

    async def poll_once(self) -> GameState:
        """One reconciliation tick. Transport failures are logged, the next tick simply tries again."""
        if not self.should_poll():
            return self.state

        assert self.peer is not None and self.state.game_id is not None
        session = self._session
        game_id = self.state.game_id
        try:
            response = await self.client.poll_moves(
                PollMovesRequest(game_id=game_id, after_sequence=self.peer.last_sequence)
            )
        except TransportError:
            log.warning("Poll error for game %s", game_id, exc_info=True)
            return self.state

        if session != self._session or self.peer is None:
            log.debug("Discarding poll response for game %s, session ended", game_id)
            return self.state

        self._reconcile(response.moves)
        return self.state

    def _reconcile(self, moves: list[MoveResponse]) -> None:
        """
        Replay the polled moves onto the local state.
        ---

        Per move, in sequence order (the server may list them in any order):
        * at or below the cursor: already acknowledged, skip.
        * a log position we already applied locally: must be our own optimistic move coming back. Acknowledge it.
        * the next log position: apply it with the move's own color.
        * anything else is a divergence between us and the server (see DesyncError).

        A divergence stops the tick at that move, the cursor stays just before it.
        """
        assert self.peer is not None
        peer = self.peer
        state = self.state
        cursor = peer.last_sequence
        opponent_seen = False
        self.sync_error = None

        try:
            for record in sorted(moves, key=lambda record: record.sequence):
                if record.sequence <= cursor:
                    continue

                move = Move(Position(record.row, record.col), record.color)
                if record.sequence <= len(self.history):
                    if self.history[record.sequence - 1] != move:
                        raise DesyncError(
                            f"Logged move {record.sequence} {move} differs from the local one "
                            f"{self.history[record.sequence - 1]}",
                            record.sequence,
                        )
                elif record.sequence == len(self.history) + 1:
                    next_state = play_move(state, move.position, move.color)
                    if next_state is state:
                        raise DesyncError(
                            f"Logged move {record.sequence} {move} is illegal on the local board",
                            record.sequence,
                        )
                    state = next_state
                    self.history.append(move)
                else:
                    raise DesyncError(
                        f"Logged move {record.sequence} skips ahead of the local log ({len(self.history)} moves)",
                        record.sequence,
                    )

                cursor = record.sequence
                if move.color == opponent(peer.my_color):
                    opponent_seen = True
        except DesyncError as exc:
            log.error("Game %s out of sync at move %d: %s", state.game_id, exc.sequence, exc)
            self.sync_error = str(exc)

        transitioned = state is not self.state
        self.state = state
        self.peer = replace(
            peer,
            last_sequence=cursor,
            is_my_turn=is_my_turn(state, peer.my_color),
            waiting_for_opponent=peer.waiting_for_opponent and not opponent_seen,
        )
        if cursor != peer.last_sequence:
            log.debug("Game %s: acknowledged up to move %d", state.game_id, cursor)

        if transitioned and state.is_game_over:
            self._report_result(state)

    def _report_result(self, state: GameState) -> None:
        """Both sides report the result. The server does not mind hearing it twice."""
        assert state.game_id is not None
        self.notifier.game_finished(state.game_id, state.black_count, state.white_count)

    # --- POLLING TASK ---
    def start_polling(self) -> asyncio.Task[None]:
        """Poll every `poll_interval` seconds until the game is over or polling is stopped."""
        self.stop_polling()
        self._poll_task = asyncio.get_running_loop().create_task(
            self._poll_loop(self._session)
        )
        return self._poll_task

    def stop_polling(self) -> None:
        if self._poll_task is not None and not self._poll_task.done():
            self._poll_task.cancel()
        self._poll_task = None

    async def _poll_loop(self, session: int) -> None:
        while session == self._session and not self.state.is_game_over:
            await asyncio.sleep(self.poll_interval)
            if session != self._session:
                return
            try:
                await self.poll_once()
            except Exception:
                log.exception("Unexpected poll failure for game %s", self.state.game_id)

    async def drain(self) -> None:
        await self.notifier.drain()
