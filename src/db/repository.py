"""Protocol repository (implemented with SQLAlchemy, but anything storing games and their move logs will do)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameRecord, MoveRecord


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def create_game(self, game: GameRecord) -> GameRecord:
        """Store a new game."""
        ...

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        ...

    def set_guest_secret(self, game_id: UUID, guest_secret: str) -> bool:
        """Store the guest secret, but only once. False if the game is unknown or already has a guest."""
        ...

    def end_game(
        self, game_id: UUID, black_count: int, white_count: int, result: str
    ) -> GameRecord | None:
        """Record the final score."""
        ...

    def record_move(self, move: MoveRecord) -> MoveRecord:
        """Append a move to the game's log."""
        ...

    def count_moves(self, game_id: UUID) -> int:
        """Number of moves logged for the game so far."""
        ...

    def moves_after(self, game_id: UUID, after_sequence: int) -> list[MoveRecord]:
        """Logged moves with a sequence strictly greater than `after_sequence`, oldest first."""
        ...
