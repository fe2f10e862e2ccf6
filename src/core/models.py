"""
Boundary layer data model(s).

These objects are passed between the move log service and the persistence layer.
(Decouples the data model specific to the DB layer from the information the service needs)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class GameRecord:
    """Transport-safe representation of a stored game (secrets included, so never send this to a client as-is)."""

    game_id: UUID
    host_secret: Optional[str] = None
    guest_secret: Optional[str] = None
    black_count: Optional[int] = None
    white_count: Optional[int] = None
    result: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.result is not None


@dataclass
class MoveRecord:
    """One entry of a game's move log. The sequence starts at 1 and has no gaps."""

    game_id: UUID
    color: str
    col: int
    row: int
    sequence: int
