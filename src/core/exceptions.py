"""
Custom exceptions shared by all layers.

NOTE an illegal move or a move made out of turn is NOT an exception: the domain layer returns the unchanged state instead.
"""


class GameError(Exception):
    """Top-level exception for anything raised by this application."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted (raised from the request model validators)."""


class GameStateError(GameError):
    """The request does not fit the current state of the game (ex. joining a game twice)."""


class RepositoryError(GameError):
    """Persistence layer could not find or store a record."""


class TransportError(GameError):
    """A call to the game server failed or was refused."""


class DesyncError(GameError):
    """A move from the server's move log does not fit the local view of the game."""

    def __init__(self, message: str, sequence: int) -> None:
        super().__init__(message)
        self.sequence = sequence
