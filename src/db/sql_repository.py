"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from src.core.models import GameRecord, MoveRecord
from src.db.schema import DBGame, DBMove


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game: GameRecord) -> GameRecord:
        """Store a new game."""
        game_db = DBGame(
            id=game.game_id,
            host_secret=game.host_secret,
            guest_secret=game.guest_secret,
            black_count=game.black_count,
            white_count=game.white_count,
            result=game.result,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_record(game_db)

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_record(game_db)
        return None

    def set_guest_secret(self, game_id: UUID, guest_secret: str) -> bool:
        """Conditional update, so two guests racing for the same game cannot both get in."""
        statement = (
            update(DBGame)
            .where(DBGame.id == game_id, DBGame.guest_secret.is_(None))
            .values(guest_secret=guest_secret)
        )
        result = self.db.execute(statement)
        self.db.commit()
        return result.rowcount == 1

    def end_game(
        self, game_id: UUID, black_count: int, white_count: int, result: str
    ) -> GameRecord | None:
        """Record the final score. Reporting again simply overwrites."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.black_count = black_count
        game_db.white_count = white_count
        game_db.result = result
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_record(game_db)

    def record_move(self, move: MoveRecord) -> MoveRecord:
        """Append a move to the game's log."""
        move_db = DBMove(
            game_id=move.game_id,
            color=move.color,
            col=move.col,
            row=move.row,
            sequence=move.sequence,
        )
        self.db.add(move_db)
        self.db.commit()
        self.db.refresh(move_db)
        return self._to_move_record(move_db)

    def count_moves(self, game_id: UUID) -> int:
        query = select(func.count()).select_from(DBMove).where(DBMove.game_id == game_id)
        return self.db.scalar(query) or 0

    def moves_after(self, game_id: UUID, after_sequence: int) -> list[MoveRecord]:
        query = (
            select(DBMove)
            .where(DBMove.game_id == game_id, DBMove.sequence > after_sequence)
            .order_by(DBMove.sequence)
        )
        return [self._to_move_record(move_db) for move_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_record(self, game_db: DBGame) -> GameRecord:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecord(
            game_id=game_db.id,
            host_secret=game_db.host_secret,
            guest_secret=game_db.guest_secret,
            black_count=game_db.black_count,
            white_count=game_db.white_count,
            result=game_db.result,
        )

    def _to_move_record(self, move_db: DBMove) -> MoveRecord:
        return MoveRecord(
            game_id=move_db.game_id,
            color=move_db.color,
            col=move_db.col,
            row=move_db.row,
            sequence=move_db.sequence,
        )
