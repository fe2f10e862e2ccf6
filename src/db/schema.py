"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    black_count: Mapped[Optional[int]]
    white_count: Mapped[Optional[int]]
    result: Mapped[Optional[str]]
    host_secret: Mapped[Optional[str]]
    guest_secret: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBMove(Base):
    __tablename__ = "moves"
    __table_args__ = (UniqueConstraint("game_id", "sequence"),)
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"), index=True)
    color: Mapped[str]
    col: Mapped[int]
    row: Mapped[int]
    sequence: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
