"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base


def create_session_factory(database_url: Optional[str] = None) -> sessionmaker[Session]:
    """Engine for the configured database (or the given URL). Ensures all tables are created."""
    settings = get_settings()
    engine = create_engine(database_url or settings.database_url, echo=settings.sql_echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """One session per request, closed afterwards. Meant for the host that serves MoveLogService (ex. as a web framework dependency)."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
