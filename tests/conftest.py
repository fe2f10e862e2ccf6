"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.db.sql_repository import SQLGameRepository
from src.services.client import InProcessGameServerClient
from src.services.move_log_service import MoveLogService

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def move_log_service(db_session_repo: Session) -> MoveLogService:
    """The server side, backed by the test database."""
    return MoveLogService(SQLGameRepository(db_session_repo))


@pytest.fixture
def server_client(move_log_service: MoveLogService) -> InProcessGameServerClient:
    """Both players of a two-device game talk to the same server."""
    return InProcessGameServerClient(move_log_service)
