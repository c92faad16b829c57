import os
import tempfile
from datetime import datetime, timedelta

# Set environment variables BEFORE any imports that might use settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_SCHEMA"] = "true"
os.environ["LOG_LEVEL"] = "INFO"

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy.orm import Session

from cashdesk.data_access import DataAccess
from cashdesk.db.base import build_engine, build_session_factory


class FakeClock:
    """Deterministic replacement for the wall clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    test_engine = build_engine(test_db_url)
    TestingSessionLocal = build_session_factory(test_engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        try:
            if os.path.exists(test_db_path):
                os.remove(test_db_path)
            if os.path.exists(temp_db_dir):
                os.rmdir(temp_db_dir)
        except OSError as e:
            print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def db(db_session) -> Session:
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 15, 9, 30, 0))


@pytest.fixture(scope="function")
def cash_desk(clock: FakeClock):
    """An initialized DataAccess over a private in-memory database."""
    data_access = DataAccess("sqlite://", clock=clock)
    data_access.initialize()
    try:
        yield data_access
    finally:
        data_access.dispose()


@pytest.fixture(scope="function")
def member_id(cash_desk: DataAccess) -> int:
    """Register a member with no membership."""
    return cash_desk.add_member("Ann", "Lee", datetime(1990, 1, 1).date())
