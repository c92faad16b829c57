from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Normalize PostgreSQL URL to use psycopg3 driver."""
    # Skip normalization for SQLite (used in tests and by default)
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _is_in_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL with cascade-friendly SQLite settings."""
    url = normalize_database_url(database_url)
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    if _is_in_memory_sqlite(url):
        # A single shared connection keeps the in-memory database alive for the session
        kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _constraint_failure(error: IntegrityError, sqlstate: str, sqlite_marker: str) -> bool:
    # psycopg exposes the SQLSTATE; sqlite3 only reports it in the message
    orig = error.orig
    if getattr(orig, "sqlstate", None) == sqlstate:
        return True
    return sqlite_marker in str(orig).upper()


def is_unique_violation(error: IntegrityError) -> bool:
    """True if the IntegrityError comes from a unique constraint or index."""
    return _constraint_failure(error, "23505", "UNIQUE CONSTRAINT FAILED")


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """True if the IntegrityError comes from a foreign key constraint."""
    return _constraint_failure(error, "23503", "FOREIGN KEY CONSTRAINT FAILED")
