"""Database configuration and session management for SQLite.

The document store persists every checklist document as a row in SQLite.
Connections are configured the same way for the app and for tooling:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while a batch
      of instance items is being written.
    - **Foreign Keys**: off by default in SQLite; enabled so any future
      relational tables keep referential integrity.
    - **check_same_thread=False**: FastAPI may hand a connection to a
      different worker thread than the one that opened it.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from shootplan.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, so they must be set each time a
    new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Table models register themselves on import
    import shootplan.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
