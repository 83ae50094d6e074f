"""SQLite engine, connection pragmas and session factory."""

import logging

from sqlalchemy import event
from sqlmodel import SQLModel, Session, create_engine

from guestlist.config import settings

# Registers every table on SQLModel.metadata
import guestlist.models  # noqa: F401

logger = logging.getLogger(__name__)

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)


@event.listens_for(engine, "connect")
def _on_connect(dbapi_connection, connection_record):
    # SQLite forgets foreign_keys per connection; guest deletes cascade through it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db() -> None:
    """Create missing tables and switch the file to WAL journaling."""
    SQLModel.metadata.create_all(engine)

    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA journal_mode=WAL")
        conn.exec_driver_sql("PRAGMA synchronous=NORMAL")
        conn.commit()
    logger.debug("Database initialised at %s", settings.db_path)


def get_session():
    """FastAPI dependency: one database session per request."""
    with Session(engine) as session:
        yield session
