"""SQLite engine for the album tree and its photos."""

import logging

from sqlalchemy import event
from sqlmodel import SQLModel, Session, create_engine

from covernest.config import settings

# Registers every table on SQLModel.metadata
import covernest.models  # noqa: F401

logger = logging.getLogger(__name__)

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False, "timeout": settings.db_busy_timeout},
)


@event.listens_for(engine, "connect")
def _apply_pragmas(dbapi_connection, connection_record) -> None:
    # SQLite pragmas are per connection, so every pooled connection gets them
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute(f"PRAGMA synchronous={settings.db_synchronous}")
    cursor.close()


def init_db() -> None:
    """Create missing tables and switch the journal mode."""
    SQLModel.metadata.create_all(engine)
    with engine.connect() as conn:
        mode = conn.exec_driver_sql(f"PRAGMA journal_mode={settings.db_journal_mode}").scalar()
    logger.info("Database ready at %s (journal_mode=%s)", settings.db_path, mode)


def get_session():
    """FastAPI dependency: yields a database session."""
    with Session(engine) as session:
        yield session
