"""SQLite engine setup."""

import pytest
from sqlalchemy.exc import IntegrityError

from covernest.config import settings
from covernest.database import engine, init_db
from covernest.models import Photo


def test_every_connection_enforces_foreign_keys():
    with engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
        # NORMAL
        assert conn.exec_driver_sql("PRAGMA synchronous").scalar() == 1


def test_photo_in_unknown_album_is_rejected(session):
    session.add(Photo(album_id="alb_missing"))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_init_db_switches_journal_mode():
    init_db()
    with engine.connect() as conn:
        mode = conn.exec_driver_sql("PRAGMA journal_mode").scalar()
    assert mode.lower() == settings.db_journal_mode.lower()
