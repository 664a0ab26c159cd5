"""Shared fixtures: a throwaway database and small tree builders."""

import os
import tempfile
from datetime import datetime, timezone

# Setup environment for testing
os.environ["COVERNEST_DATA_DIR"] = tempfile.mkdtemp()
os.environ["COVERNEST_DB_PATH"] = os.path.join(os.environ["COVERNEST_DATA_DIR"], "test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlmodel import Session, SQLModel, select

from covernest.database import engine
from covernest.models import Album, AlbumShare, Photo, User


@pytest.fixture(autouse=True)
def db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    # Keep fixture objects loaded across commits so counted statements stay exact
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def client():
    from covernest.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_user(session):
    def _make(username: str, admin: bool = False) -> User:
        user = User(username=username, may_administrate=admin)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_album(session):
    def _make(title: str, lft: int, rgt: int, parent: Album | None = None, **kwargs) -> Album:
        album = Album(
            title=title,
            lft=lft,
            rgt=rgt,
            parent_id=parent.id if parent else None,
            **kwargs,
        )
        session.add(album)
        session.commit()
        session.refresh(album)
        return album
    return _make


@pytest.fixture
def make_photo(session):
    def _make(album: Album | None, created: str = "2024-01-01", **kwargs) -> Photo:
        photo = Photo(
            album_id=album.id if album else None,
            created_at=datetime.fromisoformat(created).replace(tzinfo=timezone.utc),
            **kwargs,
        )
        session.add(photo)
        session.commit()
        session.refresh(photo)
        return photo
    return _make


@pytest.fixture
def pin_cover(session):
    def _pin(album: Album, photo: Photo) -> Album:
        album.cover_id = photo.id
        session.add(album)
        session.commit()
        session.refresh(album)
        return album
    return _pin


@pytest.fixture
def share(session):
    def _share(album: Album, user: User) -> None:
        session.add(AlbumShare(album_id=album.id, user_id=user.id))
        session.commit()
    return _share


@pytest.fixture
def reload(session):
    """Fetch albums afresh so their pinned covers come eagerly loaded."""
    def _reload(*albums: Album) -> list[Album]:
        query = (
            select(Album)
            .where(Album.id.in_([a.id for a in albums]))
            .execution_options(populate_existing=True)
        )
        by_id = {a.id: a for a in session.exec(query).all()}
        return [by_id[a.id] for a in albums]
    return _reload


@pytest.fixture
def statements():
    """Collect the SQL statements executed while the fixture is active."""
    executed: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        executed.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield executed
    event.remove(engine, "before_cursor_execute", _record)
