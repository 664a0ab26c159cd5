"""Cover ranking criteria."""

import pytest

from covernest.config import settings
from covernest.services.cover_service import AlbumThumbResolver
from covernest.services.sorting import (
    ColumnSortingPhotoType,
    OrderSortingType,
    PhotoSortingCriterion,
)


def test_default_is_newest_first():
    default = PhotoSortingCriterion.create_default()
    assert default.column == ColumnSortingPhotoType.CREATED_AT
    assert default.order == OrderSortingType.DESC
    assert default == PhotoSortingCriterion()


def test_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "photo_sorting_column", "TITLE")
    monkeypatch.setattr(settings, "photo_sorting_order", "asc")
    criterion = PhotoSortingCriterion.from_settings()
    assert criterion.column == ColumnSortingPhotoType.TITLE
    assert criterion.order == OrderSortingType.ASC


def test_from_settings_rejects_unknown_column(monkeypatch):
    monkeypatch.setattr(settings, "photo_sorting_column", "file_size")
    with pytest.raises(ValueError):
        PhotoSortingCriterion.from_settings()


def test_order_clauses_start_with_starred():
    clauses = PhotoSortingCriterion.create_default().order_by_clauses()
    assert len(clauses) == 3
    assert "is_starred DESC" in str(clauses[0])
    assert "created_at DESC" in str(clauses[1])
    assert "id ASC" in str(clauses[2])


def test_ascending_criterion_picks_oldest(session, make_user, make_album, make_photo):
    admin = make_user("root", admin=True)
    album = make_album("A", 1, 2)
    make_photo(album, created="2024-01-01")
    oldest = make_photo(album, created="2020-01-01")

    sorting = PhotoSortingCriterion(ColumnSortingPhotoType.CREATED_AT, OrderSortingType.ASC)
    thumb = AlbumThumbResolver(session, sorting=sorting).resolve_one(album, admin)
    assert thumb.id == oldest.id


def test_title_criterion(session, make_user, make_album, make_photo):
    admin = make_user("root", admin=True)
    album = make_album("A", 1, 2)
    make_photo(album, title="zebra", created="2024-01-01")
    apple = make_photo(album, title="apple", created="2020-01-01")

    sorting = PhotoSortingCriterion(ColumnSortingPhotoType.TITLE, OrderSortingType.ASC)
    resolver = AlbumThumbResolver(session, sorting=sorting)
    assert resolver.resolve_one(album, admin).id == apple.id
    assert resolver.resolve_many([album], admin)[album.id].id == apple.id


def test_starred_outranks_any_criterion(session, make_user, make_album, make_photo):
    admin = make_user("root", admin=True)
    album = make_album("A", 1, 2)
    make_photo(album, title="apple")
    starred = make_photo(album, title="zebra", is_starred=True)

    sorting = PhotoSortingCriterion(ColumnSortingPhotoType.TITLE, OrderSortingType.ASC)
    resolver = AlbumThumbResolver(session, sorting=sorting)
    assert resolver.resolve_one(album, admin).id == starred.id
