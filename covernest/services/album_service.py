"""Album lookups and listings with their covers attached."""

from typing import Optional

from sqlmodel import Session, col, func, select

from covernest.models.album import Album
from covernest.models.photo import Photo
from covernest.models.user import User
from covernest.schemas.album import AlbumResponse
from covernest.schemas.thumb import Thumb
from covernest.services.access_policy import AccessFilter, AlbumAccessPolicy, is_admin
from covernest.services.cover_service import AlbumThumbResolver


def get_album(session: Session, album_id: str) -> Optional[Album]:
    return session.get(Album, album_id)


def list_albums(
    session: Session,
    viewer: Optional[User],
    parent_id: Optional[str] = None,
    access_filter: Optional[AccessFilter] = None,
) -> list[Album]:
    """Albums directly below ``parent_id`` (root albums if None) the viewer may see."""
    access_filter = access_filter or AlbumAccessPolicy()
    query = select(Album)
    if parent_id is None:
        query = query.where(col(Album.parent_id).is_(None))
    else:
        query = query.where(Album.parent_id == parent_id)
    if not is_admin(viewer):
        query = query.where(access_filter.album_accessibility_condition(viewer, Album))
    return list(session.exec(query.order_by(col(Album.lft).asc())).all())


def count_photos(session: Session, album_ids: list[str]) -> dict[str, int]:
    """Number of photos held directly by each album, in one query."""
    if not album_ids:
        return {}
    rows = session.exec(
        select(Photo.album_id, func.count())
        .where(col(Photo.album_id).in_(album_ids))
        .group_by(Photo.album_id)
    ).all()
    return {album_id: count for album_id, count in rows}


def album_to_response(album: Album, thumb: Optional[Thumb], photo_count: int) -> AlbumResponse:
    return AlbumResponse(
        id=album.id,
        title=album.title,
        parent_id=album.parent_id,
        cover_id=album.cover_id,
        thumb=thumb,
        is_nsfw=bool(album.is_nsfw),
        is_public=bool(album.is_public),
        photo_count=photo_count,
        owner_id=album.owner_id,
        created_at=album.created_at.isoformat() if album.created_at else "",
    )


def albums_with_thumbs(
    session: Session,
    albums: list[Album],
    viewer: Optional[User],
    include_nsfw: Optional[bool],
    resolver: Optional[AlbumThumbResolver] = None,
) -> list[AlbumResponse]:
    """Attach covers to a list of albums with one batched resolution."""
    resolver = resolver or AlbumThumbResolver(session)
    thumbs = resolver.resolve_many(albums, viewer, include_nsfw)
    counts = count_photos(session, [a.id for a in albums])
    return [album_to_response(a, thumbs[a.id], counts.get(a.id, 0)) for a in albums]
