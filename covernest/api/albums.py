"""Album API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from covernest.api.deps import get_resolver, get_viewer
from covernest.database import get_session
from covernest.models.user import User
from covernest.schemas.album import AlbumDetailResponse, AlbumResponse
from covernest.schemas.thumb import Thumb
from covernest.services.album_service import (
    album_to_response,
    albums_with_thumbs,
    count_photos,
    get_album,
    list_albums,
)
from covernest.services.cover_service import AlbumThumbResolver

router = APIRouter(prefix="/albums", tags=["albums"])


@router.get("", response_model=list[AlbumResponse])
def list_album_covers(
    parent_id: Optional[str] = Query(default=None),
    include_nsfw: Optional[bool] = Query(default=None),
    viewer: Optional[User] = Depends(get_viewer),
    session: Session = Depends(get_session),
    resolver: AlbumThumbResolver = Depends(get_resolver),
):
    """List root albums (or the children of ``parent_id``) with their covers."""
    albums = list_albums(session, viewer, parent_id, resolver.access_filter)
    return albums_with_thumbs(session, albums, viewer, include_nsfw, resolver)


@router.get("/{album_id}", response_model=AlbumDetailResponse)
def get_album_detail(
    album_id: str,
    include_nsfw: Optional[bool] = Query(default=None),
    viewer: Optional[User] = Depends(get_viewer),
    session: Session = Depends(get_session),
    resolver: AlbumThumbResolver = Depends(get_resolver),
):
    """Get an album with its cover and its direct children."""
    album = get_album(session, album_id)
    # Inaccessible albums look the same as missing ones
    if not album or not resolver.access_filter.can_access_album(session, viewer, album):
        raise HTTPException(status_code=404, detail="Album not found")

    thumb = resolver.resolve_one(album, viewer, include_nsfw)
    children = list_albums(session, viewer, album.id, resolver.access_filter)
    count = count_photos(session, [album.id]).get(album.id, 0)

    response = album_to_response(album, thumb, count)
    return AlbumDetailResponse(
        **response.model_dump(),
        albums=albums_with_thumbs(session, children, viewer, include_nsfw, resolver),
    )


@router.get("/{album_id}/thumb", response_model=Optional[Thumb])
def get_album_thumb(
    album_id: str,
    include_nsfw: Optional[bool] = Query(default=None),
    viewer: Optional[User] = Depends(get_viewer),
    session: Session = Depends(get_session),
    resolver: AlbumThumbResolver = Depends(get_resolver),
):
    """Cover of a single album; ``null`` if it has none."""
    album = get_album(session, album_id)
    if not album or not resolver.access_filter.can_access_album(session, viewer, album):
        raise HTTPException(status_code=404, detail="Album not found")
    return resolver.resolve_one(album, viewer, include_nsfw)
