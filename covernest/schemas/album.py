"""Album response schemas."""

from typing import Optional

from pydantic import BaseModel

from covernest.schemas.thumb import Thumb


class AlbumResponse(BaseModel):
    id: str
    title: str
    parent_id: Optional[str]
    cover_id: Optional[str]
    thumb: Optional[Thumb]
    is_nsfw: bool
    is_public: bool
    photo_count: int
    owner_id: Optional[str]
    created_at: str


class AlbumDetailResponse(AlbumResponse):
    albums: list[AlbumResponse]  # direct children
