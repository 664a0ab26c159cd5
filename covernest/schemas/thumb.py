"""Thumbnail schema."""

from pydantic import BaseModel

from covernest.config import settings
from covernest.models.photo import Photo


class Thumb(BaseModel):
    id: str
    type: str
    thumb_url: str

    @classmethod
    def from_photo(cls, photo: Photo) -> "Thumb":
        return cls(
            id=photo.id,
            type=photo.type,
            thumb_url=f"{settings.thumb_url_prefix}/{photo.id}/thumb",
        )
