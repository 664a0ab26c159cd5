"""CoverNest Database Models."""

from covernest.models.user import User
from covernest.models.photo import Photo
from covernest.models.album import Album, AlbumShare

__all__ = [
    "User",
    "Photo",
    "Album",
    "AlbumShare",
]
