"""Album models.

Albums form a nested-set tree: every album carries ``lft``/``rgt`` bounds
and album B lies below album A iff ``A.lft <= B.lft and B.rgt <= A.rgt``.
The bounds are maintained by whoever writes the tree; this service only
reads them.
"""

import secrets
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from covernest.models.photo import Photo


class Album(SQLModel, table=True):
    __tablename__ = "albums"

    id: str = Field(default_factory=lambda: f"alb_{secrets.token_hex(4)}", primary_key=True)
    owner_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True)
    parent_id: Optional[str] = Field(default=None, foreign_key="albums.id", index=True)
    title: str
    # Explicit cover. No FK constraint: photos already reference albums.
    cover_id: Optional[str] = Field(default=None, index=True)
    lft: int = Field(index=True)
    rgt: int = Field(index=True)
    is_nsfw: bool = Field(default=False)
    is_public: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Albums always come with their explicit cover so resolving it never
    # needs a query of its own.
    cover: Optional["Photo"] = Relationship(
        sa_relationship_kwargs={
            "primaryjoin": "foreign(Album.cover_id) == Photo.id",
            "lazy": "selectin",
            "viewonly": True,
        }
    )


class AlbumShare(SQLModel, table=True):
    __tablename__ = "album_shares"

    id: Optional[int] = Field(default=None, primary_key=True)
    album_id: str = Field(foreign_key="albums.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
