"""Photo model."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Photo(SQLModel, table=True):
    __tablename__ = "photos"

    id: str = Field(default_factory=lambda: f"pho_{secrets.token_hex(4)}", primary_key=True)
    album_id: Optional[str] = Field(default=None, foreign_key="albums.id", index=True)  # NULL = unsorted
    owner_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True)
    title: str = ""
    type: str = Field(default="image/jpeg")  # mime type
    is_starred: bool = Field(default=False, index=True)
    taken_at: Optional[datetime] = Field(default=None, index=True)
    thumb_path: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
