"""Common API dependencies: viewer extraction, resolver construction."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from covernest.database import get_session
from covernest.models.user import User
from covernest.services.cover_service import AlbumThumbResolver
from covernest.services.sorting import PhotoSortingCriterion


def get_viewer(
    x_user_id: Optional[str] = Header(default=None),
    session: Session = Depends(get_session),
) -> Optional[User]:
    """Viewer named by the upstream proxy; no header means anonymous."""
    if x_user_id is None:
        return None
    user = session.get(User, x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_resolver(session: Session = Depends(get_session)) -> AlbumThumbResolver:
    return AlbumThumbResolver(session, sorting=PhotoSortingCriterion.from_settings())
