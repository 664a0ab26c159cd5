"""Album access policy: who may see which albums and which photos below them.

The resolver only talks to the ``AccessFilter`` protocol, so tests and other
deployments can plug in a different policy.
"""

from typing import Any, Optional, Protocol

from sqlalchemy import and_, not_, or_
from sqlalchemy.orm import aliased
from sqlmodel import Session, select

from covernest.models.album import Album, AlbumShare
from covernest.models.user import User


def is_admin(viewer: Optional[User]) -> bool:
    return viewer is not None and bool(viewer.may_administrate)


class AccessFilter(Protocol):
    def can_access_album(self, session: Session, viewer: Optional[User], album: Album) -> bool:
        ...

    def album_accessibility_condition(self, viewer: Optional[User], album: Any) -> Any:
        ...

    def searchability_condition(
        self,
        viewer: Optional[User],
        origin_lft: Any,
        origin_rgt: Any,
        holder: Any,
        include_nsfw: Any,
    ) -> Any:
        ...


class AlbumAccessPolicy:
    """Ownership/public/share based access.

    An album is accessible if the viewer administrates, owns it, it is public
    or it has been shared with the viewer. Anonymous viewers only see public
    albums.
    """

    def can_access_album(self, session: Session, viewer: Optional[User], album: Album) -> bool:
        if is_admin(viewer) or album.is_public:
            return True
        if viewer is None:
            return False
        if album.owner_id == viewer.id:
            return True
        share = session.exec(
            select(AlbumShare.id).where(
                AlbumShare.album_id == album.id,
                AlbumShare.user_id == viewer.id,
            )
        ).first()
        return share is not None

    def album_accessibility_condition(self, viewer: Optional[User], album: Any) -> Any:
        """SQL predicate on ``album`` (the class or an alias of it)."""
        if is_admin(viewer):
            return album.id.is_not(None)
        if viewer is None:
            return album.is_public.is_(True)
        shared = (
            select(AlbumShare.id)
            .where(AlbumShare.album_id == album.id, AlbumShare.user_id == viewer.id)
            .exists()
        )
        return or_(
            album.is_public.is_(True),
            album.owner_id == viewer.id,
            shared,
        )

    def searchability_condition(
        self,
        viewer: Optional[User],
        origin_lft: Any,
        origin_rgt: Any,
        holder: Any,
        include_nsfw: Any,
    ) -> Any:
        """SQL predicate deciding whether photos held by ``holder`` count
        for the covering album bounded by ``origin_lft``/``origin_rgt``.

        The bounds are either plain ints or columns of an outer album alias,
        which makes the predicate usable for a single album and for the
        grouped batch query alike. ``include_nsfw`` likewise is a bool or a
        boolean column, e.g. the covering album's own ``is_nsfw``.

        A photo is hidden if any album on the path from the covering album
        down to the photo's album is inaccessible, or, unless NSFW content is
        included, is flagged NSFW. The covering album's own NSFW flag does
        not hide anything: whoever looks at an NSFW album already sees it.
        """
        blocker = aliased(Album, name="blocking_albums")
        on_path = and_(
            blocker.lft >= origin_lft,
            blocker.lft <= holder.lft,
            blocker.rgt >= holder.rgt,
            blocker.rgt <= origin_rgt,
        )
        reasons = [not_(self.album_accessibility_condition(viewer, blocker))]
        nsfw_below = and_(blocker.is_nsfw.is_(True), blocker.lft > origin_lft)
        if not isinstance(include_nsfw, bool):
            reasons.append(and_(not_(include_nsfw), nsfw_below))
        elif not include_nsfw:
            reasons.append(nsfw_below)
        return not_(select(blocker.id).where(on_path, or_(*reasons)).exists())
