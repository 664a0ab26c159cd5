"""Album cover ("thumb") resolution.

The cover of an album is either the photo pinned through ``cover_id`` or,
without a pin, the best ranked photo the viewer may see anywhere below the
album in the nested-set tree. Ranking is starred-first, then the configured
sorting criterion.

``resolve_many`` resolves a whole list of albums with a single grouped query
instead of one query per album: the candidate photos of every album are
ranked within their group with ``row_number()`` and only the first row of
each group is kept.
"""

import logging
from typing import Callable, Iterable, Optional

from sqlalchemy import and_
from sqlalchemy.orm import aliased
from sqlmodel import Session, col, func, select

from covernest.exceptions import CoverMatchError, CoverNotLoadedError
from covernest.models.album import Album
from covernest.models.photo import Photo
from covernest.models.user import User
from covernest.schemas.thumb import Thumb
from covernest.services.access_policy import AccessFilter, AlbumAccessPolicy, is_admin
from covernest.services.sorting import PhotoSortingCriterion
from covernest.services.tree import TreeRange

logger = logging.getLogger(__name__)

ThumbFactory = Callable[[Photo], Thumb]


class AlbumThumbResolver:
    """Resolves album covers for a viewer.

    Policy, sorting and thumb factory are fixed for the lifetime of the
    resolver; the viewer and the NSFW flag are passed per call.
    """

    def __init__(
        self,
        session: Session,
        access_filter: Optional[AccessFilter] = None,
        sorting: Optional[PhotoSortingCriterion] = None,
        thumb_factory: ThumbFactory = Thumb.from_photo,
    ):
        self.session = session
        self.access_filter = access_filter or AlbumAccessPolicy()
        self.sorting = sorting or PhotoSortingCriterion.create_default()
        self.thumb_factory = thumb_factory

    # --- Single album ---

    def resolve_one(
        self,
        album: Album,
        viewer: Optional[User],
        include_nsfw: Optional[bool] = None,
        sorting: Optional[PhotoSortingCriterion] = None,
    ) -> Optional[Thumb]:
        """Resolve the cover of one album, ``None`` if there is none.

        ``include_nsfw=None`` follows the album: NSFW sub-albums count for
        covers of NSFW albums only.
        """
        if not self.access_filter.can_access_album(self.session, viewer, album):
            return None

        if album.cover_id is not None:
            return self._explicit_thumb(album)

        if include_nsfw is None:
            include_nsfw = bool(album.is_nsfw)
        photo = self.best_photo(album, viewer, include_nsfw, sorting or self.sorting)
        return self.thumb_factory(photo) if photo is not None else None

    def best_photo(
        self,
        album: Album,
        viewer: Optional[User],
        include_nsfw: bool,
        sorting: PhotoSortingCriterion,
    ) -> Optional[Photo]:
        """Best ranked visible photo held by ``album`` or any album below it."""
        origin_lft, origin_rgt = TreeRange.of(album).as_bounds()
        holder = aliased(Album, name="holder_albums")

        query = (
            select(Photo)
            .join(holder, Photo.album_id == holder.id)
            .where(holder.lft >= origin_lft, holder.rgt <= origin_rgt)
        )
        if not is_admin(viewer):
            query = query.where(
                self.access_filter.searchability_condition(
                    viewer, origin_lft, origin_rgt, holder, include_nsfw
                )
            )
        query = query.order_by(*sorting.order_by_clauses()).limit(1)
        return self.session.exec(query).first()

    # --- Many albums ---

    def resolve_many(
        self,
        albums: Iterable[Album],
        viewer: Optional[User],
        include_nsfw: Optional[bool] = None,
        sorting: Optional[PhotoSortingCriterion] = None,
    ) -> dict[str, Optional[Thumb]]:
        """Resolve the covers of many albums at once.

        Returns a mapping from album id to thumb (``None`` if the album has
        no cover or the viewer may not see it). An album listed several
        times is resolved once. ``include_nsfw=None`` follows each album,
        exactly like ``resolve_one``.
        """
        albums = list(albums)
        explicit = [a for a in albums if a.cover_id is not None]
        implicit: dict[str, Album] = {}
        for album in albums:
            if album.cover_id is None and album.id not in implicit:
                TreeRange.of(album)  # raises on broken bounds
                implicit[album.id] = album

        accessible_explicit = self._accessible_ids(explicit, viewer)
        covers = self.best_photos(sorted(implicit), viewer, include_nsfw, sorting or self.sorting)

        results: dict[str, Optional[Thumb]] = {}
        for album in albums:
            if album.id in results:
                continue
            if album.cover_id is not None:
                results[album.id] = (
                    self._explicit_thumb(album) if album.id in accessible_explicit else None
                )
            elif album.id in covers:
                results[album.id] = self.thumb_factory(covers[album.id])
            else:
                results[album.id] = None

        logger.debug(
            "Resolved covers for %d album(s): %d explicit, %d implicit, %d found",
            len(results), len(explicit), len(implicit), len(covers),
        )
        return results

    def best_photos(
        self,
        album_ids: list[str],
        viewer: Optional[User],
        include_nsfw: Optional[bool],
        sorting: PhotoSortingCriterion,
    ) -> dict[str, Photo]:
        """Top-1 photo per album for ``album_ids`` in one query.

        ``include_nsfw=None`` decides per album from its own NSFW flag.

        Albums without a qualifying photo, and albums the viewer cannot
        access, are missing from the result.
        """
        if not album_ids:
            return {}

        covered = aliased(Album, name="covered_albums")
        holder = aliased(Album, name="holder_albums")
        cover_rank = (
            func.row_number()
            .over(partition_by=covered.id, order_by=sorting.order_by_clauses())
            .label("cover_rank")
        )
        ranked = (
            select(
                covered.id.label("covered_album_id"),
                Photo.id.label("photo_id"),
                cover_rank,
            )
            .select_from(covered)
            .join(holder, and_(holder.lft >= covered.lft, holder.rgt <= covered.rgt))
            .join(Photo, Photo.album_id == holder.id)
            .where(covered.id.in_(album_ids))
        )
        if not is_admin(viewer):
            nsfw_flag = covered.is_nsfw.is_(True) if include_nsfw is None else include_nsfw
            ranked = ranked.where(
                self.access_filter.album_accessibility_condition(viewer, covered),
                self.access_filter.searchability_condition(
                    viewer, covered.lft, covered.rgt, holder, nsfw_flag
                ),
            )
        ranked = ranked.subquery("ranked_covers")

        query = (
            select(Photo, ranked.c.covered_album_id)
            .join(ranked, Photo.id == ranked.c.photo_id)
            .where(ranked.c.cover_rank == 1)
        )

        requested = set(album_ids)
        dictionary: dict[str, Photo] = {}
        for photo, covered_album_id in self.session.exec(query).all():
            if covered_album_id not in requested:
                raise CoverMatchError(f"cover query returned unrequested album {covered_album_id}")
            if covered_album_id in dictionary:
                raise CoverMatchError(f"cover query returned several covers for album {covered_album_id}")
            dictionary[covered_album_id] = photo
        return dictionary

    # --- Helpers ---

    def _explicit_thumb(self, album: Album) -> Thumb:
        # Albums load their pinned cover eagerly, so no query here.
        if album.cover is None:
            logger.warning("Album %s pins missing cover photo %s", album.id, album.cover_id)
            raise CoverNotLoadedError(album.id, album.cover_id)
        return self.thumb_factory(album.cover)

    def _accessible_ids(self, albums: list[Album], viewer: Optional[User]) -> set[str]:
        """Ids among ``albums`` the viewer may access, in one query."""
        if not albums:
            return set()
        if is_admin(viewer):
            return {a.id for a in albums}
        ids = sorted({a.id for a in albums})
        rows = self.session.exec(
            select(Album.id).where(
                col(Album.id).in_(ids),
                self.access_filter.album_accessibility_condition(viewer, Album),
            )
        ).all()
        return set(rows)
