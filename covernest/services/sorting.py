"""Ranking of candidate cover photos."""

from dataclasses import dataclass
from enum import Enum

from sqlmodel import col

from covernest.config import settings
from covernest.models.photo import Photo


class ColumnSortingPhotoType(str, Enum):
    CREATED_AT = "created_at"
    TAKEN_AT = "taken_at"
    TITLE = "title"
    TYPE = "type"
    ID = "id"


class OrderSortingType(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PhotoSortingCriterion:
    column: ColumnSortingPhotoType = ColumnSortingPhotoType.CREATED_AT
    order: OrderSortingType = OrderSortingType.DESC

    @classmethod
    def create_default(cls) -> "PhotoSortingCriterion":
        """Newest first."""
        return cls(ColumnSortingPhotoType.CREATED_AT, OrderSortingType.DESC)

    @classmethod
    def from_settings(cls) -> "PhotoSortingCriterion":
        return cls(
            ColumnSortingPhotoType(settings.photo_sorting_column.lower()),
            OrderSortingType(settings.photo_sorting_order.lower()),
        )

    def order_by_clauses(self, photo=Photo) -> list:
        """ORDER BY clauses ranking photos for cover selection.

        Starred photos always come first; the configured column only breaks
        ties among photos with the same starred flag. The photo id closes
        the order so equal rows are ranked the same way on every call.

        ``photo`` may be the ``Photo`` class or an alias of it.
        """
        column = col(getattr(photo, self.column.value))
        clauses = [
            col(photo.is_starred).desc(),
            column.asc() if self.order == OrderSortingType.ASC else column.desc(),
        ]
        if self.column != ColumnSortingPhotoType.ID:
            clauses.append(col(photo.id).asc())
        return clauses
