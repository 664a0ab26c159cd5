"""Nested-set tree ranges."""

from dataclasses import dataclass

from covernest.exceptions import InvalidTreeRangeError
from covernest.models.album import Album


@dataclass(frozen=True)
class TreeRange:
    """Left/right bounds of an album in the nested-set tree.

    A range contains another iff it encloses it, inclusively, so every
    range contains itself.
    """

    left: int
    right: int

    def __post_init__(self) -> None:
        if self.left >= self.right:
            raise InvalidTreeRangeError(self.left, self.right)

    @classmethod
    def of(cls, album: Album) -> "TreeRange":
        return cls(album.lft, album.rgt)

    def contains(self, other: "TreeRange") -> bool:
        return self.left <= other.left and other.right <= self.right

    def is_descendant_of(self, other: "TreeRange") -> bool:
        return other.contains(self)

    def as_bounds(self) -> tuple[int, int]:
        return self.left, self.right
