"""Exceptions raised by cover resolution.

An album without a cover, or an album the viewer may not see, is not an
error: both resolve to ``None``. The exceptions below signal corrupted input
(broken tree bounds, inconsistent query results) and are always propagated.
"""


class CoverNestError(Exception):
    """Base exception for the application."""
    pass


class InvariantViolation(CoverNestError):
    """Input data breaks an invariant the resolver relies on."""
    pass


class InvalidTreeRangeError(InvariantViolation):
    """Raised when nested-set bounds do not satisfy ``left < right``."""

    def __init__(self, left: int, right: int):
        super().__init__(f"invalid tree range: left={left} must be less than right={right}")
        self.left = left
        self.right = right


class CoverMatchError(InvariantViolation):
    """Raised when batch results cannot be matched back to the requested albums."""
    pass


class CoverNotLoadedError(InvariantViolation):
    """Raised when an album pins a cover whose photo was not loaded with it."""

    def __init__(self, album_id: str, cover_id: str):
        super().__init__(f"album {album_id} pins cover {cover_id} but the photo is not loaded")
        self.album_id = album_id
        self.cover_id = cover_id
