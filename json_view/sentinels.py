"""Marker for relations that exist but were never loaded."""

from typing import Any


class NotLoaded:
    """A relation that was not fetched from the record source.

    Data layers put an instance of this class in a relationship field instead
    of the related record(s). Rendering treats it as absent.
    """

    __slots__ = ("field", "owner")

    def __init__(self, field: str | None = None, owner: Any = None):
        self.field = field
        self.owner = owner

    def __repr__(self) -> str:
        if self.field is None:
            return "NOT_LOADED"
        return f"<NotLoaded {self.field!r}>"

    def __bool__(self) -> bool:
        return False


NOT_LOADED = NotLoaded()
