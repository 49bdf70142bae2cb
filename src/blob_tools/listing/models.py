"""Data model for segmented listings: cursors, items, pages and requests."""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Absent:
    """Cursor state meaning no further pages remain."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Present:
    """Cursor holding the service's opaque continuation token.

    The token is never inspected; it is forwarded verbatim on the next request.
    """

    token: Any

    def __bool__(self) -> bool:
        return True


Cursor = Union[Absent, Present]

ABSENT = Absent()


def cursor_from_token(token: Any) -> Cursor:
    """Wrap a nullable SDK continuation token in a Cursor."""
    if token is None or token == "":
        return ABSENT
    return Present(token)


@dataclass(frozen=True)
class Item:
    """A listed entry: its name plus optional service metadata.

    Attributes:
        name: Container or blob name
        metadata: Key/value details reported by the service (size, snapshot id, ...)
    """

    name: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Page:
    """One bounded batch of listing results."""

    items: tuple[Item, ...] = ()
    cursor: Cursor = ABSENT

    @property
    def has_more(self) -> bool:
        return isinstance(self.cursor, Present)


@dataclass(frozen=True)
class ListingRequest:
    """Arguments for a single page fetch.

    Attributes:
        resource: Container (or other listing scope) identifier
        prefix: Name prefix filter; empty means unfiltered
        page_size: Maximum number of items the service should return
        cursor: Cursor from the previous page, ABSENT on the first call
    """

    resource: str
    prefix: str = ""
    page_size: int = 1000
    cursor: Cursor = ABSENT


def cursor_token(cursor: Cursor) -> Any:
    """Unwrap a Cursor into the nullable token an SDK expects."""
    if isinstance(cursor, Present):
        return cursor.token
    return None
