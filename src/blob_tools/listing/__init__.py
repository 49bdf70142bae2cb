"""Segmented listing over paged storage APIs."""

from .cancellation import CancellationToken
from .models import (
    ABSENT,
    Absent,
    Cursor,
    Item,
    ListingRequest,
    Page,
    Present,
    cursor_from_token,
    cursor_token,
)
from .segmented import PageFetcher, list_all, list_pages

__all__ = [
    "ABSENT",
    "Absent",
    "CancellationToken",
    "Cursor",
    "Item",
    "ListingRequest",
    "Page",
    "PageFetcher",
    "Present",
    "cursor_from_token",
    "cursor_token",
    "list_all",
    "list_pages",
]
