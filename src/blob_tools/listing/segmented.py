"""Segmented listing: follow a continuation cursor until the service runs dry.

The lister is independent of any storage SDK. It drives an injected paging
primitive, a callable taking a ``ListingRequest`` and returning a ``Page``,
and forwards each page's cursor unchanged into the next request. Every store
in ``blob_tools.objectstorage`` exposes such primitives.

Example:
    >>> pages = iter([
    ...     Page((Item("a"), Item("b")), Present("t1")),
    ...     Page((Item("c"),), ABSENT),
    ... ])
    >>> [item.name for item in list_all(lambda request: next(pages), "demo", "", 2)]
    ['a', 'b', 'c']
"""

from typing import Iterator, Optional, Protocol

from blob_tools.core import get_logger, get_tracer
from blob_tools.core.exceptions import (
    CancelledError,
    InvalidArgumentError,
    RemoteListingError,
)

from .cancellation import CancellationToken
from .models import ABSENT, Absent, Cursor, Item, ListingRequest, Page, Present

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class PageFetcher(Protocol):
    """Paging primitive issuing one bounded listing request."""

    def __call__(self, request: ListingRequest) -> Page:
        """Fetch the page described by ``request``."""
        ...


def _validate(resource: str, page_size: int) -> None:
    if not isinstance(resource, str) or not resource:
        raise InvalidArgumentError("resource must be a non-empty string")
    # bool is an int subclass
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise InvalidArgumentError(
            f"page_size must be an integer, got: {type(page_size).__name__}"
        )
    if page_size <= 0:
        raise InvalidArgumentError(f"page_size must be positive, got: {page_size}")


def _check_cancelled(
    cancellation: Optional[CancellationToken], resource: str, items_emitted: int
) -> None:
    if cancellation is not None and cancellation.is_cancelled:
        logger.info(
            "Listing cancelled", resource=resource, items_emitted=items_emitted
        )
        raise CancelledError(
            f"Listing of '{resource}' cancelled after {items_emitted} items"
        )


def _iterate(
    fetch_page: PageFetcher,
    resource: str,
    prefix: str,
    page_size: int,
    cancellation: Optional[CancellationToken],
    resume_from: Cursor,
    counter: list[int],
) -> Iterator[Page]:
    cursor: Cursor = resume_from
    page_number = 0

    while True:
        _check_cancelled(cancellation, resource, counter[0])

        request = ListingRequest(
            resource=resource, prefix=prefix, page_size=page_size, cursor=cursor
        )
        page_number += 1

        with tracer.start_as_current_span("listing.fetch_page") as span:
            span.set_attribute("listing.resource", resource)
            span.set_attribute("listing.page_number", page_number)
            try:
                page = fetch_page(request)
            except CancelledError:
                raise
            except Exception as e:
                error_msg = (
                    f"Failed to fetch page {page_number} of '{resource}' "
                    f"after {counter[0]} items: {e}"
                )
                logger.error(error_msg, error=str(e))
                raise RemoteListingError(
                    error_msg, items_emitted=counter[0], cursor=cursor, cause=e
                ) from e

        if not isinstance(page.cursor, (Absent, Present)):
            raise TypeError(
                f"Page {page_number} of '{resource}' returned cursor "
                f"{page.cursor!r}; expected Absent or Present"
            )

        logger.debug(
            "Listing page fetched",
            resource=resource,
            page_number=page_number,
            item_count=len(page.items),
            has_more=page.has_more,
        )

        yield page

        if not isinstance(page.cursor, Present):
            logger.info(
                "Listing completed",
                resource=resource,
                prefix=prefix,
                pages=page_number,
                item_count=counter[0],
            )
            return
        cursor = page.cursor


def list_pages(
    fetch_page: PageFetcher,
    resource: str,
    prefix: str = "",
    page_size: int = 1000,
    *,
    cancellation: Optional[CancellationToken] = None,
    resume_from: Cursor = ABSENT,
) -> Iterator[Page]:
    """Lazily yield every page of a listing, in the order received.

    Arguments are validated immediately; no request is issued until the
    returned iterator is advanced.

    Args:
        fetch_page: Paging primitive to call for each page
        resource: Container or listing scope identifier
        prefix: Name prefix filter, empty for none
        page_size: Maximum items per request
        cancellation: Token checked before every page fetch
        resume_from: Cursor to start from instead of the first page

    Returns:
        Iterator over pages

    Raises:
        InvalidArgumentError: If resource is empty or page_size is not positive
    """
    _validate(resource, page_size)
    counter = [0]

    def pages() -> Iterator[Page]:
        for page in _iterate(
            fetch_page, resource, prefix, page_size, cancellation, resume_from, counter
        ):
            counter[0] += len(page.items)
            yield page

    return pages()


def list_all(
    fetch_page: PageFetcher,
    resource: str,
    prefix: str = "",
    page_size: int = 1000,
    *,
    cancellation: Optional[CancellationToken] = None,
    resume_from: Cursor = ABSENT,
) -> Iterator[Item]:
    """Lazily yield every item of a segmented listing.

    Items come out in the order the service returned them, page after page.
    The lister performs no retries; a failed fetch ends the sequence.

    Args:
        fetch_page: Paging primitive to call for each page
        resource: Container or listing scope identifier
        prefix: Name prefix filter, empty for none
        page_size: Maximum items per request
        cancellation: Token checked before every page fetch
        resume_from: Cursor to start from, e.g. ``RemoteListingError.cursor``

    Returns:
        Iterator over items

    Raises:
        InvalidArgumentError: If resource is empty or page_size is not positive
        RemoteListingError: If a page fetch fails (raised during iteration)
        CancelledError: If the token is cancelled (raised during iteration)
    """
    _validate(resource, page_size)
    counter = [0]

    def items() -> Iterator[Item]:
        for page in _iterate(
            fetch_page, resource, prefix, page_size, cancellation, resume_from, counter
        ):
            for item in page.items:
                counter[0] += 1
                yield item

    return items()
