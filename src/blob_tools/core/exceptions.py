"""Exception hierarchy for blob-tools."""

from typing import Any, Optional


class BlobToolsError(Exception):
    """Base exception for all blob-tools errors."""

    pass


class ValidationError(BlobToolsError):
    """Raised when validation fails."""

    pass


class InvalidArgumentError(ValidationError):
    """Raised when a listing is requested with a bad resource or page size."""

    pass


class StorageOperationError(BlobToolsError):
    """Raised when a call to the storage service fails."""

    pass


class CancelledError(BlobToolsError):
    """Raised when the caller cancels a listing between page fetches."""

    pass


class RemoteListingError(BlobToolsError):
    """Raised when a page fetch fails part way through a listing.

    Attributes:
        items_emitted: Number of items yielded before the failure
        cursor: Cursor that was sent with the failed request; pass it as
            ``resume_from`` to retry from the same page
        cause: The underlying exception
    """

    def __init__(
        self,
        message: str,
        items_emitted: int,
        cursor: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.items_emitted = items_emitted
        self.cursor = cursor
        self.cause = cause
