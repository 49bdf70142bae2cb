"""Tools for paging through and managing cloud blob storage.

This package provides a segmented lister that follows opaque continuation
cursors over any paged listing API, together with S3 and Azure Blob Storage
bindings for listing, upload/download, snapshots and deletion.

Key Features:
    - Lazy segmented listing with cancellation and partial-failure reporting
    - Multi-backend support (S3-compatible, Azure Blob Storage)
    - Snapshot creation, listing and restore
    - CLI interface

Recommended Usage:
    Use the unified interface from this module for most operations:

    >>> from blob_tools import list_blobs, AzureStorageConfig
    >>> config = AzureStorageConfig(connection_string_file="secrets.txt")
    >>> blobs = list_blobs("az://demo/", config, page_size=3)

Advanced Usage:
    Drive the lister with your own paging primitive:

    >>> from blob_tools.listing import list_all
    >>> items = list_all(my_fetch_page, "resource", prefix="", page_size=100)
"""

__version__ = "0.1.0"

from .listing import (
    ABSENT,
    CancellationToken,
    Cursor,
    Item,
    ListingRequest,
    Page,
    Present,
    list_all,
    list_pages,
)
from .objectstorage import (
    AzureBlobStore,
    BlobStore,
    DeleteSnapshotsOption,
    S3BlobStore,
    SnapshotInfo,
)
from .schemas import AzureStorageConfig, S3StorageConfig, StorageConfig

# Unified interface (recommended)
from .unified import (
    WalkthroughReport,
    blob_exists,
    create_snapshot,
    create_store,
    delete_blob,
    download_file,
    list_blobs,
    list_containers,
    list_snapshots,
    restore_snapshot,
    run_walkthrough,
    upload_file,
)

__all__ = [
    # Segmented listing
    "ABSENT",
    "CancellationToken",
    "Cursor",
    "Item",
    "ListingRequest",
    "Page",
    "Present",
    "list_all",
    "list_pages",
    # Storage configurations
    "AzureStorageConfig",
    "S3StorageConfig",
    "StorageConfig",
    # Stores
    "AzureBlobStore",
    "BlobStore",
    "DeleteSnapshotsOption",
    "S3BlobStore",
    "SnapshotInfo",
    # Unified interface
    "WalkthroughReport",
    "blob_exists",
    "create_snapshot",
    "create_store",
    "delete_blob",
    "download_file",
    "list_blobs",
    "list_containers",
    "list_snapshots",
    "restore_snapshot",
    "run_walkthrough",
    "upload_file",
]
