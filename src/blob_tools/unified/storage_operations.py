"""Unified blob operations that work across S3 and Azure Blob Storage.

Every function takes a storage path (``s3://bucket/key`` or
``az://container/blob``) and a storage configuration, builds the matching
store, and delegates. Listings go through the segmented lister so page size,
cancellation and partial-failure reporting behave the same on both services.
"""

from itertools import islice
from typing import Iterator, Optional

from blob_tools.core import get_logger, settings
from blob_tools.core.exceptions import ValidationError
from blob_tools.listing import CancellationToken, Item, list_all
from blob_tools.objectstorage import (
    AzureBlobStore,
    AzureClientConfig,
    AzureClientManager,
    BlobStore,
    DeleteSnapshotsOption,
    S3BlobStore,
    S3ClientConfig,
    S3ClientManager,
    SnapshotInfo,
)
from blob_tools.schemas import AzureStorageConfig, S3StorageConfig, StorageConfig

logger = get_logger(__name__)

# Resource name used when listing containers, which are account-wide
ACCOUNT_RESOURCE = "*"


def create_store(config: StorageConfig) -> BlobStore:
    """Build the blob store matching a storage configuration.

    Raises:
        ValidationError: If the configuration type is not supported
    """
    if isinstance(config, S3StorageConfig):
        return S3BlobStore(
            S3ClientConfig(
                access_key_id=config.access_key_id,
                secret_access_key=config.secret_access_key,
                session_token=config.session_token,
                region_name=config.region_name or "us-east-1",
                endpoint_url=config.endpoint_url,
                aws_profile=config.aws_profile,
            )
        )
    elif isinstance(config, AzureStorageConfig):
        return AzureBlobStore(
            AzureClientConfig(
                connection_string=config.connection_string,
                connection_string_file=config.connection_string_file,
            )
        )
    else:
        raise ValidationError(f"Unsupported storage configuration: {config!r}")


def parse_path(path: str, config: StorageConfig) -> tuple[str, str]:
    """Split a storage path into container and blob name (or prefix)."""
    if isinstance(config, S3StorageConfig):
        return S3ClientManager.parse_s3_path(path)
    return AzureClientManager.parse_azure_path(path)


def _page_size(page_size: Optional[int]) -> int:
    return settings.default_page_size if page_size is None else page_size


def iter_snapshots(
    store: BlobStore,
    container: str,
    name: str,
    page_size: int,
    cancellation: Optional[CancellationToken] = None,
) -> Iterator[SnapshotInfo]:
    """Yield the snapshots of exactly one blob.

    Snapshots of other blobs whose names merely start with ``name`` are skipped.
    """
    for item in list_all(
        store.list_snapshots_page,
        container,
        name,
        page_size,
        cancellation=cancellation,
    ):
        if item.name != name:
            continue
        yield SnapshotInfo(
            name=item.name,
            snapshot_id=item.metadata["snapshot"],
            taken_at=item.metadata.get("taken_at"),
        )


def list_containers(
    config: StorageConfig,
    prefix: str = "",
    page_size: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
) -> list[Item]:
    """List containers (buckets) whose names start with ``prefix``.

    Returns:
        Containers in service order, with their metadata
    """
    logger.info("Listing containers", storage_type=config.type, prefix=prefix)

    store = create_store(config)
    containers = list(
        list_all(
            store.list_containers_page,
            ACCOUNT_RESOURCE,
            prefix,
            _page_size(page_size),
            cancellation=cancellation,
        )
    )

    logger.info("Containers listed", container_count=len(containers))
    return containers


def list_blobs(
    path: str,
    config: StorageConfig,
    page_size: Optional[int] = None,
    max_items: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
) -> list[Item]:
    """List blobs under a container/prefix path.

    Args:
        path: Storage path, e.g. az://container/prefix
        config: Storage configuration
        page_size: Items requested per page (settings default when omitted)
        max_items: Stop after this many items; no further pages are fetched
        cancellation: Token checked before each page fetch

    Returns:
        Blobs in service order

    Raises:
        ValidationError: If the path does not match the storage type
        InvalidArgumentError: If page_size is not positive
        RemoteListingError: If a page fetch fails
        CancelledError: If the listing is cancelled
    """
    container, prefix = parse_path(path, config)
    logger.info(
        "Listing blobs",
        storage_type=config.type,
        container=container,
        prefix=prefix,
    )

    store = create_store(config)
    items = list_all(
        store.list_blobs_page,
        container,
        prefix,
        _page_size(page_size),
        cancellation=cancellation,
    )
    if max_items is not None:
        items = islice(items, max_items)

    blobs = list(items)
    logger.info("Blobs listed", container=container, blob_count=len(blobs))
    return blobs


def list_snapshots(
    path: str,
    config: StorageConfig,
    page_size: Optional[int] = None,
) -> list[SnapshotInfo]:
    """List the snapshots of the blob at ``path``."""
    container, name = parse_path(path, config)
    if not name:
        raise ValidationError(f"Path must name a blob: {path}")

    store = create_store(config)
    snapshots = list(iter_snapshots(store, container, name, _page_size(page_size)))

    logger.info(
        "Snapshots listed",
        container=container,
        name=name,
        snapshot_count=len(snapshots),
    )
    return snapshots


def _blob_target(path: str, config: StorageConfig) -> tuple[BlobStore, str, str]:
    container, name = parse_path(path, config)
    if not name:
        raise ValidationError(f"Path must name a blob: {path}")
    return create_store(config), container, name


def blob_exists(path: str, config: StorageConfig) -> bool:
    """Check whether the blob at ``path`` exists."""
    store, container, name = _blob_target(path, config)
    return store.blob_exists(container, name)


def upload_file(
    path: str, local_path: str, config: StorageConfig, overwrite: bool = True
) -> None:
    """Upload a local file to the blob at ``path``."""
    store, container, name = _blob_target(path, config)
    store.upload_file(container, name, local_path, overwrite=overwrite)


def download_file(path: str, local_path: str, config: StorageConfig) -> None:
    """Download the blob at ``path`` to a local file."""
    store, container, name = _blob_target(path, config)
    store.download_file(container, name, local_path)


def create_snapshot(path: str, config: StorageConfig) -> SnapshotInfo:
    """Take a snapshot of the blob at ``path``."""
    store, container, name = _blob_target(path, config)
    return store.create_snapshot(container, name)


def restore_snapshot(path: str, snapshot_id: str, config: StorageConfig) -> None:
    """Copy a snapshot back over the blob at ``path``."""
    store, container, name = _blob_target(path, config)
    store.restore_snapshot(container, name, snapshot_id)


def delete_blob(
    path: str,
    config: StorageConfig,
    option: str = "none",
) -> bool:
    """Delete the blob at ``path`` if it exists.

    Args:
        path: Storage path of the blob
        config: Storage configuration
        option: "none", "include" (blob and snapshots) or "only" (snapshots only)

    Returns:
        True if anything was deleted

    Raises:
        ValidationError: If option or path is invalid
    """
    try:
        snapshots_option = DeleteSnapshotsOption(option)
    except ValueError:
        raise ValidationError(
            f"option must be 'none', 'include' or 'only', got: {option}"
        )

    store, container, name = _blob_target(path, config)
    return store.delete_blob(container, name, snapshots_option)
