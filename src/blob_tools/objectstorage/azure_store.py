"""Azure Blob Storage bindings.

Listing methods are paging primitives for ``blob_tools.listing``: each issues
exactly one service request, driving the SDK's ``by_page`` iterator with the
continuation token carried by the request's cursor. The remaining methods are
direct pass-through calls to ``BlobClient``.
"""

from datetime import datetime, timezone
from typing import Optional

from azure.core.exceptions import ResourceNotFoundError

from blob_tools.core import get_logger
from blob_tools.core.exceptions import StorageOperationError, ValidationError
from blob_tools.listing import (
    Item,
    ListingRequest,
    Page,
    cursor_from_token,
    cursor_token,
)
from blob_tools.objectstorage.clients import AzureClientConfig, AzureClientManager

from .store import DeleteSnapshotsOption, SnapshotInfo

logger = get_logger(__name__)

_DELETE_SNAPSHOTS = {
    DeleteSnapshotsOption.none: None,
    DeleteSnapshotsOption.include_snapshots: "include",
    DeleteSnapshotsOption.snapshots_only: "only",
}


def parse_snapshot_time(snapshot: str) -> Optional[datetime]:
    """Parse an Azure snapshot id such as ``2024-05-01T10:20:30.1234567Z``."""
    stamp, _, fraction = snapshot.rstrip("Z").partition(".")
    try:
        taken_at = datetime.strptime(stamp, "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return None
    # Azure reports 100ns precision; datetime keeps microseconds
    microsecond = int((fraction + "000000")[:6]) if fraction.isdigit() else 0
    return taken_at.replace(microsecond=microsecond, tzinfo=timezone.utc)


class AzureBlobStore:
    """Blob store backed by an Azure storage account."""

    def __init__(self, config: AzureClientConfig):
        """Initialize Azure blob store.

        Args:
            config: Azure client configuration
        """
        self.client_manager = AzureClientManager(config)
        logger.info("Azure blob store initialized")

    def _container(self, container: str):
        return self.client_manager.client.get_container_client(container)

    def _fail(
        self, action: str, target: str, error: Exception
    ) -> StorageOperationError:
        error_msg = f"Failed to {action} '{target}': {error}"
        logger.error(error_msg, error=str(error))
        return StorageOperationError(error_msg)

    # Paging primitives

    def list_containers_page(self, request: ListingRequest) -> Page:
        pager = self.client_manager.client.list_containers(
            name_starts_with=request.prefix or None,
            include_metadata=True,
            results_per_page=request.page_size,
        ).by_page(continuation_token=cursor_token(request.cursor))

        items = tuple(
            Item(name=container.name, metadata=dict(container.metadata or {}))
            for container in next(pager, [])
        )
        return Page(items=items, cursor=cursor_from_token(pager.continuation_token))

    def list_blobs_page(self, request: ListingRequest) -> Page:
        pager = (
            self._container(request.resource)
            .list_blobs(
                name_starts_with=request.prefix or None,
                results_per_page=request.page_size,
            )
            .by_page(continuation_token=cursor_token(request.cursor))
        )

        items = tuple(
            Item(
                name=blob.name,
                metadata={
                    "size": blob.size,
                    "last_modified": blob.last_modified,
                    "etag": blob.etag,
                },
            )
            for blob in next(pager, [])
        )
        return Page(items=items, cursor=cursor_from_token(pager.continuation_token))

    def list_snapshots_page(self, request: ListingRequest) -> Page:
        pager = (
            self._container(request.resource)
            .list_blobs(
                name_starts_with=request.prefix or None,
                include=["snapshots"],
                results_per_page=request.page_size,
            )
            .by_page(continuation_token=cursor_token(request.cursor))
        )

        # Base blobs come back alongside their snapshots
        items = tuple(
            Item(
                name=blob.name,
                metadata={
                    "snapshot": blob.snapshot,
                    "taken_at": parse_snapshot_time(blob.snapshot),
                },
            )
            for blob in next(pager, [])
            if blob.snapshot
        )
        return Page(items=items, cursor=cursor_from_token(pager.continuation_token))

    # Blob operations

    def blob_exists(self, container: str, name: str) -> bool:
        try:
            exists = self._container(container).get_blob_client(name).exists()
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("check existence of", f"{container}/{name}", e)

        logger.debug(
            "Blob existence checked", container=container, name=name, exists=exists
        )
        return exists

    def upload_file(
        self, container: str, name: str, local_path: str, overwrite: bool = True
    ) -> None:
        logger.info(
            "Uploading blob", container=container, name=name, local_path=local_path
        )

        try:
            blob_client = self._container(container).get_blob_client(name)
            with open(local_path, "rb") as data:
                blob_client.upload_blob(data, overwrite=overwrite)
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("upload", f"{container}/{name}", e)

        logger.info("Blob uploaded", container=container, name=name)

    def download_file(self, container: str, name: str, local_path: str) -> None:
        logger.info(
            "Downloading blob", container=container, name=name, local_path=local_path
        )

        try:
            blob_client = self._container(container).get_blob_client(name)
            with open(local_path, "wb") as handle:
                blob_client.download_blob().readinto(handle)
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("download", f"{container}/{name}", e)

        logger.info("Blob downloaded", container=container, name=name)

    def create_snapshot(self, container: str, name: str) -> SnapshotInfo:
        try:
            result = self._container(container).get_blob_client(name).create_snapshot()
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("snapshot", f"{container}/{name}", e)

        snapshot_id = result["snapshot"]
        logger.info(
            "Snapshot created", container=container, name=name, snapshot=snapshot_id
        )
        return SnapshotInfo(
            name=name,
            snapshot_id=snapshot_id,
            taken_at=parse_snapshot_time(snapshot_id),
        )

    def restore_snapshot(self, container: str, name: str, snapshot_id: str) -> None:
        logger.info(
            "Restoring snapshot", container=container, name=name, snapshot=snapshot_id
        )

        try:
            container_client = self._container(container)
            source = container_client.get_blob_client(name, snapshot=snapshot_id)
            container_client.get_blob_client(name).start_copy_from_url(source.url)
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("restore snapshot of", f"{container}/{name}", e)

        logger.info("Snapshot copy started", container=container, name=name)

    def delete_blob(
        self,
        container: str,
        name: str,
        option: DeleteSnapshotsOption = DeleteSnapshotsOption.none,
    ) -> bool:
        option = DeleteSnapshotsOption(option)
        logger.info(
            "Deleting blob", container=container, name=name, option=option.value
        )

        try:
            self._container(container).get_blob_client(name).delete_blob(
                delete_snapshots=_DELETE_SNAPSHOTS[option]
            )
        except ResourceNotFoundError:
            logger.info(
                "Blob not found, nothing deleted", container=container, name=name
            )
            return False
        except ValidationError:
            raise
        except Exception as e:
            raise self._fail("delete", f"{container}/{name}", e)

        logger.info("Blob deleted", container=container, name=name, option=option.value)
        return True
