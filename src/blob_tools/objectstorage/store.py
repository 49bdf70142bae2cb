"""Common contract for blob stores."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from blob_tools.listing import ListingRequest, Page


class DeleteSnapshotsOption(str, Enum):
    """What to remove when deleting a blob that may have snapshots."""

    none = "none"
    include_snapshots = "include"
    snapshots_only = "only"


@dataclass(frozen=True)
class SnapshotInfo:
    """A point-in-time copy of a blob.

    Attributes:
        name: Name of the base blob
        snapshot_id: Azure snapshot timestamp or S3 version id
        taken_at: When the snapshot was taken, if the service reports it
    """

    name: str
    snapshot_id: str
    taken_at: Optional[datetime] = None


class BlobStore(Protocol):
    """Protocol for stores exposing paging primitives and blob operations."""

    def list_containers_page(self, request: ListingRequest) -> Page:
        """Fetch one page of containers whose names start with request.prefix."""
        ...

    def list_blobs_page(self, request: ListingRequest) -> Page:
        """Fetch one page of the flat blob listing of container request.resource."""
        ...

    def list_snapshots_page(self, request: ListingRequest) -> Page:
        """Fetch one page of snapshots of blobs under request.prefix."""
        ...

    def blob_exists(self, container: str, name: str) -> bool:
        """Check whether a blob exists."""
        ...

    def upload_file(
        self, container: str, name: str, local_path: str, overwrite: bool = True
    ) -> None:
        """Upload a local file to a blob."""
        ...

    def download_file(self, container: str, name: str, local_path: str) -> None:
        """Download a blob to a local file."""
        ...

    def create_snapshot(self, container: str, name: str) -> SnapshotInfo:
        """Take a snapshot of a blob."""
        ...

    def restore_snapshot(self, container: str, name: str, snapshot_id: str) -> None:
        """Copy a snapshot over its base blob."""
        ...

    def delete_blob(
        self,
        container: str,
        name: str,
        option: DeleteSnapshotsOption = DeleteSnapshotsOption.none,
    ) -> bool:
        """Delete a blob if it exists, returning whether anything was removed."""
        ...
