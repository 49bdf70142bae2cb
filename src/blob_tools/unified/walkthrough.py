"""End-to-end tour of a blob store.

Runs the classic blob storage walkthrough against any store: list
containers, page through a container, upload and download a test file,
snapshot it, overwrite it, list and restore snapshots, then clean up with
both delete-snapshot options.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from blob_tools.core import get_logger
from blob_tools.listing import CancellationToken, list_all, list_pages
from blob_tools.objectstorage import BlobStore, DeleteSnapshotsOption, SnapshotInfo

from .storage_operations import ACCOUNT_RESOURCE, iter_snapshots

logger = get_logger(__name__)

ORIGINAL_CONTENT = "test content"
MODIFIED_CONTENT = "test content modified"


@dataclass
class WalkthroughReport:
    """What the walkthrough observed and changed."""

    containers: list[str] = field(default_factory=list)
    blobs: list[str] = field(default_factory=list)
    blob_page_sizes: list[int] = field(default_factory=list)
    uploaded: bool = False
    downloaded_path: Optional[str] = None
    snapshot: Optional[SnapshotInfo] = None
    snapshots: list[SnapshotInfo] = field(default_factory=list)
    restored_snapshot: Optional[str] = None
    deleted_with_snapshots: bool = False
    deleted_snapshots_only: bool = False


def run_walkthrough(
    store: BlobStore,
    container: str,
    work_dir: str,
    blob_name: str = "test-file.txt",
    container_prefix: str = "",
    page_size: int = 3,
    cancellation: Optional[CancellationToken] = None,
) -> WalkthroughReport:
    """Run the walkthrough against ``container`` using files under ``work_dir``.

    The test file is only uploaded (and downloaded back) when the blob does
    not exist yet. The first snapshot listed is the one restored.
    """
    report = WalkthroughReport()
    work = Path(work_dir)
    work.mkdir(parents=True, exist_ok=True)

    for item in list_all(
        store.list_containers_page,
        ACCOUNT_RESOURCE,
        container_prefix,
        page_size,
        cancellation=cancellation,
    ):
        logger.info("Container found", container=item.name, metadata=item.metadata)
        report.containers.append(item.name)

    for page in list_pages(
        store.list_blobs_page, container, "", page_size, cancellation=cancellation
    ):
        report.blob_page_sizes.append(len(page.items))
        for item in page.items:
            logger.info("Blob found", container=container, name=item.name)
            report.blobs.append(item.name)

    if not store.blob_exists(container, blob_name):
        local_file = work / blob_name
        local_file.write_text(ORIGINAL_CONTENT)
        store.upload_file(container, blob_name, str(local_file))
        report.uploaded = True

        downloaded = work / f"{local_file.stem}-downloaded{local_file.suffix}"
        store.download_file(container, blob_name, str(downloaded))
        report.downloaded_path = str(downloaded)

    report.snapshot = store.create_snapshot(container, blob_name)

    modified = work / f"{Path(blob_name).stem}-modified{Path(blob_name).suffix}"
    modified.write_text(MODIFIED_CONTENT)
    store.upload_file(container, blob_name, str(modified))

    report.snapshots = list(
        iter_snapshots(store, container, blob_name, page_size, cancellation)
    )
    for snapshot in report.snapshots:
        logger.info(
            "Snapshot found",
            name=snapshot.name,
            snapshot=snapshot.snapshot_id,
            taken_at=snapshot.taken_at.isoformat() if snapshot.taken_at else None,
        )

    if report.snapshots:
        first = report.snapshots[0]
        store.restore_snapshot(container, blob_name, first.snapshot_id)
        report.restored_snapshot = first.snapshot_id
    else:
        logger.warning("No snapshot to restore", container=container, name=blob_name)

    report.deleted_with_snapshots = store.delete_blob(
        container, blob_name, DeleteSnapshotsOption.include_snapshots
    )
    report.deleted_snapshots_only = store.delete_blob(
        container, blob_name, DeleteSnapshotsOption.snapshots_only
    )

    logger.info(
        "Walkthrough completed",
        container=container,
        containers=len(report.containers),
        blobs=len(report.blobs),
        snapshots=len(report.snapshots),
    )
    return report
