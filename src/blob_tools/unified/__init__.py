"""Unified blob operations across S3 and Azure Blob Storage."""

from .storage_operations import (
    blob_exists,
    create_snapshot,
    create_store,
    delete_blob,
    download_file,
    list_blobs,
    list_containers,
    list_snapshots,
    restore_snapshot,
    upload_file,
)
from .walkthrough import WalkthroughReport, run_walkthrough

__all__ = [
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
