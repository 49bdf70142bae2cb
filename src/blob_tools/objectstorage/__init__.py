"""Object storage bindings for S3-compatible services and Azure Blob Storage."""

from .azure_store import AzureBlobStore
from .clients import (
    AzureClientConfig,
    AzureClientManager,
    S3ClientConfig,
    S3ClientManager,
)
from .s3_store import S3BlobStore
from .store import BlobStore, DeleteSnapshotsOption, SnapshotInfo

__all__ = [
    "AzureBlobStore",
    "AzureClientConfig",
    "AzureClientManager",
    "BlobStore",
    "DeleteSnapshotsOption",
    "S3BlobStore",
    "S3ClientConfig",
    "S3ClientManager",
    "SnapshotInfo",
]
