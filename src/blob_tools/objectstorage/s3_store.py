"""S3 bindings for the blob store contract.

S3 has no blob snapshots, so they are modelled with object versioning: the
non-current versions of a key are its snapshots, and a snapshot id is a
version id. Snapshot operations therefore need bucket versioning enabled.
"""

from functools import partial
from typing import Any

from botocore.exceptions import ClientError

from blob_tools.core import get_logger
from blob_tools.core.exceptions import StorageOperationError, ValidationError
from blob_tools.listing import (
    Item,
    ListingRequest,
    Page,
    Present,
    cursor_from_token,
    cursor_token,
    list_all,
)
from blob_tools.objectstorage.clients import S3ClientConfig, S3ClientManager

from .store import DeleteSnapshotsOption, SnapshotInfo

logger = get_logger(__name__)

# delete_objects accepts at most 1000 keys per call
_DELETE_BATCH_SIZE = 1000
_NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


class S3BlobStore:
    """Blob store backed by an S3-compatible service."""

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 blob store.

        Args:
            config: S3 client configuration
        """
        self.client_manager = S3ClientManager(config)
        logger.info("S3 blob store initialized")

    def _fail(
        self, action: str, target: str, error: Exception
    ) -> StorageOperationError:
        error_msg = f"Failed to {action} '{target}': {error}"
        logger.error(error_msg, error=str(error))
        return StorageOperationError(error_msg)

    # Paging primitives

    def list_containers_page(self, request: ListingRequest) -> Page:
        """List one page of buckets.

        ListBuckets returns every bucket at once, so pages are cut client-side
        and the cursor is the offset of the next page.
        """
        response = self.client_manager.client.list_buckets()
        buckets = [
            bucket
            for bucket in response.get("Buckets", [])
            if bucket["Name"].startswith(request.prefix)
        ]

        start = cursor_token(request.cursor) or 0
        end = start + request.page_size
        items = tuple(
            Item(name=bucket["Name"], metadata={"created": bucket.get("CreationDate")})
            for bucket in buckets[start:end]
        )
        next_offset = end if end < len(buckets) else None
        return Page(items=items, cursor=cursor_from_token(next_offset))

    def list_blobs_page(self, request: ListingRequest) -> Page:
        kwargs: dict[str, Any] = {
            "Bucket": request.resource,
            "MaxKeys": request.page_size,
        }
        if request.prefix:
            kwargs["Prefix"] = request.prefix
        token = cursor_token(request.cursor)
        if token:
            kwargs["ContinuationToken"] = token

        response = self.client_manager.client.list_objects_v2(**kwargs)

        items = tuple(
            Item(
                name=obj["Key"],
                metadata={
                    "size": obj.get("Size"),
                    "last_modified": obj.get("LastModified"),
                    "etag": obj.get("ETag"),
                },
            )
            for obj in response.get("Contents", [])
        )
        next_token = None
        if response.get("IsTruncated"):
            next_token = response.get("NextContinuationToken")
        return Page(items=items, cursor=cursor_from_token(next_token))

    def list_versions_page(
        self, request: ListingRequest, include_latest: bool = True
    ) -> Page:
        """List one page of object versions.

        The cursor token is the (key marker, version id marker) pair.
        """
        kwargs: dict[str, Any] = {
            "Bucket": request.resource,
            "MaxKeys": request.page_size,
        }
        if request.prefix:
            kwargs["Prefix"] = request.prefix
        if isinstance(request.cursor, Present):
            key_marker, version_marker = request.cursor.token
            kwargs["KeyMarker"] = key_marker
            kwargs["VersionIdMarker"] = version_marker

        response = self.client_manager.client.list_object_versions(**kwargs)

        items = tuple(
            Item(
                name=version["Key"],
                metadata={
                    "snapshot": version["VersionId"],
                    "taken_at": version.get("LastModified"),
                    "is_latest": version.get("IsLatest", False),
                    "size": version.get("Size"),
                },
            )
            for version in response.get("Versions", [])
            if include_latest or not version.get("IsLatest", False)
        )

        next_token = None
        if response.get("IsTruncated"):
            next_token = (
                response.get("NextKeyMarker"),
                response.get("NextVersionIdMarker"),
            )
        return Page(items=items, cursor=cursor_from_token(next_token))

    def list_snapshots_page(self, request: ListingRequest) -> Page:
        return self.list_versions_page(request, include_latest=False)

    # Blob operations

    def blob_exists(self, container: str, name: str) -> bool:
        try:
            self.client_manager.client.head_object(Bucket=container, Key=name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES:
                logger.debug(
                    "Blob existence checked",
                    container=container,
                    name=name,
                    exists=False,
                )
                return False
            raise self._fail("check existence of", f"{container}/{name}", e)
        except Exception as e:
            raise self._fail("check existence of", f"{container}/{name}", e)

        logger.debug(
            "Blob existence checked", container=container, name=name, exists=True
        )
        return True

    def upload_file(
        self, container: str, name: str, local_path: str, overwrite: bool = True
    ) -> None:
        logger.info(
            "Uploading blob", container=container, name=name, local_path=local_path
        )

        if not overwrite and self.blob_exists(container, name):
            raise StorageOperationError(f"Blob already exists: '{container}/{name}'")

        try:
            self.client_manager.client.upload_file(local_path, container, name)
        except Exception as e:
            raise self._fail("upload", f"{container}/{name}", e)

        logger.info("Blob uploaded", container=container, name=name)

    def download_file(self, container: str, name: str, local_path: str) -> None:
        logger.info(
            "Downloading blob", container=container, name=name, local_path=local_path
        )

        try:
            self.client_manager.client.download_file(container, name, local_path)
        except Exception as e:
            raise self._fail("download", f"{container}/{name}", e)

        logger.info("Blob downloaded", container=container, name=name)

    def create_snapshot(self, container: str, name: str) -> SnapshotInfo:
        client = self.client_manager.client

        try:
            status = client.get_bucket_versioning(Bucket=container).get("Status")
        except Exception as e:
            raise self._fail("read versioning status of", container, e)

        if status != "Enabled":
            raise ValidationError(
                f"Snapshots need versioning enabled on bucket '{container}'"
            )

        try:
            head = client.head_object(Bucket=container, Key=name)
            snapshot_id = head.get("VersionId")
            # Objects written before versioning was enabled carry the null version
            if snapshot_id in (None, "null"):
                snapshot_id = self._mint_version(container, name, head)
        except Exception as e:
            raise self._fail("snapshot", f"{container}/{name}", e)

        logger.info(
            "Snapshot created", container=container, name=name, snapshot=snapshot_id
        )
        return SnapshotInfo(
            name=name, snapshot_id=snapshot_id, taken_at=head.get("LastModified")
        )

    def restore_snapshot(self, container: str, name: str, snapshot_id: str) -> None:
        logger.info(
            "Restoring snapshot", container=container, name=name, snapshot=snapshot_id
        )

        try:
            self.client_manager.client.copy_object(
                Bucket=container,
                Key=name,
                CopySource={"Bucket": container, "Key": name, "VersionId": snapshot_id},
            )
        except Exception as e:
            raise self._fail("restore snapshot of", f"{container}/{name}", e)

        logger.info("Snapshot restored", container=container, name=name)

    def _mint_version(self, container: str, name: str, head: dict) -> str:
        """Copy an object onto itself so its current content gets a version id."""
        kwargs: dict[str, Any] = {
            "Bucket": container,
            "Key": name,
            "CopySource": {"Bucket": container, "Key": name},
            "Metadata": head.get("Metadata", {}),
            # S3 refuses a self-copy that changes nothing
            "MetadataDirective": "REPLACE",
        }
        if head.get("ContentType"):
            kwargs["ContentType"] = head["ContentType"]

        response = self.client_manager.client.copy_object(**kwargs)
        logger.info("Versioned pre-existing object", container=container, name=name)
        return response["VersionId"]

    def _delete_versions(self, container: str, name: str, include_latest: bool) -> int:
        fetch_page = partial(self.list_versions_page, include_latest=include_latest)
        versions = [
            {"Key": item.name, "VersionId": item.metadata["snapshot"]}
            for item in list_all(fetch_page, container, name, _DELETE_BATCH_SIZE)
            if item.name == name
        ]

        client = self.client_manager.client
        deleted = 0
        errors = []
        for start in range(0, len(versions), _DELETE_BATCH_SIZE):
            response = client.delete_objects(
                Bucket=container,
                Delete={"Objects": versions[start : start + _DELETE_BATCH_SIZE]},
            )
            # Per-key failures are reported in the response, not raised
            deleted += len(response.get("Deleted", []))
            errors.extend(response.get("Errors", []))

        if errors:
            failed = ", ".join(
                f"{error.get('Key')}@{error.get('VersionId')} ({error.get('Code')})"
                for error in errors
            )
            error_msg = (
                f"Failed to delete {len(errors)} version(s) of "
                f"'{container}/{name}': {failed}"
            )
            logger.error(error_msg, deleted=deleted, failed=len(errors))
            raise StorageOperationError(error_msg)
        return deleted

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
            if option is DeleteSnapshotsOption.none:
                if not self.blob_exists(container, name):
                    logger.info(
                        "Blob not found, nothing deleted",
                        container=container,
                        name=name,
                    )
                    return False
                self.client_manager.client.delete_object(Bucket=container, Key=name)
                deleted = 1
            else:
                deleted = self._delete_versions(
                    container,
                    name,
                    include_latest=option is DeleteSnapshotsOption.include_snapshots,
                )
        except (ValidationError, StorageOperationError):
            raise
        except Exception as e:
            raise self._fail("delete", f"{container}/{name}", e)

        logger.info(
            "Blob deleted",
            container=container,
            name=name,
            option=option.value,
            removed=deleted,
        )
        return deleted > 0
