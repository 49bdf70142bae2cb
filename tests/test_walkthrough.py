"""Tests for the end-to-end blob storage walkthrough."""

from unittest.mock import Mock

import pytest
from conftest import PagedResource

from blob_tools.core.exceptions import CancelledError
from blob_tools.listing import CancellationToken
from blob_tools.objectstorage import (
    DeleteSnapshotsOption,
    S3BlobStore,
    S3ClientConfig,
    SnapshotInfo,
)
from blob_tools.unified.walkthrough import MODIFIED_CONTENT, run_walkthrough


def make_s3_store():
    return S3BlobStore(
        S3ClientConfig(
            access_key_id="test_key",
            secret_access_key="test_secret",
            region_name="us-east-1",
        )
    )


class TestWalkthroughOnS3:
    """Run the walkthrough against mocked, versioned S3."""

    def test_full_walkthrough(self, versioned_s3_client, temp_dir):
        """Test every step runs and the bucket is left clean."""
        client = versioned_s3_client
        for i in range(7):
            client.put_object(Bucket="test-bucket", Key=f"existing-{i}.txt", Body=b"x")

        report = run_walkthrough(make_s3_store(), "test-bucket", str(temp_dir))

        assert "test-bucket" in report.containers
        assert report.blob_page_sizes == [3, 3, 1]
        assert report.blobs == [f"existing-{i}.txt" for i in range(7)]
        assert report.uploaded is True
        assert (temp_dir / "test-file-downloaded.txt").read_text() == "test content"
        assert (temp_dir / "test-file-modified.txt").read_text() == MODIFIED_CONTENT
        assert [s.snapshot_id for s in report.snapshots] == [report.snapshot.snapshot_id]
        assert report.restored_snapshot == report.snapshot.snapshot_id
        assert report.deleted_with_snapshots is True
        assert report.deleted_snapshots_only is False

        versions = client.list_object_versions(Bucket="test-bucket", Prefix="test-file.txt")
        assert versions.get("Versions", []) == []

    def test_container_prefix(self, versioned_s3_client, temp_dir):
        """Test the container listing honours the prefix."""
        versioned_s3_client.create_bucket(Bucket="other")

        report = run_walkthrough(
            make_s3_store(), "test-bucket", str(temp_dir), container_prefix="test"
        )

        assert report.containers == ["test-bucket"]


class TestWalkthroughSteps:
    """Run the walkthrough against a mock store."""

    @pytest.fixture
    def store(self):
        store = Mock()
        store.list_containers_page = PagedResource(["demo", "docs"])
        store.list_blobs_page = PagedResource([])
        store.list_snapshots_page = PagedResource([])
        store.blob_exists.return_value = True
        store.create_snapshot.return_value = SnapshotInfo("test-file.txt", "s1")
        store.delete_blob.return_value = True
        return store

    def test_existing_blob_not_uploaded_again(self, store, temp_dir):
        """Test only the modified file is uploaded when the blob exists."""
        report = run_walkthrough(store, "demo", str(temp_dir))

        assert report.uploaded is False
        assert report.downloaded_path is None
        store.download_file.assert_not_called()
        store.upload_file.assert_called_once_with(
            "demo", "test-file.txt", str(temp_dir / "test-file-modified.txt")
        )

    def test_no_snapshots_nothing_restored(self, store, temp_dir):
        """Test restore is skipped when no snapshot is listed."""
        report = run_walkthrough(store, "demo", str(temp_dir))

        assert report.snapshots == []
        assert report.restored_snapshot is None
        store.restore_snapshot.assert_not_called()

    def test_delete_order(self, store, temp_dir):
        """Test the blob is deleted with snapshots, then snapshots only."""
        run_walkthrough(store, "demo", str(temp_dir))

        assert [c.args for c in store.delete_blob.call_args_list] == [
            ("demo", "test-file.txt", DeleteSnapshotsOption.include_snapshots),
            ("demo", "test-file.txt", DeleteSnapshotsOption.snapshots_only),
        ]

    def test_cancelled(self, store, temp_dir):
        """Test a cancelled token stops the walkthrough at the first listing."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(CancelledError):
            run_walkthrough(store, "demo", str(temp_dir), cancellation=token)

        store.upload_file.assert_not_called()
