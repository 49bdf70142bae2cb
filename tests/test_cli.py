"""Tests for the command-line interface."""

from datetime import datetime, timezone
from unittest.mock import patch

from typer.testing import CliRunner

from blob_tools import __version__
from blob_tools.cli import app
from blob_tools.core.exceptions import RemoteListingError, ValidationError
from blob_tools.listing import Item
from blob_tools.objectstorage import SnapshotInfo
from blob_tools.schemas import AzureStorageConfig, S3StorageConfig
from blob_tools.unified import WalkthroughReport

runner = CliRunner()


class TestCli:
    """Test CLI commands with the unified operations mocked out."""

    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"blob-tools {__version__}" in result.output

    @patch("blob_tools.cli.list_blobs")
    def test_list_s3(self, mock_list):
        """Test listing with S3 options."""
        mock_list.return_value = [Item("data/a.txt"), Item("data/b.txt")]

        result = runner.invoke(
            app,
            [
                "--storage-type",
                "s3",
                "--aws-profile",
                "dev",
                "list",
                "s3://bucket/data/",
                "--page-size",
                "3",
            ],
        )

        assert result.exit_code == 0
        assert "Found 2 blobs" in result.output
        assert "data/b.txt" in result.output
        path, config = mock_list.call_args.args
        assert path == "s3://bucket/data/"
        assert isinstance(config, S3StorageConfig)
        assert config.aws_profile == "dev"
        assert mock_list.call_args.kwargs == {"page_size": 3, "max_items": None}

    @patch("blob_tools.cli.list_blobs")
    def test_list_empty(self, mock_list):
        """Test an empty listing message."""
        mock_list.return_value = []

        result = runner.invoke(app, ["list", "az://demo/"])

        assert result.exit_code == 0
        assert "No blobs found." in result.output
        assert isinstance(mock_list.call_args.args[1], AzureStorageConfig)

    @patch("blob_tools.cli.list_blobs")
    def test_list_remote_failure(self, mock_list):
        """Test listing errors exit with status 1."""
        mock_list.side_effect = RemoteListingError("page 2 failed", items_emitted=3)

        result = runner.invoke(app, ["-t", "azure", "list", "az://demo/"])

        assert result.exit_code == 1
        assert "Error: page 2 failed" in result.output

    @patch("blob_tools.cli.list_containers")
    def test_containers(self, mock_list):
        """Test containers are printed with metadata."""
        mock_list.return_value = [Item("demo", {"owner": "data-team"})]

        result = runner.invoke(
            app,
            ["-t", "azure", "--connection-string", "UseDevelopmentStorage=true",
             "containers", "--prefix", "d"],
        )

        assert result.exit_code == 0
        assert "demo" in result.output
        assert "owner: data-team" in result.output
        config = mock_list.call_args.args[0]
        assert config.connection_string == "UseDevelopmentStorage=true"
        assert mock_list.call_args.kwargs == {"prefix": "d", "page_size": None}

    @patch("blob_tools.cli.blob_exists")
    def test_exists_missing(self, mock_exists):
        """Test a missing blob exits with status 1."""
        mock_exists.return_value = False

        result = runner.invoke(app, ["exists", "az://demo/test-file.txt"])

        assert result.exit_code == 1
        assert "Not found" in result.output

    @patch("blob_tools.cli.blob_exists")
    def test_exists_present(self, mock_exists):
        """Test an existing blob exits cleanly."""
        mock_exists.return_value = True

        result = runner.invoke(app, ["exists", "az://demo/test-file.txt"])

        assert result.exit_code == 0
        assert "Exists" in result.output

    @patch("blob_tools.cli.upload_file")
    def test_upload_no_overwrite(self, mock_upload):
        """Test --no-overwrite reaches the upload."""
        result = runner.invoke(
            app, ["upload", "az://demo/test-file.txt", "local.txt", "--no-overwrite"]
        )

        assert result.exit_code == 0
        assert mock_upload.call_args.kwargs == {"overwrite": False}

    @patch("blob_tools.cli.list_snapshots")
    def test_snapshots(self, mock_snapshots):
        """Test snapshots are printed with their ids."""
        mock_snapshots.return_value = [
            SnapshotInfo(
                "test-file.txt",
                "2024-05-01T10:20:30.0000000Z",
                datetime(2024, 5, 1, 10, 20, 30, tzinfo=timezone.utc),
            )
        ]

        result = runner.invoke(app, ["snapshots", "az://demo/test-file.txt"])

        assert result.exit_code == 0
        assert "Snapshot 2024-05-01T10:20:30.0000000Z of test-file.txt" in result.output

    @patch("blob_tools.cli.delete_blob")
    def test_delete_include_snapshots(self, mock_delete):
        """Test the snapshots option is passed through."""
        mock_delete.return_value = True

        result = runner.invoke(
            app, ["delete", "az://demo/test-file.txt", "--snapshots", "include"]
        )

        assert result.exit_code == 0
        assert "Deleted" in result.output
        assert mock_delete.call_args.kwargs == {"option": "include"}

    @patch("blob_tools.cli.delete_blob")
    def test_delete_nothing(self, mock_delete):
        """Test deleting a missing blob is not an error."""
        mock_delete.return_value = False

        result = runner.invoke(app, ["delete", "az://demo/test-file.txt"])

        assert result.exit_code == 0
        assert "Nothing to delete" in result.output

    @patch("blob_tools.cli.restore_snapshot")
    def test_restore_validation_error(self, mock_restore):
        """Test validation errors are reported."""
        mock_restore.side_effect = ValidationError("Path must name a blob: az://demo")

        result = runner.invoke(app, ["restore", "az://demo", "s1"])

        assert result.exit_code == 1
        assert "Path must name a blob" in result.output

    @patch("blob_tools.cli.create_store")
    @patch("blob_tools.cli.run_walkthrough")
    def test_walkthrough(self, mock_walkthrough, mock_create_store, tmp_path):
        """Test the walkthrough command summarises the report."""
        mock_walkthrough.return_value = WalkthroughReport(
            containers=["demo"],
            blobs=["a", "b", "c", "d"],
            blob_page_sizes=[3, 1],
            restored_snapshot="s1",
            deleted_with_snapshots=True,
        )

        result = runner.invoke(
            app, ["walkthrough", "demo", "--work-dir", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert "Blobs: 4 in pages of [3, 1]" in result.output
        assert "Restored snapshot: s1" in result.output
        args = mock_walkthrough.call_args
        assert args.args == (mock_create_store.return_value, "demo", str(tmp_path))
        assert args.kwargs["page_size"] == 3
