"""Command-line interface for blob-tools.

Commands:
    - containers: List containers (buckets)
    - list: Page through the blobs under a container/prefix
    - exists, upload, download: Single-blob operations
    - snapshot, snapshots, restore: Snapshot management
    - delete: Delete a blob and/or its snapshots
    - walkthrough: Run the end-to-end blob storage tour

The storage type and credentials are global options given before the command:

    blob-tools --storage-type azure containers --prefix d
    blob-tools -t s3 --aws-profile dev list s3://bucket/data/ --page-size 3
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    AccessKeyOption,
    ConnectionStringFileOption,
    ConnectionStringOption,
    EndpointUrlOption,
    MaxItemsOption,
    PageSizeOption,
    PathArgument,
    ProfileOption,
    RegionOption,
    SecretKeyOption,
    SessionTokenOption,
    SnapshotsChoice,
    StorageType,
    StorageTypeOption,
)
from .schemas import AzureStorageConfig, S3StorageConfig, StorageConfig
from .unified import (
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

app = typer.Typer(
    name="blob-tools",
    help="Page through and manage cloud blob storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"blob-tools {__version__}")
        raise typer.Exit()


def _create_storage_config(
    storage_type: StorageType,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
    connection_string: Optional[str] = None,
    connection_string_file: Optional[str] = None,
) -> StorageConfig:
    """Create appropriate storage configuration based on storage type."""
    if storage_type == StorageType.s3:
        return S3StorageConfig(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
    return AzureStorageConfig(
        connection_string=connection_string,
        connection_string_file=connection_string_file,
    )


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    storage_type: StorageTypeOption = StorageType.azure,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = "us-east-1",
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
    connection_string: ConnectionStringOption = None,
    connection_string_file: ConnectionStringFileOption = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
) -> None:
    """
    blob-tools: segmented listing, transfers and snapshots for S3 and Azure.
    """
    ctx.obj = _create_storage_config(
        storage_type=storage_type,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
        connection_string=connection_string,
        connection_string_file=connection_string_file,
    )


@app.command("containers")
def containers_cmd(
    ctx: typer.Context,
    prefix: Annotated[
        str, typer.Option("--prefix", help="Only containers starting with this")
    ] = "",
    page_size: PageSizeOption = None,
) -> None:
    """List containers (buckets) and their metadata."""
    try:
        containers = list_containers(ctx.obj, prefix=prefix, page_size=page_size)
    except Exception as e:
        raise _fail(e)

    if not containers:
        typer.echo("No containers found.")
        return

    typer.echo(f"Found {len(containers)} containers:")
    for container in containers:
        typer.echo(f"  {container.name}")
        for key, value in container.metadata.items():
            if value is not None:
                typer.echo(f"    {key}: {value}")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    path: PathArgument,
    page_size: PageSizeOption = None,
    max_items: MaxItemsOption = None,
) -> None:
    """
    List blobs under a container or prefix, one page request at a time.

    Examples:
        Azure: blob-tools -t azure list az://demo/ --page-size 3
        S3: blob-tools -t s3 --aws-profile myprofile list s3://bucket/prefix
    """
    try:
        blobs = list_blobs(path, ctx.obj, page_size=page_size, max_items=max_items)
    except Exception as e:
        raise _fail(e)

    if not blobs:
        typer.echo("No blobs found.")
        return

    typer.echo(f"Found {len(blobs)} blobs:")
    for blob in blobs:
        typer.echo(f"  {blob.name}")


@app.command("exists")
def exists_cmd(ctx: typer.Context, path: PathArgument) -> None:
    """Check whether a blob exists; exits 1 when it does not."""
    try:
        exists = blob_exists(path, ctx.obj)
    except Exception as e:
        raise _fail(e)

    if not exists:
        typer.echo(f"✗ Not found: {path}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Exists: {path}")


@app.command("upload")
def upload_cmd(
    ctx: typer.Context,
    path: PathArgument,
    local_path: Annotated[str, typer.Argument(help="Local file to upload")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite/--no-overwrite", help="Replace an existing blob"),
    ] = True,
) -> None:
    """Upload a local file to a blob."""
    try:
        upload_file(path, local_path, ctx.obj, overwrite=overwrite)
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Uploaded {local_path} to {path}")


@app.command("download")
def download_cmd(
    ctx: typer.Context,
    path: PathArgument,
    local_path: Annotated[str, typer.Argument(help="Destination file")],
) -> None:
    """Download a blob to a local file."""
    try:
        download_file(path, local_path, ctx.obj)
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Downloaded {path} to {local_path}")


@app.command("snapshot")
def snapshot_cmd(ctx: typer.Context, path: PathArgument) -> None:
    """Take a snapshot of a blob."""
    try:
        snapshot = create_snapshot(path, ctx.obj)
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Snapshot {snapshot.snapshot_id} of {path}")


@app.command("snapshots")
def snapshots_cmd(
    ctx: typer.Context, path: PathArgument, page_size: PageSizeOption = None
) -> None:
    """List the snapshots of a blob."""
    try:
        snapshots = list_snapshots(path, ctx.obj, page_size=page_size)
    except Exception as e:
        raise _fail(e)

    if not snapshots:
        typer.echo("No snapshots found.")
        return

    for snapshot in snapshots:
        taken_at = "unknown"
        if snapshot.taken_at:
            taken_at = snapshot.taken_at.astimezone().isoformat()
        typer.echo(
            f"Snapshot {snapshot.snapshot_id} of {snapshot.name} taken at: {taken_at}"
        )


@app.command("restore")
def restore_cmd(
    ctx: typer.Context,
    path: PathArgument,
    snapshot_id: Annotated[str, typer.Argument(help="Snapshot to copy over the blob")],
) -> None:
    """Restore a blob from one of its snapshots."""
    try:
        restore_snapshot(path, snapshot_id, ctx.obj)
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Restored {path} from snapshot {snapshot_id}")


@app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    path: PathArgument,
    snapshots: Annotated[
        SnapshotsChoice,
        typer.Option(
            "--snapshots",
            help="none: blob only; include: blob and snapshots; only: snapshots only",
            case_sensitive=False,
        ),
    ] = SnapshotsChoice.none,
) -> None:
    """Delete a blob if it exists."""
    try:
        deleted = delete_blob(path, ctx.obj, option=snapshots.value)
    except Exception as e:
        raise _fail(e)

    if deleted:
        typer.echo(f"Deleted {path} (snapshots: {snapshots.value})")
    else:
        typer.echo(f"Nothing to delete at {path}")


@app.command("walkthrough")
def walkthrough_cmd(
    ctx: typer.Context,
    container: Annotated[str, typer.Argument(help="Container to run against")],
    work_dir: Annotated[
        str, typer.Option("--work-dir", help="Directory for local test files")
    ] = ".",
    blob_name: Annotated[
        str, typer.Option("--blob-name", help="Name of the test blob")
    ] = "test-file.txt",
    container_prefix: Annotated[
        str, typer.Option("--container-prefix", help="Prefix for the container listing")
    ] = "",
    page_size: Annotated[
        int, typer.Option("--page-size", help="Items requested per page")
    ] = 3,
) -> None:
    """Run the end-to-end blob storage walkthrough against a container."""
    try:
        report = run_walkthrough(
            create_store(ctx.obj),
            container,
            work_dir,
            blob_name=blob_name,
            container_prefix=container_prefix,
            page_size=page_size,
        )
    except Exception as e:
        raise _fail(e)

    typer.echo(f"Containers: {len(report.containers)}")
    typer.echo(f"Blobs: {len(report.blobs)} in pages of {report.blob_page_sizes}")
    typer.echo(f"Snapshots: {len(report.snapshots)}")
    if report.restored_snapshot:
        typer.echo(f"Restored snapshot: {report.restored_snapshot}")
    typer.echo(f"Deleted with snapshots: {report.deleted_with_snapshots}")


if __name__ == "__main__":
    app()
