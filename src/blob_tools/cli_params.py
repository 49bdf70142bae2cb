"""Shared CLI parameter definitions.

Reusable ``Annotated`` parameter types for the CLI, so option names, types
and help text stay consistent across commands.

Usage:
    @app.command()
    def my_command(path: PathArgument, page_size: PageSizeOption = None):
        pass

Parameter Categories:
    - Storage selection: which service to talk to
    - AWS parameters: for S3 operations
    - Azure parameters: for Azure Blob Storage operations
    - Listing parameters: page size and limits
"""

from enum import Enum
from typing import Annotated, Optional

import typer


class StorageType(str, Enum):
    """Supported storage services."""

    s3 = "s3"
    azure = "azure"


class SnapshotsChoice(str, Enum):
    """What to delete along with a blob."""

    none = "none"
    include = "include"
    only = "only"


StorageTypeOption = Annotated[
    StorageType,
    typer.Option(
        "--storage-type",
        "-t",
        help="Storage type: s3 or azure",
        case_sensitive=False,
    ),
]

# AWS parameters
AccessKeyOption = Annotated[
    Optional[str],
    typer.Option("--access-key-id", help="AWS access key ID (for S3 paths)"),
]
SecretKeyOption = Annotated[
    Optional[str],
    typer.Option("--secret-access-key", help="AWS secret access key (for S3 paths)"),
]
SessionTokenOption = Annotated[
    Optional[str],
    typer.Option("--session-token", help="AWS session token (for S3 paths)"),
]
RegionOption = Annotated[
    str, typer.Option("--region", help="AWS region name (for S3 paths)")
]
EndpointUrlOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
ProfileOption = Annotated[
    Optional[str],
    typer.Option("--aws-profile", help="AWS CLI profile name (for S3 paths)"),
]

# Azure parameters
ConnectionStringOption = Annotated[
    Optional[str],
    typer.Option(
        "--connection-string",
        envvar="AZURE_STORAGE_CONNECTION_STRING",
        help="Storage account connection string (for az paths)",
    ),
]
ConnectionStringFileOption = Annotated[
    Optional[str],
    typer.Option(
        "--connection-string-file",
        help="File holding the connection string (for az paths)",
    ),
]

# Listing parameters
PathArgument = Annotated[
    str,
    typer.Argument(help="Storage path, e.g. s3://bucket/key or az://container/blob"),
]
PageSizeOption = Annotated[
    Optional[int],
    typer.Option("--page-size", help="Items requested per page"),
]
MaxItemsOption = Annotated[
    Optional[int],
    typer.Option("--max-items", help="Maximum number of items to return"),
]
