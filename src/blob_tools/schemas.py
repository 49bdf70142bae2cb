"""Storage configuration schemas for blob-tools."""

from typing import Literal, Union

from pydantic import BaseModel, Field


class S3StorageConfig(BaseModel):
    """Configuration for S3 object storage."""
    type: Literal["s3"] = "s3"
    access_key_id: str | None = Field(default=None, description="AWS access key ID")
    secret_access_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    session_token: str | None = Field(default=None, description="AWS session token")
    region_name: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(default=None, description="Custom S3 endpoint URL")
    aws_profile: str | None = Field(default=None, description="AWS profile name")


class AzureStorageConfig(BaseModel):
    """Configuration for Azure Blob Storage."""
    type: Literal["azure"] = "azure"
    connection_string: str | None = Field(
        default=None, description="Storage account connection string"
    )
    connection_string_file: str | None = Field(
        default=None, description="File holding the connection string"
    )


# Discriminated union for storage configurations
StorageConfig = Union[S3StorageConfig, AzureStorageConfig]
