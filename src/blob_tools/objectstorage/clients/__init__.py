"""Storage service client management and configuration."""

from .azure_client import AzureClientConfig, AzureClientManager
from .s3_client import S3ClientConfig, S3ClientManager

__all__ = [
    "AzureClientConfig",
    "AzureClientManager",
    "S3ClientConfig",
    "S3ClientManager",
]
