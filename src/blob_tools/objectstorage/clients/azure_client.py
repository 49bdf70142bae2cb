"""Azure Blob Storage client configuration and management.

Clients are built from a storage account connection string. The string is
taken from the configuration when given explicitly, otherwise it is read from
a file kept out of version control (``StorageConnectionString.txt`` unless
``BLOB_TOOLS_CONNECTION_STRING_FILE`` says otherwise).
"""

from pathlib import Path
from typing import Optional

from azure.storage.blob import BlobServiceClient
from pydantic import BaseModel, ConfigDict, Field

from blob_tools.core import get_logger, settings
from blob_tools.core.exceptions import ValidationError
from blob_tools.objectstorage.paths import parse_storage_path

logger = get_logger(__name__)


class AzureClientConfig(BaseModel):
    """Configuration for Azure Blob Storage connections."""

    model_config = ConfigDict(extra="forbid")

    connection_string: Optional[str] = Field(
        None, description="Storage account connection string"
    )
    connection_string_file: Optional[str] = Field(
        None, description="File holding the storage account connection string"
    )


class AzureClientManager:
    """Manages the BlobServiceClient and provides utility methods."""

    def __init__(self, config: AzureClientConfig):
        self.config = config
        self._client: Optional[BlobServiceClient] = None
        logger.info("Azure client manager initialized")

    @property
    def client(self) -> BlobServiceClient:
        """Get or create the BlobServiceClient instance."""
        if self._client is None:
            self._client = BlobServiceClient.from_connection_string(
                self.resolve_connection_string()
            )
            logger.info("Azure blob service client created")
        return self._client

    def resolve_connection_string(self) -> str:
        """Return the configured connection string, reading it from file if needed.

        Raises:
            ValidationError: If no connection string can be found
        """
        if self.config.connection_string:
            return self.config.connection_string

        path = Path(
            self.config.connection_string_file or settings.connection_string_file
        )
        if not path.is_file():
            raise ValidationError(
                f"No connection string given and file not found: {path}"
            )

        connection_string = path.read_text().strip()
        if not connection_string:
            raise ValidationError(f"Connection string file is empty: {path}")

        logger.debug("Connection string loaded from file", path=str(path))
        return connection_string

    @staticmethod
    def parse_azure_path(az_path: str) -> tuple[str, str]:
        """Parse an az://container/blob path into container and blob name.

        Raises:
            ValidationError: If path format is invalid
        """
        return parse_storage_path(az_path, "az")
