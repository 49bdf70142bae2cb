"""Parsing of ``scheme://container/name`` storage paths."""

from urllib.parse import urlparse

from blob_tools.core import get_logger
from blob_tools.core.exceptions import ValidationError

logger = get_logger(__name__)


def parse_storage_path(path: str, scheme: str) -> tuple[str, str]:
    """Parse a storage path into container and blob name (or prefix).

    Args:
        path: Path in format scheme://container/name or scheme://container
        scheme: Expected URL scheme, e.g. "s3" or "az"

    Returns:
        Tuple of (container, name)

    Raises:
        ValidationError: If path format is invalid
    """
    if not path.startswith(f"{scheme}://"):
        raise ValidationError(f"Path must start with '{scheme}://': {path}")

    parsed = urlparse(path)
    container = parsed.netloc
    name = parsed.path.lstrip("/")

    if not container:
        raise ValidationError(f"Invalid path, missing container: {path}")

    logger.debug("Storage path parsed", container=container, name=name)
    return container, name
