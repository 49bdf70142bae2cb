"""Core utilities and shared components for blob-tools."""

from .config import settings
from .exceptions import BlobToolsError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "BlobToolsError", "ValidationError", "get_logger", "get_tracer"]
