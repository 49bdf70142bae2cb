"""Configuration management for blob-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "blob-tools"
    otel_exporter_endpoint: str = "http://localhost:4317"

    default_page_size: int = 1000
    connection_string_file: str = "StorageConnectionString.txt"

    model_config = {
        "env_prefix": "BLOB_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
