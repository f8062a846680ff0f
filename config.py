"""Configuration management for the Drive image registry."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    storage_path: str = Field(
        default="data/gdrive_images.json",
        description="JSON file holding the registry (used when redis_url is not set)"
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL; when set the registry is stored in Redis"
    )

    option_key: str = Field(
        default="gdrive_image_loader_images",
        min_length=1,
        description="Name of the persisted registry blob (Redis key)"
    )

    # Key generation settings
    key_max_seed_length: int = Field(
        default=60,
        ge=1,
        description="Characters of the title kept before slugifying into a key"
    )

    key_fallback_prefix: str = Field(
        default="img",
        min_length=1,
        description="Prefix for timestamp keys when a title has no usable characters"
    )

    # Server settings
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to"
    )

    port: int = Field(
        default=9300,
        description="Port to listen on"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GDRIVE_IMAGES_",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config(**overrides) -> Config:
    """Load configuration from environment, with optional overrides."""
    return Config(**overrides)
