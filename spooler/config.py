"""
Configuration management for the Spooler API.
Uses pydantic-settings for environment-based configuration.
"""

import enum
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageProvider(str, enum.Enum):
    """Storage backend variants. Fixed at process start."""
    LOCAL = "local"
    REMOTE = "remote"


class StorageConfig(BaseModel):
    """
    Immutable storage configuration.

    Built once at startup and handed to the storage backend constructor;
    backends never look settings up on their own.
    """

    model_config = ConfigDict(frozen=True)

    provider: StorageProvider = StorageProvider.LOCAL
    base_path: str = "./storage"
    bucket_name: str | None = None
    endpoint_url: str | None = None
    region: str | None = None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Spooler Print Submission API"
    DEBUG: bool = False

    # Storage Backend Selection
    STORAGE_PROVIDER: Literal["local", "remote"] = "local"

    # Local Storage Settings
    LOCAL_STORAGE_PATH: str = "./storage"

    # Remote (S3-compatible) Settings; credentials come from the environment
    REMOTE_BUCKET_NAME: str | None = None
    S3_ENDPOINT_URL: str | None = None
    S3_REGION: str | None = None

    # File Upload Limits
    MAX_UPLOAD_SIZE: int = 100 * 1024 * 1024  # 100MB
    MAX_PREVIEW_SIZE: int = 100 * 1024 * 1024

    # Logging
    LOG_LEVEL: str = "INFO"

    def storage_config(self) -> StorageConfig:
        """Build the frozen storage configuration from these settings."""
        return StorageConfig(
            provider=StorageProvider(self.STORAGE_PROVIDER),
            base_path=self.LOCAL_STORAGE_PATH,
            bucket_name=self.REMOTE_BUCKET_NAME,
            endpoint_url=self.S3_ENDPOINT_URL,
            region=self.S3_REGION,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
