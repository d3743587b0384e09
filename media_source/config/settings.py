"""Library settings and configuration management."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Library configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # No file handler unless set

    # Metadata extraction (duration / MIME for audio and video)
    METADATA_TIMEOUT_SECONDS: float = 3.0
    FFPROBE_PATH: str = "ffprobe"

    # Root directory used by the default asset bundle
    ASSET_ROOT: str = "."


# Global settings instance
settings = Settings()
