"""Centralized configuration using Pydantic Settings

All environment variables (DEVCOMMS_*) are managed here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="DEVCOMMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote host
    base_url: str = "http://127.0.0.1:8080"
    path_prefix: str = "/_/"
    request_timeout: float = Field(default=3.0, gt=0)

    # Scheduling (milliseconds)
    min_update_ms: float = Field(default=1000 / 30, gt=0)
    stale_response_ms: float = Field(default=3000.0, gt=0)

    # Logging
    debug: bool = False


# Global settings instance
settings = Settings()
