"""Configuration management for Hooter.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Only ambient concerns live here; bus
behaviour (separator, default mode) is set through Hooter arguments.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class HooterSettings(BaseSettings):
    """Library configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated on load.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HOOTER_",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "testing"] = "development"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> HooterSettings:
    """Get cached settings instance.

    Returns:
        HooterSettings: Cached settings instance.
    """
    return HooterSettings()
