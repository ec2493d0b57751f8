"""
Configuration Management
========================

Centralized configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Shared config that all settings classes use to load .env
_shared_config = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    env_prefix="",
    extra="ignore",
)


class DeviceFarmSettings(BaseSettings):
    """AWS Device Farm connection settings."""

    model_config = _shared_config

    aws_device_farm_project_arn: str = Field(
        default="",
        description="ARN of the default Device Farm project used by pool and upload commands",
    )
    # Device Farm is only available in us-west-2
    aws_region: str = Field(default="us-west-2", description="Device Farm API region")
    aws_access_key_id: str = Field(
        default="",
        description="AWS access key ID (optional – falls back to default credential chain)",
    )
    aws_secret_access_key: str = Field(
        default="",
        description="AWS secret access key (optional – falls back to default credential chain)",
    )

    def has_explicit_credentials(self) -> bool:
        """Return True when both halves of a static key pair are configured."""
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


class PollingSettings(BaseSettings):
    """Upload polling and transfer settings."""

    model_config = _shared_config

    upload_timeout_ms: int = Field(
        default=600_000,
        description="How long to wait for uploads to finish processing",
    )
    upload_poll_interval_ms: int = Field(
        default=5_000,
        description="Delay between upload status checks (0 or negative polls back-to-back)",
    )
    blob_timeout_seconds: float = Field(
        default=300.0,
        description="Total timeout for a single S3 PUT",
    )

    @field_validator("upload_timeout_ms")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Reject negative timeouts; zero means a single status check."""
        if v < 0:
            raise ValueError("upload_timeout_ms must not be negative")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = _shared_config

    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )


class Settings(BaseSettings):
    """
    Main settings class combining all configuration sections.

    Usage:
        from farmhand.config import get_settings
        settings = get_settings()
        print(settings.device_farm.aws_device_farm_project_arn)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Nested settings
    device_farm: DeviceFarmSettings = Field(default_factory=DeviceFarmSettings)
    polling: PollingSettings = Field(default_factory=PollingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def __init__(self, **kwargs):
        """Initialize settings with nested configuration."""
        super().__init__(**kwargs)
        # Sections not passed in are rebuilt so they read their own env vars
        if "device_farm" not in kwargs:
            self.device_farm = DeviceFarmSettings()
        if "polling" not in kwargs:
            self.polling = PollingSettings()
        if "logging" not in kwargs:
            self.logging = LoggingSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings loaded from environment.
    """
    return Settings()
