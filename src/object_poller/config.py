"""
Configuration management for the object poller.

This module holds the per-fetcher configuration model and the environment
driven settings used by the standalone runner, using Pydantic Settings for
type safety and validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REGION = "ap-southeast-2"
DEFAULT_POLL_INTERVAL_SECONDS = 300.0
COMPRESSED_SUFFIX = ".gz"


class FetcherConfig(BaseModel):
    """Configuration for a single polled object.

    Bucket and key default to empty strings so that their absence is
    reported by ``PollingFetcher.initialize`` rather than at construction.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(default="", description="S3 bucket name")
    key: str = Field(default="", description="S3 object key")
    access_key: str | None = Field(default=None, description="AWS access key ID")
    secret_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    region: str | None = Field(
        default=None, description=f"AWS region (defaults to {DEFAULT_REGION})"
    )
    use_embedded_cert: bool = Field(
        default=False,
        description="Trust the bundled CA certificates instead of the system store",
    )
    poll_interval_seconds: float | None = Field(
        default=None,
        description="Delay between polls in seconds (defaults to 5 minutes)",
    )

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, v: float | None) -> float | None:
        """Reject non-positive intervals; ``None`` selects the default."""
        if v is not None and v <= 0:
            raise ValueError(f"poll_interval_seconds must be positive, got {v}")
        return v


class Settings(BaseSettings):
    """Settings for the standalone runner."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Object configuration
    s3_bucket: str = Field(default="", description="S3 bucket name")
    s3_key: str = Field(default="", description="S3 object key")
    s3_access_key: str = Field(
        default="", description="AWS access key ID (empty to use environment)"
    )
    s3_secret_key: str = Field(default="", description="AWS secret access key")
    s3_region: str = Field(default="", description="AWS region")
    s3_use_embedded_cert: bool = Field(
        default=False, description="Use the bundled CA certificates"
    )

    # Polling configuration
    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        description="Polling interval in seconds",
    )
    max_consecutive_failures: int = Field(
        default=0,
        description="Stop after this many consecutive failed fetches (0 = never)",
    )

    # Output configuration
    output_path: str = Field(
        default="", description="File to write updates to (empty for stdout)"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed_formats = {"json", "console"}
        if v.lower() not in allowed_formats:
            raise ValueError(f"Invalid log format: {v}")
        return v.lower()

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate polling interval."""
        if v <= 0:
            raise ValueError(f"poll_interval_seconds must be positive, got {v}")
        return v

    @field_validator("max_consecutive_failures")
    @classmethod
    def validate_max_consecutive_failures(cls, v: int) -> int:
        """Validate failure limit."""
        if v < 0:
            raise ValueError("max_consecutive_failures cannot be negative")
        return v

    @property
    def fetcher_config(self) -> FetcherConfig:
        """Get fetcher configuration."""
        return FetcherConfig(
            bucket=self.s3_bucket,
            key=self.s3_key,
            access_key=self.s3_access_key or None,
            secret_key=self.s3_secret_key or None,
            region=self.s3_region or None,
            use_embedded_cert=self.s3_use_embedded_cert,
            poll_interval_seconds=self.poll_interval_seconds,
        )


# Global settings instance - initialized lazily to avoid import-time errors
_settings_instance = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

