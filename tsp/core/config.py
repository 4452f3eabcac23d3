"""Unified configuration management for tsp."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TspConfig(BaseSettings):
    """tsp configuration with environment variable support."""

    # Application settings
    debug: bool = Field(default=False)

    # Logging configuration
    log_level: str = Field(default="WARNING")
    log_file: Path | None = Field(default=None)

    # Package registry
    registry_url: str = Field(default="https://registry.npmjs.org")
    registry_timeout: float | None = Field(default=30.0, gt=0)

    # Version presentation
    major_lines: int = Field(default=2, ge=1, le=10)
    versions_per_major: int = Field(default=3, ge=1, le=20)

    # Command execution
    shell: str = Field(default="/bin/bash")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="TSP_",
        extra="ignore",
        validate_assignment=True
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {sorted(LOG_LEVELS)}")
        return level

    @field_validator("registry_url")
    @classmethod
    def validate_registry_url(cls, v: str) -> str:
        """Validate registry URL and strip trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Registry URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_file")
    @classmethod
    def expand_log_file(cls, v: Path | None) -> Path | None:
        """Expand user home in log file path."""
        return v.expanduser() if v else v


# Global configuration instance
config = TspConfig()


def get_config() -> TspConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> TspConfig:
    """Reload configuration from environment and files."""
    global config
    config = TspConfig()
    return config
