"""Configuration management using Pydantic BaseSettings.

Loads configuration from environment variables with sensible defaults
for local use. Override via environment variables or a .env file.

Usage:
    from paperhand_common.config import get_settings

    settings = get_settings()
    print(settings.log_level)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log format (json or console)
        concept_aliases_path: Optional YAML file mapping surface terms to
            canonical concepts, used when re-attaching citations
        trace_console: Export OpenTelemetry spans to stderr
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    log_format: str = Field(
        default="console",
        description="Log format: json or console",
    )

    # Citation injection
    concept_aliases_path: Optional[str] = Field(
        default=None,
        description="YAML file with concept aliases (surface term -> concept)",
    )

    # Telemetry (optional)
    trace_console: bool = Field(
        default=False,
        description="Print OpenTelemetry spans to stderr",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {"json", "console"}
        lower = v.lower()
        if lower not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return lower


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    Call get_settings.cache_clear() to reload.
    """
    return Settings()
