"""Configuration settings for dep_ensure.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the DEP_ENSURE_
    prefix. CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEP_ENSURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dep_path: str = Field(
        default="dep",
        description="dep executable used for dependency resolution",
    )
    working_dir: Path | None = Field(
        default=None,
        description="Application directory (current directory if not set)",
    )
    build_timeout: int | None = Field(
        default=None,
        ge=60,
        description="Timeout for dep ensure in seconds (no timeout if not set)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
