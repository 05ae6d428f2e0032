"""Configuration using pydantic-settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="DOTCMD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mappings_file: Annotated[
        Path, Field(description="YAML file with user command mappings")
    ] = Path("~/.config/dotcmd/mappings.yaml")

    include_defaults: Annotated[
        bool, Field(description="Load the bundled default mappings")
    ] = True

    show_command: Annotated[
        bool, Field(description="Print the expanded command before running it")
    ] = True

    check_command: Annotated[
        bool, Field(description="Verify the base command exists before running it")
    ] = True

    timeout: Annotated[
        float | None, Field(description="Execution timeout in seconds")
    ] = None

    cycle_threshold: Annotated[
        float, Field(description="Seconds between requests that count as a repeat")
    ] = 0.5

    max_completions: Annotated[
        int, Field(description="Maximum number of completions to show")
    ] = 50

    server_port: Annotated[int, Field(description="Server port")] = 8091
    server_host: Annotated[str, Field(description="Server host")] = "127.0.0.1"

    log_level: Annotated[str, Field(description="Logging level")] = "WARNING"

    @property
    def mappings_path(self) -> Path:
        """Get expanded mappings file path."""
        return self.mappings_file.expanduser()

    def ensure_directories(self) -> None:
        """Create the mappings directory if it doesn't exist."""
        self.mappings_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure and return the application logger."""
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger = logging.getLogger("dotcmd")
    logger.setLevel(getattr(logging, settings.log_level.upper()))

    return logger
