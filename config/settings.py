"""Settings loader for the RoPaSci game.

Configuration is handled by :mod:`pydantic-settings`, reading environment
variables and an optional ``.env`` file at the repository root.

The :func:`reset_settings` helper can be used in tests to reload
configuration after modifying environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(ENV_PATH)
# Default to the repository root when BASE_DIR isn't configured
DEFAULT_BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application configuration values."""

    model_config = SettingsConfigDict(env_file=ENV_PATH, extra="ignore")

    BASE_DIR: Path = DEFAULT_BASE_DIR
    SETTINGS_FILE: Optional[Path] = None
    """Location of the high score JSON file; ``paths.SETTINGS_JSON`` when unset."""

    HIGH_SCORE_KEY: str = "highScore"
    RANDOM_SEED: Optional[int] = None
    LOG_LEVEL: str = "INFO"
    ROPASCI_HOST: str = "127.0.0.1"
    ROPASCI_PORT: int = 5000
    ROPASCI_SECRET_KEY: str = "change-me-in-.env"


def get_settings() -> Settings:
    """Return the current settings instance, honouring :func:`reset_settings`."""

    return settings


def reset_settings() -> None:
    """Reload configuration from the environment and ``.env`` file."""

    global settings
    settings = Settings()


# Global settings instance used throughout the application
settings = Settings()


__all__ = ["Settings", "settings", "get_settings", "reset_settings"]
