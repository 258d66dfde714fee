"""Environment-based settings using pydantic-settings.

Usage:
    from tormag.env_settings import get_env_settings

    env = get_env_settings()
    print(env.max_file_size)  # From TORMAG_MAX_FILE_SIZE env var

Environment Variables:
    TORMAG_MAX_FILE_SIZE - Largest torrent file accepted, in bytes (default: 5 MiB)
    TORMAG_LOG_LEVEL - Logging level (default: "INFO")
    TORMAG_LOG_FILE - Optional log file path

The CLI also reads these from a .env file (see load_env_file).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tormag.bencode.decoder import MAX_TORRENT_SIZE

logger = logging.getLogger(__name__)

# Read by the CLI when no --env-file is given
DEFAULT_ENV_FILE = Path(".env")


class EnvSettings(BaseSettings):
    """tormag settings from environment variables.

    Use get_env_settings() to get a cached instance.

    Example:
        env = get_env_settings()
        print(env.max_file_size)
        print(env.log_level)
    """

    model_config = SettingsConfigDict(
        env_prefix="TORMAG_",
        extra="ignore",
    )

    max_file_size: int = Field(
        default=MAX_TORRENT_SIZE,
        description="Largest torrent file accepted, in bytes",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("max_file_size")
    @classmethod
    def validate_max_file_size(cls, v: int) -> int:
        """Require a positive size ceiling."""
        if v <= 0:
            raise ValueError(f"TORMAG_MAX_FILE_SIZE must be positive, got: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"TORMAG_LOG_LEVEL must be one of {valid_levels}, got: {v}")
        return upper


@lru_cache(maxsize=1)
def get_env_settings() -> EnvSettings:
    """Get cached environment settings.

    The cache is populated on first call.
    """
    return EnvSettings()


def clear_env_settings_cache() -> None:
    """Clear the cached environment settings.

    Useful for testing to ensure fresh settings are loaded.
    """
    get_env_settings.cache_clear()


def load_env_file(env_file: Path | None = None) -> Path | None:
    """Load a .env file into os.environ and drop the cached settings.

    An explicit ``env_file`` overrides variables that are already set. Without
    one, ``.env`` in the current directory is read if it exists, and real
    environment variables keep precedence over it.

    Returns:
        The file that was loaded, or None if there was none.
    """
    from dotenv import load_dotenv

    if env_file is None:
        if not DEFAULT_ENV_FILE.is_file():
            return None
        load_dotenv(DEFAULT_ENV_FILE, override=False)
        loaded = DEFAULT_ENV_FILE
    else:
        load_dotenv(env_file, override=True)
        loaded = env_file

    logger.debug("Loaded environment from %s", loaded)
    clear_env_settings_cache()
    return loaded


def load_env_settings_from_file(env_file: Path) -> EnvSettings:
    """Load environment settings from a specific .env file.

    Args:
        env_file: Path to .env file to load.

    Returns:
        EnvSettings instance with configuration from the file.
    """
    load_env_file(env_file)
    return get_env_settings()
