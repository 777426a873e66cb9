"""Configuration management for petfolio.

Values come from environment variables, optionally seeded from a ``.env``
file through python-dotenv. Designed for a single-owner personal site.
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DB_PATH = "petfolio.duckdb"
DEFAULT_IMAGE_MAX_EDGE = 800
DEFAULT_IMAGE_QUALITY = 0.7


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self, env_file: str | Path | None = None):
        """Initialize configuration, loading ``env_file`` if it exists."""
        self._cache: dict[str, Any] = {}
        if env_file is not None and Path(env_file).exists():
            load_dotenv(dotenv_path=env_file, override=False)
            logger.debug("env_file_loaded", env_file=str(env_file))

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)
        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")
                    else:
                        value = bool(value)
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, error=str(e))
                value = default

        self._cache[cache_key] = value
        return value

    def is_development(self) -> bool:
        """Check if running in development mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["development", "dev", "local", "test"]

    def clear_cache(self) -> None:
        """Clear configuration cache."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config(env_file=".env")
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get environment variable with type casting."""
    return get_config().get(key, default, cast_type)


def get_db_path() -> str:
    """Get the path of the DuckDB file backing the key-value store."""
    return str(get_env("PETFOLIO_DB_PATH", DEFAULT_DB_PATH))


def get_image_max_edge() -> int:
    """Get the longest edge, in pixels, allowed for stored images."""
    return int(get_env("IMAGE_MAX_EDGE", DEFAULT_IMAGE_MAX_EDGE, int))


def get_image_quality() -> float:
    """Get the lossy encode quality as a fraction between 0 and 1."""
    return float(get_env("IMAGE_QUALITY", DEFAULT_IMAGE_QUALITY, float))


def get_upload_endpoint() -> str | None:
    """Get the remote upload endpoint URL, or None for inline encoding."""
    return get_env("UPLOAD_ENDPOINT")
