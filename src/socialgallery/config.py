"""Configuration management for the socialgallery application.

Values come from environment variables, with Streamlit secrets as a
fallback when running inside a Streamlit app.
"""

import os
from typing import Any

import streamlit as st

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DB_PATH = "data/gallery.duckdb"
STORAGE_BACKENDS = ("duckdb", "memory")


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

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
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets.toml, or not running under `streamlit run`
                pass

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
        return environment in ["development", "dev", "local"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get environment variable with type casting."""
    return get_config().get(key, default, cast_type)


def is_development() -> bool:
    """Check if running in development mode."""
    return get_config().is_development()


def get_storage_backend() -> str:
    """Get the persistence backend name ("duckdb" or "memory")."""
    backend = str(get_env("GALLERY_STORAGE_BACKEND", "duckdb")).lower()
    if backend not in STORAGE_BACKENDS:
        logger.warning("unknown_storage_backend", backend=backend, fallback="duckdb")
        return "duckdb"
    return backend


def get_db_path() -> str:
    """Get the DuckDB file holding the gallery key-value store."""
    return str(get_env("GALLERY_DB_PATH", DEFAULT_DB_PATH))


def get_seed_example_images() -> bool:
    """Whether an empty store is seeded with the example images."""
    return bool(get_env("SEED_EXAMPLE_IMAGES", True, bool))


def get_debug_mode() -> bool:
    """Get debug mode setting."""
    return get_env("DEBUG", False, bool) or is_development()
