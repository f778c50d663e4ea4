"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- BUS_STORE_SNAPSHOT_PATH=/var/lib/bus-booking/state.json
- BUS_STORE_AUTOSAVE=true
- BUS_LOG_LEVEL=DEBUG
- BUS_LOG_STRUCTURED=true
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreConfig(BaseSettings):
    """State persistence configuration.

    Environment variables prefixed with BUS_STORE_.
    """

    model_config = SettingsConfigDict(env_prefix="BUS_STORE_")

    snapshot_path: Optional[Path] = None
    autosave: bool = False  # Save after every successful mutation

    @property
    def persistent(self) -> bool:
        """Whether state survives restarts."""
        return self.snapshot_path is not None


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with BUS_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="BUS_LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.store.snapshot_path)
        print(config.observability.level)

    Environment variables prefixed with BUS_.
    """

    model_config = SettingsConfigDict(env_prefix="BUS_")

    store: StoreConfig = Field(default_factory=StoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
