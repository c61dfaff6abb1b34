"""Configuration service for managing tasklane configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in tasklane. It handles:

- Loading and saving config.json
- Dotted-key reads and writes (``storage.backend``, ``pagination.default_limit``)
- Choosing the storage strategy for the configured backend
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from tasklane.models.config_models import AppConfig
from tasklane.models.storage_strategy import (
    JsonFileStorageStrategy,
    MemoryStorageStrategy,
    StorageStrategyContext,
)

_APP_NAME = "tasklane"
_STORE_FILE = "tasks.json"


class ConfigService:
    """Service for managing application configuration.

    Configuration lives in ``config.json`` under the platform config directory;
    the JSON task store defaults to the platform data directory.
    """

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Get a StorageStrategyContext based on the current configuration."""
        if self._storage_strategy_context is None:
            self._storage_strategy_context = self._build_strategy_context()
        return self._storage_strategy_context

    @property
    def store_path(self) -> Path:
        """Location of the JSON task store."""
        configured = self.config.storage.path
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / _STORE_FILE

    def _build_strategy_context(self) -> StorageStrategyContext:
        if self.config.storage.backend == "memory":
            return StorageStrategyContext(MemoryStorageStrategy())
        return StorageStrategyContext(JsonFileStorageStrategy(self.store_path))

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run - write the defaults
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        return self._get_from(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is invalid for the key
        """
        self.get(key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self._storage_strategy_context = None
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration (or a single key) to defaults."""
        if key is None:
            self._config = AppConfig()
            self._storage_strategy_context = None
            self.save_config()
            return

        default_value = ConfigService._get_from(AppConfig(), key)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump()
        self.set(key, default_value)

    @staticmethod
    def _get_from(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(f"Unknown config key: {key}")
            value = getattr(value, k)
        return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
