"""
Centralized configuration for localstorage.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (LOCALSTORAGE_*)
3. .env file
4. Default values

Example:
    from localstorage.config import get_config

    config = get_config()
    print(config.storage_path)  # From LOCALSTORAGE_STORAGE_PATH or default

    # Force the volatile engine for this process
    config = get_config(storage_type="memory")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocalStorageConfig(BaseSettings):
    """
    Central configuration for localstorage.

    All settings can be overridden via environment variables
    prefixed with LOCALSTORAGE_.

    Example:
        export LOCALSTORAGE_STORAGE_PATH=/var/lib/myapp/storage.json
        export LOCALSTORAGE_STORAGE_TYPE=memory
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCALSTORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Host storage facility
    storage_type: Literal["file", "memory"] = Field(
        default="file",
        description="Host storage facility ('memory' disables it and forces the volatile engine)",
    )
    storage_path: str = Field(
        default="~/.localstorage/storage.json",
        description="JSON file backing the file storage engine",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level used by the command line interface",
    )

    @field_validator("storage_path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    @property
    def host_enabled(self) -> bool:
        """True if a persistent host facility should be probed."""
        return self.storage_type != "memory"

    def get_storage_path(self) -> Path:
        """Get the storage file path."""
        return Path(self.storage_path)

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.log_level.upper())


# Global singleton
_config: Optional[LocalStorageConfig] = None


def get_config(**overrides) -> LocalStorageConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        LocalStorageConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = LocalStorageConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
