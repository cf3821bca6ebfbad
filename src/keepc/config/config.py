"""
Configuration management for keepc.

Provides a configuration file at ~/.keepc/config.json for default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# Default values - single source of truth
DEFAULTS = {
    "overwrite": False,
    "match_mode": "tokens",
    "echo_command": True,
    "simple": False,
    "verbose": False,
}


class Config(BaseModel):
    """Configuration settings for keepc.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown fields like _comment

    # Store settings
    store_path: Optional[str] = Field(
        default=None,
        description="Path to the command store (default: ~/.keepc/commands.json)"
    )
    overwrite: Optional[bool] = Field(
        default=None,
        description="Replace an existing command on 'new' instead of refusing"
    )

    # Search settings
    match_mode: Optional[Literal["tokens", "phrase"]] = Field(
        default=None,
        description="'tokens' matches words in any order, 'phrase' the exact text"
    )

    # Execution settings
    shell: Optional[str] = Field(
        default=None,
        description="Shell used by 'run' (default: $SHELL, then /bin/sh)"
    )
    echo_command: Optional[bool] = Field(
        default=None,
        description="Print the command to stderr before running it"
    )
    editor: Optional[str] = Field(
        default=None,
        description="Editor used by 'edit' when $VISUAL and $EDITOR are unset"
    )

    # Interface settings
    simple: Optional[bool] = Field(
        default=None,
        description="Use plain input() prompts (no prompt_toolkit)"
    )
    verbose: Optional[bool] = Field(
        default=None,
        description="Enable debug logging"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Also write logs to this file"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        # Fall back to DEFAULTS, then to provided default
        return DEFAULTS.get(key, default)


class ConfigManager:
    """Manages loading configuration."""

    CONFIG_DIR = Path.home() / ".keepc"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> Config:
        """Load configuration from file.

        Returns:
            Config object with loaded settings, or defaults if the file
            doesn't exist or is invalid.
        """
        if not self.CONFIG_FILE.exists():
            return Config()

        try:
            data = json.loads(self.CONFIG_FILE.read_text())
            return Config.model_validate(data)
        except (OSError, ValueError) as e:
            # Unreadable or invalid config file, return defaults
            logger.warning(f"Invalid config file {self.CONFIG_FILE} ({e}), using defaults")
            return Config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback.

        Args:
            key: Config key to get.
            default: Default value if not set.

        Returns:
            Config value or default.
        """
        return self.config.get(key, default)

    def reset(self) -> None:
        """Drop the cached config so the next access reloads the file."""
        self._config = None


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def get_config() -> Config:
    """Get the current configuration."""
    return get_config_manager().config
