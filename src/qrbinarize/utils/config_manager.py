"""
QrBinarize - Configuration Manager

This module provides JSON-based settings management for the binarizer
defaults used by the command line.
"""

import copy
import json
import os
from typing import Any, Final

from qrbinarize.config import CONFIG_FILE_PATH, DEFAULT_METHOD
from qrbinarize.constants import DEFAULT_MEAN_BIAS, DEFAULT_SAMPLE_STRIDE, DEFAULT_WINDOW_RADIUS
from qrbinarize.utils.logger import logger

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "binarizer": {
        "method": DEFAULT_METHOD,
        "window_radius": DEFAULT_WINDOW_RADIUS,
        "sample_stride": DEFAULT_SAMPLE_STRIDE,
        "mean_bias": DEFAULT_MEAN_BIAS,
        "inverted": False,
    },
}


class ConfigManager:
    """Manages settings in JSON format.

    Missing keys fall back to DEFAULT_CONFIG. Nothing is written to disk
    until save() is called or set() is asked to persist.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or fall back to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if not os.path.exists(self.config_path):
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config {self.config_path}: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Ignoring config {self.config_path}: top level is not an object")
            return

        self._merge_defaults(loaded, self._config)
        self._config = loaded
        logger.debug(f"Configuration loaded from {self.config_path}")

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = value
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            directory = os.path.dirname(self.config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value (e.g., "binarizer.method")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config

        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()
