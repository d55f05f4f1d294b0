"""
Configuration utility for the UI engine.
"""

import copy
import logging
import os
import json
from typing import Dict, Any, Optional
import threading

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "viewport": {
        "width": 800,
        "height": 600
    },
    "render": {
        "background": "#000000",
        "output": "layout.png"
    },
    "logging": {
        "console_level": "INFO",
        "file": None
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for the UI engine."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config file
        """
        if not config_path:
            home_dir = os.path.expanduser("~")
            config_path = os.path.join(home_dir, ".ui_engine", "config.json")

        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def load(self) -> None:
        """Load configuration from file, layered over the defaults."""
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("top-level value must be an object")
                with self._lock:
                    self.config = _merge(DEFAULT_CONFIG, data)
                logger.debug(f"Configuration loaded from {self.config_path}")
            else:
                logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
                self._set_defaults()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            self._set_defaults()

    def save(self) -> None:
        """Save configuration to file."""
        try:
            with self._lock:
                config_copy = copy.deepcopy(self.config)

            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(config_copy, f, indent=4)

            logger.debug(f"Configuration saved to {self.config_path}")
        except OSError as e:
            logger.error(f"Error saving configuration: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'viewport.width')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]

            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'viewport.width')
            value: Configuration value
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]

            config[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return False
                config = config[part]

            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        """
        Get all configuration values.

        Returns:
            Dict[str, Any]: Dictionary of all configuration values
        """
        with self._lock:
            return copy.deepcopy(self.config)

    def viewport_size(self) -> tuple:
        """
        Get the configured viewport size.

        Returns:
            tuple: (width, height) in pixels
        """
        return (int(self.get("viewport.width", 800)), int(self.get("viewport.height", 600)))

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        with self._lock:
            self.config = copy.deepcopy(DEFAULT_CONFIG)

        logger.debug("Default configuration set")
