"""
Configuration loader with support for YAML and environment variables.
Following Single Responsibility Principle - only handles configuration.
"""

import os
import yaml
import logging
from typing import Any, Dict, Optional
from pathlib import Path

from dotenv import load_dotenv

from sheetstream.core.exceptions import ConfigurationError

logger: logging.Logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Loads and manages configuration from YAML files and environment variables.
    Single Responsibility: Configuration management only.
    """

    # Values that must stay strings even when they look numeric
    _RAW_STRING_PATHS = ("csv.field_delimiter", "csv.field_enclosure", "logging.level")

    def __init__(self, config_path: str = "config.yaml", load_env_file: bool = True) -> None:
        """
        Initialize config loader.

        Args:
            config_path: Path to YAML configuration file.
            load_env_file: Whether to read a .env file into the environment.
        """
        self._config_path: str = config_path
        self._load_env_file: bool = load_env_file
        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from file."""
        if self._load_env_file:
            load_dotenv()

        path = Path(self._config_path)
        loaded: Dict[str, Any] = {}

        if not path.exists():
            logger.warning(f"Config file not found: {self._config_path}, using defaults")
        else:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from: {self._config_path}")
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse config file: {str(e)}")
            except OSError as e:
                raise ConfigurationError(f"Failed to load config file: {str(e)}")

            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    f"Config file must contain a mapping: {self._config_path}"
                )

        # Merge with defaults
        defaults: Dict[str, Any] = self._get_defaults()
        self._config = self._deep_merge(defaults, loaded)

        # Override with environment variables
        self._apply_env_overrides()

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "csv": {
                "field_delimiter": ",",
                "field_enclosure": '"',
                "should_add_bom": True
            },
            "writer": {
                "flush_threshold": 500
            },
            "logging": {
                "level": "INFO",
                "file": None
            }
        }

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result: Dict[str, Any] = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        # Map of env vars to config paths
        env_mapping: Dict[str, str] = {
            "SHEETSTREAM_FIELD_DELIMITER": "csv.field_delimiter",
            "SHEETSTREAM_FIELD_ENCLOSURE": "csv.field_enclosure",
            "SHEETSTREAM_ADD_BOM": "csv.should_add_bom",
            "SHEETSTREAM_FLUSH_THRESHOLD": "writer.flush_threshold",
            "SHEETSTREAM_LOG_LEVEL": "logging.level",
        }

        for env_var, config_path in env_mapping.items():
            value: Optional[str] = os.environ.get(env_var)
            if value:
                self._set_nested(config_path, value)

    def _set_nested(self, path: str, value: Any) -> None:
        """Set a nested configuration value using dot notation."""
        keys: list[str] = path.split(".")
        current: Dict[str, Any] = self._config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        # Type conversion
        if isinstance(value, str) and path not in self._RAW_STRING_PATHS:
            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            elif value.isdigit():
                value = int(value)
            else:
                try:
                    value = float(value)
                except ValueError:
                    pass

        current[keys[-1]] = value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., "csv.field_delimiter").
            value: Value to set.
        """
        self._set_nested(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., "writer.flush_threshold").
            default: Default value if key not found.

        Returns:
            Configuration value.
        """
        keys: list[str] = key.split(".")
        current: Any = self._config

        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return default

        return current

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Section name (e.g., "csv").

        Returns:
            Configuration dictionary for the section.
        """
        return self.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load()
        logger.info("Configuration reloaded")

    @property
    def flush_threshold(self) -> int:
        """
        Get the configured flush threshold.

        Raises:
            ConfigurationError: If the value is not a positive integer.
        """
        value: Any = self.get("writer.flush_threshold", 500)
        try:
            threshold = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"writer.flush_threshold must be an integer, got {value!r}")
        if isinstance(value, bool) or threshold < 1 or threshold != value:
            raise ConfigurationError(f"writer.flush_threshold must be a positive integer, got {value!r}")
        return threshold
