"""
Configuration management for tfdoc.

This module handles loading and accessing configuration values from config.yaml.
Command line flags override what is configured here.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from .models import ParserOptions


class ConfigManager:
    """
    Manages configuration loading and access for tfdoc.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration root must be a mapping, got {type(loaded).__name__}")
            self._config = loaded

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.debug(f"Using default configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "parser": {
                "debug": False,
                "stop_on_hcl_error": False,
                "allow_downloads": False,
                "tfvars_paths": []
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "file": None
            },
            "output": {
                "indent": 2
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "parser.debug")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("logging.level")  # Returns "INFO"
            config.get("parser.tfvars_paths")  # Returns []
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def parser_options(self) -> ParserOptions:
        """Get the parser options section as a model."""
        return ParserOptions(**self.get_section("parser"))

    @property
    def log_level(self) -> str:
        """Get the logging level name."""
        return self.get("logging.level", "INFO")

    @property
    def log_format(self) -> str:
        """Get the logging format string."""
        return self.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @property
    def log_filename(self) -> Optional[str]:
        """Get the log file name, None to log to the console only."""
        return self.get("logging.file")

    @property
    def output_indent(self) -> Optional[int]:
        """Get the JSON indentation of the output document."""
        return self.get("output.indent", 2)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
