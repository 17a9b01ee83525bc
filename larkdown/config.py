"""
Configuration management for larkdown.

This module handles loading and accessing configuration values from config.yaml.
Lark credentials may also be supplied through the LARK_APP_ID and
LARK_APP_SECRET environment variables, which take precedence over the file.
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict
import logging

from .models import RenderOptions


class ConfigManager:
    """
    Manages configuration loading and access for larkdown.
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
        if not self.config_path.exists():
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"expected a mapping at the top level, got {type(loaded).__name__}")
            self._config = self._merge(self._get_default_config(), loaded)
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError, ValueError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    @classmethod
    def _merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively overlay override onto base."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = cls._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "lark": {
                "app_id": "",
                "app_secret": "",
                "base_url": "https://open.feishu.cn",
                "timeout": 30.0,
                "page_size": 500
            },
            "render": {
                "media_dir": "",
                "media_url_prefix": "",
                "resolve_media_as_remote_url": True,
                "use_admonition_style": False,
                "image_html_tag": False,
                "max_depth": 256
            },
            "paths": {
                "output_file": "dist/README.md",
                "log_file": "larkdown.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "lark.timeout")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("lark.base_url")  # Returns "https://open.feishu.cn"
            config.get("render.use_admonition_style")  # Returns False
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
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def lark_app_id(self) -> str:
        return os.environ.get("LARK_APP_ID") or self.get("lark.app_id", "")

    @property
    def lark_app_secret(self) -> str:
        return os.environ.get("LARK_APP_SECRET") or self.get("lark.app_secret", "")

    @property
    def lark_base_url(self) -> str:
        return self.get("lark.base_url", "https://open.feishu.cn")

    @property
    def lark_timeout(self) -> float:
        return float(self.get("lark.timeout", 30.0))

    @property
    def page_size(self) -> int:
        """Blocks requested per page from the docx API."""
        return int(self.get("lark.page_size", 500))

    @property
    def output_filename(self) -> str:
        return self.get("paths.output_file", "dist/README.md")

    @property
    def log_filename(self) -> str:
        return self.get("paths.log_file", "larkdown.log")

    def render_options(self) -> RenderOptions:
        """
        Build render options from the ``render`` section.

        Returns:
            The RenderOptions, validated by pydantic
        """
        known = RenderOptions.model_fields.keys()
        section = {key: value for key, value in self.get_section("render").items() if key in known}
        return RenderOptions(**section)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
