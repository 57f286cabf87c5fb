"""Configuration loading and management."""
import logging
import os
from dataclasses import fields
from typing import Optional

import yaml

from ..core.errors import ConfigError
from .collection_config import CollectionConfig
from .config import Config
from .display_config import DisplayConfig
from .threshold_config import ThresholdConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

_SECTIONS = {
    "thresholds": ThresholdConfig,
    "collection": CollectionConfig,
    "display": DisplayConfig,
}


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Config:
        """Load configuration from a YAML file; missing keys take defaults."""
        path = config_path or DEFAULT_CONFIG_PATH
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

        logger.debug("Loaded configuration from %s", path)
        return ConfigManager.from_dict(config_data or {})

    @staticmethod
    def from_dict(config_data: dict) -> Config:
        """Build a Config from parsed YAML data."""
        if not isinstance(config_data, dict):
            raise ConfigError("configuration root must be a mapping")

        unknown = set(config_data) - set(_SECTIONS)
        if unknown:
            raise ConfigError(f"unknown configuration sections: {sorted(unknown)}")

        sections = {}
        for name, section_cls in _SECTIONS.items():
            section_data = config_data.get(name) or {}
            if not isinstance(section_data, dict):
                raise ConfigError(f"section '{name}' must be a mapping")
            known = {f.name for f in fields(section_cls)}
            extra = set(section_data) - known
            if extra:
                raise ConfigError(f"unknown keys in '{name}': {sorted(extra)}")
            try:
                sections[name] = section_cls(**section_data)
            except TypeError as exc:
                raise ConfigError(f"invalid values in '{name}': {exc}") from exc

        return Config(**sections)
