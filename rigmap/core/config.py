"""Configuration management system"""

import copy
from pathlib import Path
from typing import Any, Optional
import yaml


DEFAULT_CONFIG = {
    "app": {
        "name": "rigmap",
        "version": "0.1.0",
        "log_level": "INFO",
    },
    "logging": {
        "log_file": None,
        "log_dir": "logs",
    },
    "mapping": {
        "filter_structural": True,
        "preset": None,
    },
    "output": {
        "format": "table",
        "color": True,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into a copy of base, recursing into nested dicts.

    A section left empty in the file (``mapping:`` with every key commented
    out) loads as None and keeps its defaults.

    Raises:
        ValueError: a section that is a mapping in base is something else in override
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict):
            if value is None:
                continue
            if not isinstance(value, dict):
                raise ValueError(f"Config section '{key}' must be a mapping, got {type(value).__name__}")
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Centralized configuration manager with dot-notation access."""

    _instance: Optional["Config"] = None
    _config: dict = {}

    def __new__(cls, config_path: Optional[str] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if self._initialized and config_path is None:
            return

        if config_path is None:
            config_path = self._find_config()

        self._load(config_path)
        self._initialized = True

    def _find_config(self) -> Optional[str]:
        """Find config.yaml in project root, None when there is none."""
        current = Path(__file__).parent
        for _ in range(5):
            config_file = current / "config.yaml"
            if config_file.exists():
                return str(config_file)
            current = current.parent

        return None

    def _load(self, config_path: Optional[str]) -> None:
        """Load configuration from YAML file over the built-in defaults.

        Raises:
            FileNotFoundError: config_path was given but does not exist
            yaml.YAMLError: the file is not valid YAML
            ValueError: the root or a known section is not a mapping
        """
        loaded = {}
        if config_path is not None:
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config root must be a mapping: {config_path}")
        self._config = _deep_merge(DEFAULT_CONFIG, loaded)
        self._config_path = config_path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value using dot notation.

        Example:
            config.get("mapping.filter_structural", True)
            config.get("output.format")
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set config value using dot notation (runtime only, not persisted)."""
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    @property
    def path(self) -> Optional[str]:
        return self._config_path

    @property
    def app(self) -> dict:
        return self._config.get("app", {})

    @property
    def mapping(self) -> dict:
        return self._config.get("mapping", {})

    @property
    def output(self) -> dict:
        return self._config.get("output", {})

    def __repr__(self) -> str:
        return f"Config({self._config_path})"
