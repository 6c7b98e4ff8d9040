#!/usr/bin/env python3
"""Layered configuration for antwalk.

This module provides configuration management with:
- A precedence hierarchy (defaults, config file, environment, CLI, runtime)
- YAML config files
- Environment variable overrides (ANTWALK_*)
- Validation of every layer before it is accepted
- Deep merging of nested sections

Example:
    >>> config = ConfigManager()
    >>> config.load_file("antwalk.yaml")
    >>> config.get("selection.includes", default=[])
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from antwalk.core.constants import DEFAULT_CONFIG, DEFAULT_EXCLUDES, ConfigKey, ErrorCode
from antwalk.core.validators import ValidationError, validate_config

ENV_PREFIX = "ANTWALK_"
ENV_NESTING_SEPARATOR = "__"
# Keys whose environment values are comma separated lists
_LIST_KEYS = frozenset({ConfigKey.INCLUDES, ConfigKey.EXCLUDES})
# Keys whose environment values are taken verbatim
_STRING_KEYS = frozenset({ConfigKey.ROOT, ConfigKey.FORMAT, ConfigKey.LEVEL, ConfigKey.FILE})


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Values are looked up from the highest precedence layer down:
    1. Compiled defaults (lowest)
    2. User config file (YAML)
    3. Environment variables (ANTWALK_SECTION__KEY)
    4. CLI arguments
    5. Runtime updates (highest)
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML config file to load
            load_environment: Whether to read ANTWALK_* environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded, parsed or validated
        """
        path = Path(file_path).expanduser()

        if not path.is_file():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error reading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary, replacing that source's layer.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level

        Raises:
            ConfigError: If the dictionary fails validation
        """
        try:
            validate_config(config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration ({source.name.lower()}): {e}", e.error_code)

        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Format: ANTWALK_SECTION__KEY=value, e.g.
        ANTWALK_SELECTION__CASE_SENSITIVE=false or ANTWALK_LOGGING__LEVEL=DEBUG.
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split(ENV_NESTING_SEPARATOR)
            if not all(parts):
                continue

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
                if not isinstance(current, dict):
                    break
            else:
                leaf = parts[-1]
                if leaf in _LIST_KEYS:
                    current[leaf] = [p.strip() for p in value.split(",") if p.strip()]
                elif leaf in _STRING_KEYS:
                    current[leaf] = value
                else:
                    current[leaf] = self._parse_env_value(value)

        if env_config:
            self.load_dict(env_config, ConfigSource.ENVIRONMENT)

    def _parse_env_value(self, value: str) -> Any:
        """Parse an environment value as bool, int or str."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "selection.includes")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})
            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get_includes(self) -> List[str]:
        return list(self.get(f"{ConfigKey.SELECTION}.{ConfigKey.INCLUDES}", []))

    def get_excludes(self) -> List[str]:
        """Exclude patterns, with the default excludes appended when enabled."""
        excludes = list(self.get(f"{ConfigKey.SELECTION}.{ConfigKey.EXCLUDES}", []))
        if self.get(f"{ConfigKey.SELECTION}.{ConfigKey.DEFAULT_EXCLUDES}", False):
            excludes.extend(p for p in DEFAULT_EXCLUDES if p not in excludes)
        return excludes

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]
