"""Configuration file management.

Settings live in a small JSON document::

    {
      "version": "1.0.0",
      "git": {"executable": "git", "remote": "origin", "timeout": null},
      "logging": {"level": "INFO"}
    }

Missing keys fall back to :data:`DEFAULT_CONFIG`. Keys are addressed with dot
notation (``git.remote``).
"""

import copy
import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_VERSION = "1.0.0"

CONFIG_ENV_VAR = "TREES_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CONFIG: dict[str, Any] = {
    "version": CONFIG_VERSION,
    "git": {
        "executable": "git",
        "remote": "origin",
        "timeout": None,  # seconds; None waits for git indefinitely
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigurationError(Exception):
    """Raised for unreadable or invalid configuration."""


@dataclass(frozen=True)
class GitSettings:
    """How git is invoked."""

    executable: str = "git"
    remote: str = "origin"
    timeout: float | None = None


def default_config_path() -> Path:
    """Return the config path from $TREES_CONFIG or ~/.config/trees/config.json."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "trees" / "config.json"


def _non_empty_string(key: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{key} must be a non-empty string")


def _positive_number_or_null(key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        raise ConfigurationError(f"{key} must be a positive number or null")


def _log_level(key: str, value: Any) -> None:
    if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
        raise ConfigurationError(f"{key} must be one of {', '.join(LOG_LEVELS)}")


def _string(key: str, value: Any) -> None:
    if not isinstance(value, str):
        raise ConfigurationError(f"{key} must be a string")


_VALIDATORS: dict[str, Callable[[str, Any], None]] = {
    "version": _string,
    "git.executable": _non_empty_string,
    "git.remote": _non_empty_string,
    "git.timeout": _positive_number_or_null,
    "logging.level": _log_level,
}

_SECTIONS = ("git", "logging")


def _merged(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep copy of ``defaults`` with ``overrides`` laid over it."""
    result = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _merged(result[key], value)
        else:
            result[key] = value
    return result


_MISSING = object()


def _lookup(config: dict[str, Any], key: str) -> Any:
    node: Any = config
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _validate(config: Any) -> None:
    """Check section types and every known key that is present.

    Raises:
        ConfigurationError: If config is invalid
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a dictionary")

    for section in _SECTIONS:
        if not isinstance(config.get(section, {}), dict):
            raise ConfigurationError(f"{section.capitalize()} settings must be a dictionary")

    for key, validate in _VALIDATORS.items():
        value = _lookup(config, key)
        if value is not _MISSING:
            validate(key, value)


class ConfigManager:
    """Reads, validates and writes the trees configuration file."""

    def __init__(self, config_path: Path | None = None):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file. Defaults to default_config_path()
        """
        self.config_path = config_path or default_config_path()
        self._config: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """Load configuration from file, filling gaps from the defaults.

        Returns:
            Configuration dictionary

        Raises:
            ConfigurationError: If the file cannot be read or holds invalid values
        """
        if not self.config_path.exists():
            logger.debug(f"No config at {self.config_path}, using defaults")
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            return self._config

        try:
            raw = json.loads(self.config_path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        _validate(raw)
        self._config = _merged(DEFAULT_CONFIG, raw)

        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

    def save(self, config: dict[str, Any] | None = None) -> None:
        """Write configuration to disk, creating parent directories.

        Args:
            config: Configuration to store. If None, the current one is written.

        Raises:
            ConfigurationError: If the configuration is invalid or cannot be written
        """
        if config is not None:
            _validate(config)
            self._config = config
        elif not self._config:
            self._config = copy.deepcopy(DEFAULT_CONFIG)

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(self._config, indent=2) + "\n")
        except OSError as e:
            raise ConfigurationError(f"Failed to save config: {e}") from e
        logger.debug(f"Saved configuration to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, or ``default`` if it is absent."""
        if not self._config:
            self.load()

        value = _lookup(self._config, key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key.

        Intermediate sections are created as needed. The stored configuration
        is left unchanged when the new value is rejected.

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        if not self._config:
            self.load()

        candidate = copy.deepcopy(self._config)
        *parents, leaf = key.split(".")
        node = candidate
        for depth, part in enumerate(parents, start=1):
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                prefix = ".".join(parents[:depth])
                raise ConfigurationError(f"Cannot set {key}: {prefix} is not a section")
        node[leaf] = value

        _validate(candidate)
        self._config = candidate

    def git_settings(self) -> GitSettings:
        """Settings used to build a GitService."""
        return GitSettings(
            executable=self.get("git.executable", "git"),
            remote=self.get("git.remote", "origin"),
            timeout=self.get("git.timeout"),
        )

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")
