"""Configuration management."""

from trees.config.manager import ConfigManager, ConfigurationError

__all__ = ["ConfigManager", "ConfigurationError"]
