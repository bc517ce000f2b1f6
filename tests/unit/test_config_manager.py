"""Tests for ConfigManager."""

import json
from pathlib import Path

import pytest

from trees.config.manager import (
    CONFIG_ENV_VAR,
    CONFIG_VERSION,
    DEFAULT_CONFIG,
    ConfigManager,
    ConfigurationError,
    GitSettings,
    default_config_path,
)


class TestConfigManager:
    """Test ConfigManager functionality."""

    def test_default_path_from_environment(self, tmp_path, monkeypatch):
        """Test $TREES_CONFIG overrides the default location."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.json"))
        assert ConfigManager().config_path == tmp_path / "custom.json"

    def test_default_path_in_home(self, tmp_path, monkeypatch):
        """Test the fallback location under ~/.config."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".config" / "trees" / "config.json"

    def test_init_custom_path(self, tmp_path):
        """Test initialization with custom path."""
        custom_path = tmp_path / "custom" / "config.json"
        manager = ConfigManager(custom_path)
        assert manager.config_path == custom_path

    def test_load_default_when_no_file(self, tmp_path):
        """Test loading defaults when config file doesn't exist."""
        manager = ConfigManager(tmp_path / "nonexistent" / "config.json")

        config = manager.load()

        assert config == DEFAULT_CONFIG
        assert config["version"] == CONFIG_VERSION
        assert config["git"]["remote"] == "origin"
        assert config["git"]["timeout"] is None

    def test_load_does_not_share_defaults(self, tmp_path):
        """Test mutating loaded config leaves DEFAULT_CONFIG untouched."""
        manager = ConfigManager(tmp_path / "config.json")
        manager.load()["git"]["remote"] = "changed"

        assert DEFAULT_CONFIG["git"]["remote"] == "origin"

    def test_load_existing_config_merges_defaults(self, tmp_path):
        """Test partial files are completed from the defaults."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"git": {"remote": "upstream", "timeout": 30}}))

        config = ConfigManager(config_path).load()

        assert config["git"]["remote"] == "upstream"
        assert config["git"]["timeout"] == 30
        assert config["git"]["executable"] == "git"
        assert config["logging"]["level"] == "INFO"
        assert config["version"] == CONFIG_VERSION

    def test_load_invalid_json(self, tmp_path):
        """Test loading invalid JSON raises error."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{ invalid json }")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigManager(config_path).load()

    def test_save_and_reload(self, tmp_path):
        """Test saving configuration."""
        config_path = tmp_path / "nested" / "dirs" / "config.json"
        manager = ConfigManager(config_path)

        manager.save({"version": CONFIG_VERSION, "git": {"executable": "/opt/git/bin/git"}})

        assert json.loads(config_path.read_text())["git"]["executable"] == "/opt/git/bin/git"
        assert ConfigManager(config_path).get("git.executable") == "/opt/git/bin/git"

    def test_get_value(self, tmp_path):
        """Test getting configuration values with dot notation."""
        manager = ConfigManager(tmp_path / "config.json")

        assert manager.get("version") == CONFIG_VERSION
        assert manager.get("git.remote") == "origin"
        assert manager.get("git.missing", "fallback") == "fallback"
        assert manager.get("nonexistent.deeper") is None

    def test_set_value(self, tmp_path):
        """Test setting configuration values."""
        manager = ConfigManager(tmp_path / "config.json")

        manager.set("git.timeout", 12.5)
        manager.set("logging.level", "debug")

        assert manager.get("git.timeout") == 12.5
        assert manager.get("logging.level") == "debug"

    @pytest.mark.parametrize(
        "key,value,message",
        [
            ("git.executable", "", "git.executable must be a non-empty string"),
            ("git.remote", 5, "git.remote must be a non-empty string"),
            ("git.timeout", 0, "git.timeout must be a positive number"),
            ("git.timeout", -3, "git.timeout must be a positive number"),
            ("git.timeout", True, "git.timeout must be a positive number"),
            ("git.timeout", "10", "git.timeout must be a positive number"),
            ("logging.level", "LOUD", "logging.level must be one of"),
        ],
    )
    def test_set_invalid_value(self, tmp_path, key, value, message):
        """Test set validates the resulting configuration."""
        manager = ConfigManager(tmp_path / "config.json")

        with pytest.raises(ConfigurationError, match=message):
            manager.set(key, value)

    def test_rejected_set_keeps_previous_value(self, tmp_path):
        """Test a rejected value is never stored or saved."""
        config_path = tmp_path / "config.json"
        manager = ConfigManager(config_path)
        manager.set("git.timeout", 30)

        with pytest.raises(ConfigurationError):
            manager.set("git.timeout", -3)

        assert manager.get("git.timeout") == 30
        manager.save()
        assert ConfigManager(config_path).load()["git"]["timeout"] == 30

    def test_set_through_scalar_value(self, tmp_path):
        """Test a key whose parent is not a section is rejected."""
        manager = ConfigManager(tmp_path / "config.json")

        with pytest.raises(ConfigurationError, match="version is not a section"):
            manager.set("version.major", 1)

        assert manager.get("version") == CONFIG_VERSION

    def test_validate_invalid_config_type(self, tmp_path):
        """Test validation fails for non-dict config."""
        manager = ConfigManager(tmp_path / "config.json")

        with pytest.raises(ConfigurationError, match="must be a dictionary"):
            manager.save([])  # List instead of dict

    def test_validate_invalid_git_section(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"git": "origin"}))

        with pytest.raises(ConfigurationError, match="Git settings must be a dictionary"):
            ConfigManager(config_path).load()

    def test_reset_to_defaults(self, tmp_path):
        """Test resetting configuration to defaults."""
        manager = ConfigManager(tmp_path / "config.json")
        manager.set("git.remote", "upstream")

        manager.reset_to_defaults()

        assert manager.get("git.remote") == "origin"
        assert manager._config == DEFAULT_CONFIG


def test_full_workflow(tmp_path: Path):
    """Test complete configuration workflow."""
    config_path = tmp_path / "trees" / "config.json"
    manager = ConfigManager(config_path)

    manager.load()
    manager.set("git.remote", "upstream")
    manager.set("git.timeout", 60)
    manager.save()

    reloaded = ConfigManager(config_path)
    assert reloaded.get("git.remote") == "upstream"
    assert reloaded.get("git.timeout") == 60
    assert reloaded.get("logging.level") == "INFO"


def test_git_settings(tmp_path: Path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"git": {"executable": "/opt/git", "timeout": 2.5}}))

    settings = ConfigManager(config_path).git_settings()

    assert settings == GitSettings(executable="/opt/git", remote="origin", timeout=2.5)
