"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest
from aptsync.core.config import (
    AppConfig,
    ConfigError,
    ConfigParseError,
    DiffConfig,
    load_config,
    save_config,
)
from aptsync.core.paths import APT_LOG_DIR, get_config_path
from pydantic import ValidationError


class TestAppConfig:
    """Tests for AppConfig model."""

    def test_defaults(self) -> None:
        """AppConfig has sensible defaults."""
        config = AppConfig()
        assert config.manifest_path is None
        assert config.history_log_dir == APT_LOG_DIR
        assert config.install_timeout_seconds == 300
        assert config.use_sudo is True
        assert config.diff.include_auto is False

    def test_timeout_bounds(self) -> None:
        """install_timeout_seconds must be within 30..3600."""
        with pytest.raises(ValidationError):
            AppConfig(install_timeout_seconds=5)
        with pytest.raises(ValidationError):
            AppConfig(install_timeout_seconds=7200)

    def test_forbids_unknown_keys(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            AppConfig.model_validate({"colour": "red"})


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing config file yields the defaults."""
        assert load_config(tmp_path / "config.toml") == AppConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values are read from TOML."""
        path = tmp_path / "config.toml"
        path.write_text(
            'manifest_path = "/srv/packages.txt"\n'
            "install_timeout_seconds = 600\n"
            "\n[diff]\ninclude_auto = true\n"
        )
        config = load_config(path)
        assert config.manifest_path == Path("/srv/packages.txt")
        assert config.install_timeout_seconds == 600
        assert config.diff.include_auto is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("manifest_path = \n")
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Valid TOML with invalid values raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("install_timeout_seconds = 1\n")
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path(self) -> None:
        """Without a path the XDG config file is used."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("use_sudo = false\n")
        assert load_config().use_sudo is False


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved config loads back unchanged."""
        path = tmp_path / "config.toml"
        config = AppConfig(
            manifest_path=Path("/srv/packages.txt"),
            install_timeout_seconds=900,
            use_sudo=False,
            diff=DiffConfig(include_auto=True),
        )
        save_config(config, path)
        assert load_config(path) == config

    def test_defaults_write_empty_file(self, tmp_path: Path) -> None:
        """Only non-default values are written."""
        path = tmp_path / "config.toml"
        save_config(AppConfig(), path)
        assert path.read_text() == ""

    def test_creates_parent_dir(self, tmp_path: Path) -> None:
        """The config directory is created when missing."""
        path = tmp_path / "a" / "b" / "config.toml"
        assert save_config(AppConfig(use_sudo=False), path) == path
        assert "use_sudo = false" in path.read_text()

    def test_parent_is_a_file(self, tmp_path: Path) -> None:
        """A regular file where the config directory should be raises ConfigError."""
        (tmp_path / "apt-sync").write_text("")
        with pytest.raises(ConfigError, match="Failed to write config"):
            save_config(AppConfig(use_sudo=False), tmp_path / "apt-sync" / "config.toml")

    def test_replace_failure_cleans_up(self, tmp_path: Path) -> None:
        """A failed rename raises ConfigError and leaves no temp file behind."""
        path = tmp_path / "config.toml"
        with (
            patch("aptsync.core.config.os.replace", side_effect=PermissionError("denied")),
            pytest.raises(ConfigError, match="denied"),
        ):
            save_config(AppConfig(use_sudo=False), path)
        assert list(tmp_path.iterdir()) == []
