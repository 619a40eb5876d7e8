"""Application configuration.

Configuration is stored in ~/.config/apt-sync/config.toml. Every setting
is optional; a missing file yields the defaults.

Example config.toml::

    manifest_path = "~/dotfiles/packages.txt"
    install_timeout_seconds = 600

    [diff]
    include_auto = false
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aptsync.core.paths import APT_LOG_DIR, get_config_path

DEFAULT_INSTALL_TIMEOUT = 300


class DiffConfig(BaseModel):
    """Settings for drift detection.

    Attributes:
        include_auto: Report automatically installed dependencies as extraneous.
    """

    model_config = ConfigDict(extra="forbid")

    include_auto: Annotated[
        bool,
        Field(description="Treat auto-installed dependencies as drift"),
    ] = False


class AppConfig(BaseModel):
    """Top-level apt-sync configuration.

    Attributes:
        manifest_path: Curated package list location (``$APT_SYNC_FILE`` wins).
        history_log_dir: Directory holding apt's history.log files.
        install_timeout_seconds: Timeout for a single package install.
        use_sudo: Prefix install commands with sudo when not running as root.
        diff: Drift detection settings.
    """

    model_config = ConfigDict(extra="forbid")

    manifest_path: Annotated[
        Path | None,
        Field(description="Curated package list path"),
    ] = None
    history_log_dir: Annotated[
        Path,
        Field(description="Directory containing apt history logs"),
    ] = APT_LOG_DIR
    install_timeout_seconds: Annotated[
        int,
        Field(ge=30, le=3600, description="Per-package install timeout (30-3600)"),
    ] = DEFAULT_INSTALL_TIMEOUT
    use_sudo: Annotated[
        bool,
        Field(description="Escalate install commands with sudo"),
    ] = True
    diff: Annotated[
        DiffConfig,
        Field(default_factory=DiffConfig, description="Drift detection settings"),
    ]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AppConfig. Defaults when the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AppConfig to save.
        path: Target path. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def _config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to a dictionary for TOML serialization.

    Only non-default values are written to keep the file clean.
    """
    result: dict[str, Any] = {}

    if config.manifest_path is not None:
        result["manifest_path"] = str(config.manifest_path)
    if config.history_log_dir != APT_LOG_DIR:
        result["history_log_dir"] = str(config.history_log_dir)
    if config.install_timeout_seconds != DEFAULT_INSTALL_TIMEOUT:
        result["install_timeout_seconds"] = config.install_timeout_seconds
    if not config.use_sudo:
        result["use_sudo"] = False
    if config.diff.include_auto:
        result["diff"] = {"include_auto": True}

    return result
