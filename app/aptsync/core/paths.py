"""XDG-compliant path management for apt-sync.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage.

XDG defaults:
- Config: ~/.config/apt-sync/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "apt-sync"

# Environment variable that points directly at the curated package list
MANIFEST_ENV_VAR = "APT_SYNC_FILE"

MANIFEST_FILENAME = "packages.txt"

# Default location of the apt history logs
APT_LOG_DIR = Path("/var/log/apt")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/apt-sync/ (or XDG_CONFIG_HOME/apt-sync/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_default_manifest_path() -> Path:
    """Get the default curated package list path.

    Returns:
        Path to ~/.config/apt-sync/packages.txt.
    """
    return get_config_dir() / MANIFEST_FILENAME


def get_manifest_path(configured: Path | None = None) -> Path:
    """Resolve the curated package list path.

    Resolution order:
    1. ``$APT_SYNC_FILE``
    2. ``configured`` (the ``manifest_path`` config setting)
    3. ``~/.config/apt-sync/packages.txt``

    Args:
        configured: Path from the configuration file, if any.

    Returns:
        Path to the manifest file (it may not exist yet).
    """
    override = os.environ.get(MANIFEST_ENV_VAR)
    if override:
        return Path(override).expanduser()
    if configured is not None:
        return configured.expanduser()
    return get_default_manifest_path()


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/apt-sync/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/apt-sync/theme.toml.
    """
    return get_config_dir() / "theme.toml"
