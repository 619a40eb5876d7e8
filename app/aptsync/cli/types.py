"""Shared types and utilities for CLI commands.

This module holds the per-invocation application state and the helpers
that load the curated list and probe the system, converting their errors
into user-facing messages and exit codes.
"""

from dataclasses import dataclass, field
from pathlib import Path

import typer
from rich.markup import escape

from aptsync.core.config import AppConfig, ConfigError, load_config
from aptsync.core.manifest import ManifestError, load_manifest, save_manifest
from aptsync.core.paths import get_manifest_path
from aptsync.models.manifest import CuratedSet
from aptsync.models.package import InstalledSet
from aptsync.operators.apt import AptOperator
from aptsync.operators.base import Operator
from aptsync.scanners.apt import AptScanner
from aptsync.scanners.base import ProbeError, Scanner
from aptsync.utils.formatting import print_error


@dataclass
class AppState:
    """Options and configuration shared by all commands of one invocation.

    The config file is read on first access so that ``--help`` on a
    subcommand works even when the file is broken.

    Attributes:
        manifest_override: Path given with ``--file``, if any.
        verbose: Verbose output requested.
        quiet: Suppress hints and non-essential output.
    """

    manifest_override: Path | None = None
    verbose: bool = False
    quiet: bool = False
    _config: AppConfig | None = field(default=None, repr=False)

    @property
    def config(self) -> AppConfig:
        """Loaded application configuration.

        Raises:
            typer.Exit: If the config file is invalid.
        """
        if self._config is None:
            try:
                self._config = load_config()
            except ConfigError as e:
                print_error(escape(str(e)))
                raise typer.Exit(code=1) from e
        return self._config

    @property
    def manifest_path(self) -> Path:
        """Resolve the curated list path (``--file`` wins over everything)."""
        if self.manifest_override is not None:
            return self.manifest_override
        return get_manifest_path(self.config.manifest_path)

    def scanner(self) -> Scanner:
        """Create the inventory scanner."""
        return AptScanner(log_dir=self.config.history_log_dir)

    def operator(self) -> Operator:
        """Create the install operator."""
        return AptOperator(
            timeout=self.config.install_timeout_seconds,
            use_sudo=self.config.use_sudo,
        )


def get_state(ctx: typer.Context) -> AppState:
    """Return the AppState stored by the main callback.

    The config file is loaded here so a broken file fails every command.
    """
    state = ctx.ensure_object(AppState)
    state.config  # noqa: B018
    return state


def require_curated(state: AppState) -> CuratedSet:
    """Load the curated list or exit with a helpful error message.

    Raises:
        typer.Exit: If the manifest cannot be read.
    """
    try:
        return load_manifest(state.manifest_path)
    except ManifestError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def persist_curated(state: AppState, curated: CuratedSet) -> Path:
    """Save the curated list or exit with a helpful error message.

    Raises:
        typer.Exit: If the manifest cannot be written.
    """
    try:
        return save_manifest(curated, state.manifest_path)
    except ManifestError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def require_installed(state: AppState) -> InstalledSet:
    """Query installed packages or exit with the probe diagnostic.

    Raises:
        typer.Exit: If the system inventory cannot be queried.
    """
    try:
        return state.scanner().query_installed()
    except ProbeError as e:
        print_error(f"Cannot query installed packages: {escape(str(e))}")
        raise typer.Exit(code=1) from e
