"""CLI commands for apt-sync.

This package contains all subcommand implementations.
"""

from aptsync.cli.commands import config, diff, install, packages, snap, status, why

__all__ = ["config", "diff", "install", "packages", "snap", "status", "why"]
