"""CLI package for apt-sync.

This package contains the Typer application and all subcommands.
"""

from aptsync.cli.main import app

__all__ = ["app"]
