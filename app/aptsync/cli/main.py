"""Main CLI application entry point.

Defines the Typer application, global options and command aliases.
"""

from pathlib import Path
from typing import Annotated

import typer

from aptsync import __version__
from aptsync.cli.commands import config, diff, install, packages, snap, status, why
from aptsync.cli.types import AppState
from aptsync.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="apt-sync",
    help="Keep a curated list of APT packages in sync with the system.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apt-sync version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    manifest_file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Curated package list to use (overrides $APT_SYNC_FILE).",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """apt-sync - curated APT package manager.

    Keep the packages you actually care about in a plain text file and
    reconcile it with what is installed.
    """
    configure_logging(verbose)

    # Store options in context for subcommands; config loads on first use
    ctx.obj = AppState(
        manifest_override=manifest_file.expanduser() if manifest_file is not None else None,
        verbose=verbose,
        quiet=quiet,
    )


# Register commands, each with a short hidden alias
_COMMANDS = (
    ("status", "s", status.status),
    ("list", "ls", packages.list_packages),
    ("add", "a", packages.add_packages),
    ("remove", "rm", packages.remove_packages),
    ("install", "i", install.install_packages),
    ("diff", "d", diff.diff_packages),
    ("snap", None, snap.snap_packages),
    ("why", "w", why.why_packages),
)

for _name, _alias, _command in _COMMANDS:
    app.command(_name)(_command)
    if _alias is not None:
        app.command(_alias, hidden=True)(_command)

app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
