"""Config command implementation.

Shows the effective configuration and edits the stored manifest path.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from aptsync.cli.types import get_state
from aptsync.core.config import ConfigError, save_config
from aptsync.core.paths import get_config_path
from aptsync.utils.formatting import console, create_table, print_error, print_success

app = typer.Typer(
    help="Show or change apt-sync settings.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration and resolved paths."""
    state = get_state(ctx)
    config = state.config

    table = create_table("Configuration")
    table.add_column("Setting", style="info", no_wrap=True)
    table.add_column("Value")

    table.add_row("config file", str(get_config_path()))
    table.add_row("manifest", str(state.manifest_path))
    table.add_row("history_log_dir", str(config.history_log_dir))
    table.add_row("install_timeout_seconds", str(config.install_timeout_seconds))
    table.add_row("use_sudo", str(config.use_sudo).lower())
    table.add_row("diff.include_auto", str(config.diff.include_auto).lower())

    console.print(table)


@app.command("set-manifest")
def set_manifest(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Curated list file to use by default."),
    ],
) -> None:
    """Store the default curated list path in the config file."""
    state = get_state(ctx)

    try:
        config = state.config.model_copy(update={"manifest_path": path.expanduser().absolute()})
        saved = save_config(config)
    except ConfigError as e:
        print_error(f"Failed to update config: {escape(str(e))}")
        raise typer.Exit(code=1) from e

    print_success(f"Manifest path set to {config.manifest_path} ({saved})")
