"""Status command implementation.

Shows which curated packages are installed and which are missing.
"""

import json
from typing import Annotated

import typer

from aptsync.cli.display import create_status_table
from aptsync.cli.types import get_state, require_curated, require_installed
from aptsync.core.reconcile import reconcile
from aptsync.utils.formatting import console, print_info


def status(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Show installed/missing curated packages. [dim](alias: s)[/dim]

    Examples:
        apt-sync status
        apt-sync s --json
    """
    state = get_state(ctx)
    curated = require_curated(state)

    if not len(curated):
        if json_output:
            console.print_json(json.dumps({"curated": [], "installed": [], "missing": []}))
        else:
            print_info("No curated packages yet. Use 'apt-sync add <pkg>' to get started!")
        return

    installed = require_installed(state)
    result = reconcile(curated, installed, include_auto=state.config.diff.include_auto)

    if json_output:
        data = {
            "curated": list(curated.names),
            "installed": list(result.satisfied),
            "missing": list(result.missing),
        }
        console.print_json(json.dumps(data))
        return

    console.print(create_status_table(curated, result, installed))
    console.print(
        f"\n  [success]{len(result.satisfied)} installed[/success]"
        f"  [error]{len(result.missing)} missing[/error]"
    )
    if result.missing and not state.quiet:
        console.print("  [muted]Run 'apt-sync install' to install missing packages.[/muted]")
