"""Diff command implementation.

Shows drift in both directions: packages on the system that are not
curated, and curated packages that are not installed.
"""

import json
from typing import Annotated

import typer

from aptsync.cli.display import create_diff_table, print_diff_summary
from aptsync.cli.types import get_state, require_curated, require_installed
from aptsync.core.reconcile import reconcile
from aptsync.utils.formatting import console, print_success


def diff_packages(
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
    """Compare the curated list with the installed packages. [dim](alias: d)[/dim]

    Difference types:
      [?] Installed but not curated
      [✘] Curated but not installed

    Only manually installed packages are reported as not curated unless
    ``diff.include_auto`` is enabled in the config file.

    Examples:
        apt-sync diff
        apt-sync d --json
    """
    state = get_state(ctx)
    curated = require_curated(state)
    installed = require_installed(state)

    result = reconcile(curated, installed, include_auto=state.config.diff.include_auto)

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
        return

    if result.is_in_sync:
        print_success("System is in sync with the curated list.")
        return

    console.print(create_diff_table(result))
    print_diff_summary(result)
    if result.extraneous and not state.quiet:
        console.print("[muted]Run 'apt-sync snap' to pick packages to curate.[/muted]")
