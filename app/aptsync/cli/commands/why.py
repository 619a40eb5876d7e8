"""Why command implementation.

Answers "when and how did this package get installed" from the apt
history log.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from aptsync.cli.display import create_history_table
from aptsync.cli.types import get_state
from aptsync.core.provenance import ProvenanceTracker
from aptsync.utils.formatting import console


def why_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package name(s) to look up, optionally as name:arch."),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Show the install history of package(s). [dim](alias: w)[/dim]

    Reads /var/log/apt/history.log and its rotated copies. A package
    without any recorded history is reported, not treated as an error.

    Examples:
        apt-sync why git
        apt-sync w libc6:amd64 --json
    """
    state = get_state(ctx)
    tracker = ProvenanceTracker(state.scanner())
    results = tracker.history(packages)

    if json_output:
        data = {name: [event.to_dict() for event in events] for name, events in results.items()}
        console.print_json(json.dumps(data))
        return

    for index, (name, events) in enumerate(results.items()):
        if index:
            console.print()
        if not events:
            console.print(f"[muted]{escape(name)}: no install history found[/muted]")
            continue
        console.print(create_history_table(name, events))
