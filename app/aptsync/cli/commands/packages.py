"""Curated list commands: list, add and remove.

These commands only touch the curated list and never query the system,
so they keep working when the package database is unavailable.
"""

from typing import Annotated

import typer
from rich.markup import escape

from aptsync.cli.types import get_state, persist_curated, require_curated
from aptsync.models.manifest import validate_package_name
from aptsync.utils.formatting import console, print_error, print_info


def list_packages(ctx: typer.Context) -> None:
    """List all curated packages. [dim](alias: ls)[/dim]"""
    state = get_state(ctx)
    curated = require_curated(state)

    if not len(curated):
        print_info("No curated packages yet.")
        return

    for name in curated.names:
        # Plain output, one name per line, for piping into other tools
        typer.echo(name)


def add_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package name(s) to add to the curated list."),
    ],
) -> None:
    """Add package(s) to the curated list. [dim](alias: a)[/dim]

    Adding a package that is already listed is a no-op.

    Examples:
        apt-sync add git zsh curl
    """
    state = get_state(ctx)

    names = [name.strip() for name in packages]
    invalid: list[str] = []
    for name in names:
        try:
            validate_package_name(name)
        except ValueError as e:
            print_error(escape(str(e)))
            invalid.append(name)
    if invalid:
        raise typer.Exit(code=1)

    curated = require_curated(state)
    added = [name for name in names if curated.add(name)]
    already = [name for name in names if name not in added]

    path = persist_curated(state, curated)

    for name in added:
        console.print(f"  [added]+ {escape(name)}[/added]")
    for name in dict.fromkeys(already):
        console.print(f"  [muted]  {escape(name)} (already listed)[/muted]")
    if added and not state.quiet:
        console.print(f"\n[info]Added {len(added)} package(s) to {path}[/info]")


def remove_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package name(s) to remove from the curated list."),
    ],
) -> None:
    """Remove package(s) from the curated list. [dim](alias: rm)[/dim]

    Removing a package that is not listed is a no-op. Installed packages
    are left untouched.

    Examples:
        apt-sync remove vim
    """
    state = get_state(ctx)
    curated = require_curated(state)

    names = [name.strip() for name in packages]
    removed = [name for name in names if curated.remove(name)]
    not_found = [name for name in names if name not in removed]

    path = persist_curated(state, curated)

    for name in removed:
        console.print(f"  [removed]- {escape(name)}[/removed]")
    for name in dict.fromkeys(not_found):
        console.print(f"  [muted]  {escape(name)} (not in list)[/muted]")
    if removed and not state.quiet:
        console.print(f"\n[info]Removed {len(removed)} package(s) from {path}[/info]")
