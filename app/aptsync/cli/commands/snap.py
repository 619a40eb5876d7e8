"""Snapshot command implementation.

Walks through manually installed packages that are not curated yet and
lets the user pick which ones to add to the curated list.
"""

from collections.abc import Callable, Iterable

import typer
from rich.markup import escape

from aptsync.cli.types import get_state, persist_curated, require_curated, require_installed
from aptsync.core.reconcile import reconcile
from aptsync.models.package import PackageName
from aptsync.utils.formatting import console, print_info, print_success

_YES = frozenset({"y", "yes"})
_QUIT = frozenset({"q", "quit"})


def select_packages(
    candidates: Iterable[PackageName],
    ask: Callable[[PackageName], str],
) -> list[PackageName]:
    """Ask about each candidate until the user quits.

    ``y``/``yes`` selects a package, ``q``/``quit`` stops asking and keeps
    what was selected so far, anything else skips the package. Answers
    are case-insensitive. An aborted prompt (Ctrl-C, end of input)
    behaves like quit.

    Args:
        candidates: Package names to offer, in display order.
        ask: Returns the raw answer for one package.

    Returns:
        Selected names, in the order they were offered.
    """
    selected: list[PackageName] = []
    for name in candidates:
        try:
            answer = ask(name).strip().lower()
        except typer.Abort:
            break
        if answer in _QUIT:
            break
        if answer in _YES:
            selected.append(name)
    return selected


def _prompt(name: PackageName) -> str:
    return typer.prompt(f"  {name}  [y/n/q]", default="n", show_default=False)


def snap_packages(ctx: typer.Context) -> None:
    """Pick uncurated, manually installed packages to add to the list.

    For each package, answer y to add, n to skip or q to quit.
    """
    state = get_state(ctx)
    curated = require_curated(state)
    installed = require_installed(state)

    # Dependencies are never offered, regardless of diff.include_auto
    uncurated = reconcile(curated, installed).extraneous
    if not uncurated:
        print_success("All manually installed packages are already curated!")
        return

    console.print(
        f"[bold_header]Snapshot: {len(uncurated)} uncurated manual package(s)[/bold_header]\n"
    )
    if not state.quiet:
        console.print(
            "[muted]For each package, type [bold]y[/bold] to add, "
            "[bold]n[/bold] to skip or [bold]q[/bold] to quit.[/muted]\n"
        )

    selected = select_packages(uncurated, _prompt)
    if not selected:
        print_info("\nNo packages added.")
        return

    for name in selected:
        curated.add(name)
    path = persist_curated(state, curated)

    for name in selected:
        console.print(f"  [added]+ {escape(name)}[/added]")
    console.print(f"\n[info]Added {len(selected)} package(s) to {path}[/info]")
