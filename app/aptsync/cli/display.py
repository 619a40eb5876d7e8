"""Shared Rich display functions.

Provides reusable table builders and summary printers for the
reconciliation result, install outcomes and package history.
"""

from collections.abc import Sequence

from rich.markup import escape
from rich.table import Table

from aptsync.core.reconcile import ReconciliationResult
from aptsync.models.history import HistoryAction, HistoryEvent
from aptsync.models.manifest import CuratedSet
from aptsync.models.outcome import InstallOutcome, OutcomeKind
from aptsync.models.package import InstalledSet, PackageStatus
from aptsync.utils.formatting import console, create_table, print_success

_ACTION_STYLES: dict[HistoryAction, str] = {
    HistoryAction.INSTALLED: "added",
    HistoryAction.REINSTALLED: "changed",
    HistoryAction.UPGRADED: "changed",
    HistoryAction.DOWNGRADED: "warning",
    HistoryAction.REMOVED: "removed",
    HistoryAction.PURGED: "removed",
}


def create_status_table(
    curated: CuratedSet,
    result: ReconciliationResult,
    installed: InstalledSet,
) -> Table:
    """Create a table listing every curated package and whether it is installed.

    Rows follow the manifest order.

    Args:
        curated: The curated package set.
        result: Reconciliation result.
        installed: Installed set used to tell manual from dependency installs.

    Returns:
        Rich Table configured for status display.
    """
    table = create_table(f"Curated Packages ({result.curated_count})")
    table.add_column("", width=2, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("State")

    missing = set(result.missing)
    for name in curated.names:
        if name in missing:
            table.add_row("[error]✘[/]", f"[error]{escape(name)}[/]", "[muted]not installed[/]")
        elif installed.status(name) == PackageStatus.AUTO_INSTALLED:
            table.add_row(
                "[success]✔[/]",
                f"[package_auto]{escape(name)}[/]",
                "[muted]installed (as dependency)[/]",
            )
        else:
            table.add_row("[success]✔[/]", f"[package_manual]{escape(name)}[/]", "installed")

    return table


def create_diff_table(result: ReconciliationResult) -> Table:
    """Create a table of drift: extraneous packages first, then missing ones.

    Args:
        result: Reconciliation result.

    Returns:
        Rich Table configured for diff display.
    """
    table = create_table("System Differences")
    table.add_column("Status", width=6, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Note")

    for name in result.extraneous:
        table.add_row(
            "[warning]?[/]", f"[warning]{escape(name)}[/]", "[muted]On system, not curated[/]"
        )
    for name in result.missing:
        table.add_row(
            "[error]✘[/]", f"[error]{escape(name)}[/]", "[muted]Curated, not installed[/]"
        )

    return table


def print_diff_summary(result: ReconciliationResult) -> None:
    """Print summary line for diff results."""
    parts: list[str] = []
    if result.extraneous:
        parts.append(f"[warning]{len(result.extraneous)} not curated[/warning]")
    if result.missing:
        parts.append(f"[error]{len(result.missing)} missing[/error]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")
    else:
        console.print("\n[muted]No differences found.[/muted]")


def create_plan_table(commands: Sequence[tuple[str, ...]], dry_run: bool = False) -> Table:
    """Create a table displaying planned install commands.

    Args:
        commands: One command per package, in execution order.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for plan display.
    """
    title = "Planned Installs (Dry Run)" if dry_run else "Planned Installs"
    table = create_table(title)
    table.add_column("#", justify="right", style="muted")
    table.add_column("Package", no_wrap=True)
    table.add_column("Command", style="muted")

    for index, command in enumerate(commands, start=1):
        table.add_row(str(index), f"[added]{escape(command[-1])}[/]", escape(" ".join(command)))

    return table


def format_outcome(outcome: InstallOutcome) -> str:
    """Format a single outcome as a one-line progress message."""
    if outcome.kind == OutcomeKind.SUCCEEDED:
        return f"  [success]✔[/] {escape(outcome.package)}"
    if outcome.kind == OutcomeKind.SKIPPED:
        return f"  [muted]- {escape(outcome.package)} (dry-run)[/]"
    reason = escape(outcome.reason.splitlines()[-1]) if outcome.reason else ""
    return f"  [error]✘ {escape(outcome.package)}[/] [muted]{reason}[/]"


def create_outcomes_table(outcomes: Sequence[InstallOutcome]) -> Table:
    """Create a table displaying install outcomes.

    Successful installs show "OK", failures show "FAIL" with the captured
    diagnostic text.

    Args:
        outcomes: Outcomes to display.

    Returns:
        Rich Table configured for results display.
    """
    table = create_table("Results")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Message")

    for outcome in outcomes:
        if outcome.kind == OutcomeKind.SUCCEEDED:
            status = "[success]OK[/success]"
        elif outcome.kind == OutcomeKind.SKIPPED:
            status = "[muted]SKIP[/muted]"
        else:
            status = "[error]FAIL[/error]"
        table.add_row(
            status,
            escape(outcome.package),
            f"[muted]{escape(outcome.reason or '')}[/muted]",
        )

    return table


def print_outcomes_summary(outcomes: Sequence[InstallOutcome]) -> None:
    """Print a summary of install outcomes.

    Shows a success message when nothing failed, or a count of
    succeeded/failed packages otherwise.
    """
    success_count = sum(1 for o in outcomes if o.succeeded)
    fail_count = sum(1 for o in outcomes if o.failed)

    if fail_count == 0:
        print_success(f"All {success_count} package(s) installed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )


def create_history_table(name: str, events: Sequence[HistoryEvent]) -> Table:
    """Create a table with the chronological history of one package.

    Args:
        name: Queried package name.
        events: Events, oldest first.

    Returns:
        Rich Table configured for history display.
    """
    table = create_table(escape(name))
    table.add_column("Date", style="info", no_wrap=True)
    table.add_column("Action")
    table.add_column("Source")
    table.add_column("Version", style="muted")
    table.add_column("Command")

    for event in events:
        style = _ACTION_STYLES[event.action]
        source = "[package_auto]dependency[/]" if event.is_dependency else "manual"
        command = escape(event.commandline or "")
        if event.requested_by:
            command += f"\n[muted]by {escape(event.requested_by)}[/muted]"
        table.add_row(
            event.timestamp.strftime("%Y-%m-%d %H:%M"),
            f"[{style}]{event.action.value}[/{style}]",
            source,
            escape(event.version or ""),
            command,
        )

    return table
