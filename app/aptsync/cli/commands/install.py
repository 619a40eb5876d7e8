"""Install command implementation.

Installs curated packages that are missing from the system, one package
manager call per package.
"""

from typing import Annotated

import typer

from aptsync.cli.display import (
    create_outcomes_table,
    create_plan_table,
    format_outcome,
    print_outcomes_summary,
)
from aptsync.cli.types import get_state, require_curated, require_installed
from aptsync.core.installer import InstallOrchestrator
from aptsync.core.reconcile import reconcile
from aptsync.models.outcome import InstallOutcome
from aptsync.utils.formatting import console, print_info, print_success


def install_packages(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be installed without making changes.",
        ),
    ] = False,
) -> None:
    """Install curated packages that are missing. [dim](alias: i)[/dim]

    Each package is installed with its own apt-get call. A failing package
    does not stop the others; the command exits with code 1 if any
    package failed. Run it again to retry whatever is still missing.

    Examples:
        apt-sync install --dry-run     # Preview the apt-get calls
        apt-sync install
    """
    state = get_state(ctx)
    curated = require_curated(state)
    installed = require_installed(state)

    result = reconcile(curated, installed)
    if not result.missing:
        print_success("All curated packages are installed. Nothing to do.")
        return

    orchestrator = InstallOrchestrator(state.operator())

    if dry_run:
        skipped = orchestrator.install(result.missing, dry_run=True)
        console.print(create_plan_table([outcome.command for outcome in skipped], dry_run=True))
        print_info("\nDry-run mode: No changes were made.")
        return

    console.print(create_plan_table(orchestrator.plan(result.missing)))
    console.print(f"\n[bold]Installing {len(result.missing)} package(s)...[/bold]\n")

    def show_progress(outcome: InstallOutcome) -> None:
        console.print(format_outcome(outcome))

    outcomes = orchestrator.install(result.missing, on_outcome=show_progress)

    console.print()
    console.print(create_outcomes_table(outcomes))
    print_outcomes_summary(outcomes)

    if any(outcome.failed for outcome in outcomes):
        raise typer.Exit(code=1)
