"""Install orchestration.

Turns the list of missing packages into a sequence of package manager
calls, one package at a time, with dry-run and best-effort partial
failure semantics.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from aptsync.models.outcome import InstallOutcome, failed, skipped, succeeded

if TYPE_CHECKING:
    from aptsync.models.package import PackageName
    from aptsync.operators.base import Operator

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[InstallOutcome], None]


class InstallOrchestrator:
    """Install missing packages sequentially through an operator.

    Every package gets exactly one outcome. A failure never aborts the
    remaining packages, and failed installs are not retried: running the
    command again re-diffs and attempts only what is still missing.

    Example:
        >>> orchestrator = InstallOrchestrator(AptOperator())
        >>> outcomes = orchestrator.install(["zsh", "curl"], dry_run=True)
        >>> [o.kind.value for o in outcomes]
        ['skipped', 'skipped']
    """

    def __init__(self, operator: Operator) -> None:
        """Initialize the orchestrator.

        Args:
            operator: Backend that performs the actual installs.
        """
        self.operator = operator

    def plan(self, missing: Sequence[PackageName]) -> list[tuple[str, ...]]:
        """Return the command for each package, in execution order.

        Args:
            missing: De-duplicated package names.

        Returns:
            One command per package.

        Raises:
            ValueError: If ``missing`` contains duplicates.
        """
        _require_unique(missing)
        return [tuple(self.operator.install_command(name)) for name in missing]

    def install(
        self,
        missing: Sequence[PackageName],
        dry_run: bool = False,
        on_outcome: OutcomeCallback | None = None,
    ) -> list[InstallOutcome]:
        """Install each package in order and record its outcome.

        In dry-run mode the same plan is computed and every package gets a
        SKIPPED outcome; no mutating call and no privilege check happen.

        If privileges are insufficient, every package fails with the
        privilege diagnostic and no install call is made.

        Args:
            missing: De-duplicated package names, in installation order.
            dry_run: Plan only.
            on_outcome: Called after each package with its outcome.

        Returns:
            One InstallOutcome per package, in input order.

        Raises:
            ValueError: If ``missing`` contains duplicates.
        """
        commands = self.plan(missing)
        outcomes: list[InstallOutcome] = []

        def record(outcome: InstallOutcome) -> None:
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        if dry_run:
            for name, command in zip(missing, commands, strict=True):
                record(skipped(name, command))
            return outcomes

        if not missing:
            return outcomes

        privilege_problem = self.operator.ensure_privileges()
        if privilege_problem is not None:
            logger.warning("Cannot install packages: %s", privilege_problem)
            for name, command in zip(missing, commands, strict=True):
                record(failed(name, privilege_problem, command))
            return outcomes

        for name, command in zip(missing, commands, strict=True):
            record(self._install_one(name, command))

        return outcomes

    def _install_one(self, name: PackageName, command: tuple[str, ...]) -> InstallOutcome:
        """Run a single install and convert the result to an outcome."""
        try:
            result = self.operator.install_one(name)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Install of %s could not run: %s", name, e)
            return failed(name, str(e), command)

        if result.success:
            logger.debug("Installed %s", name)
            return succeeded(name, command)

        logger.warning("Install of %s failed with exit code %d", name, result.returncode)
        return failed(name, result.diagnostic, command)


def _require_unique(names: Sequence[PackageName]) -> None:
    seen: set[PackageName] = set()
    duplicates: set[PackageName] = set()
    for name in names:
        if name in seen:
            duplicates.add(name)
        seen.add(name)
    if duplicates:
        msg = f"Duplicate package names in install request: {', '.join(sorted(duplicates))}"
        raise ValueError(msg)
