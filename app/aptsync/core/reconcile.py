"""Reconciliation between the curated list and the live system.

This module provides the pure three-way diff every command builds on:
``status`` renders it directly, ``diff`` renders the drift and
``install`` consumes the missing packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aptsync.models.manifest import CuratedSet
    from aptsync.models.package import InstalledSet, PackageName


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Result of comparing the curated set with the installed set.

    The three groups are disjoint. ``satisfied`` and ``missing`` follow the
    curated insertion order, ``extraneous`` is sorted by name.

    Attributes:
        satisfied: Curated and installed.
        missing: Curated but not installed.
        extraneous: Installed but not curated.
    """

    satisfied: tuple[PackageName, ...] = ()
    missing: tuple[PackageName, ...] = ()
    extraneous: tuple[PackageName, ...] = ()

    @property
    def is_in_sync(self) -> bool:
        """Check if the system matches the curated list in both directions."""
        return not (self.missing or self.extraneous)

    @property
    def curated_count(self) -> int:
        """Number of curated packages covered by this result."""
        return len(self.satisfied) + len(self.missing)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the reconciliation result.
        """
        return {
            "in_sync": self.is_in_sync,
            "summary": {
                "satisfied": len(self.satisfied),
                "missing": len(self.missing),
                "extraneous": len(self.extraneous),
            },
            "satisfied": list(self.satisfied),
            "missing": list(self.missing),
            "extraneous": list(self.extraneous),
        }


def reconcile(
    curated: CuratedSet,
    installed: InstalledSet,
    *,
    include_auto: bool = False,
) -> ReconciliationResult:
    """Compute the three-way diff between curated and installed packages.

    Pure and deterministic. A curated package counts as satisfied whether
    it was installed manually or as a dependency. Only manually installed
    packages are reported as extraneous unless ``include_auto`` is set,
    since dependencies (libraries, defaults) are not something a user
    curates.

    Args:
        curated: The curated package set.
        installed: Snapshot of installed packages.
        include_auto: Also report auto-installed packages as extraneous.

    Returns:
        ReconciliationResult with satisfied, missing and extraneous names.

    Example:
        >>> result = reconcile(
        ...     CuratedSet(packages=["git", "zsh", "curl"]),
        ...     InstalledSet.of(["git", "vim"]),
        ... )
        >>> result.missing
        ('zsh', 'curl')
    """
    satisfied: list[PackageName] = []
    missing: list[PackageName] = []

    for name in curated.names:
        if name in installed.names:
            satisfied.append(name)
        else:
            missing.append(name)

    curated_names = set(curated.names)
    candidates = installed.names if include_auto else installed.manual
    extraneous = sorted(name for name in candidates if name not in curated_names)

    return ReconciliationResult(
        satisfied=tuple(satisfied),
        missing=tuple(missing),
        extraneous=tuple(extraneous),
    )
