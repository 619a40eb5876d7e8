"""Package models for system inventory.

This module defines the data structures describing what the package
manager reports as installed on the live system.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

# Package names are exact, case-sensitive identifiers
PackageName = str


class PackageStatus(Enum):
    """Package installation status.

    Distinguishes between packages explicitly installed by the user
    and those automatically installed as dependencies.
    """

    MANUAL = "manual"
    AUTO_INSTALLED = "auto"


@dataclass(frozen=True, slots=True)
class InstalledSet:
    """Snapshot of the packages currently installed on the system.

    This is a read-only view of external state. It is recomputed on every
    invocation and never cached.

    Attributes:
        names: Every package whose dpkg status is ``install ok installed``.
        auto: Subset of ``names`` marked as automatically installed.
    """

    names: frozenset[PackageName] = field(default_factory=frozenset)
    auto: frozenset[PackageName] = field(default_factory=frozenset)

    @classmethod
    def of(
        cls,
        names: Iterable[PackageName],
        auto: Iterable[PackageName] = (),
    ) -> "InstalledSet":
        """Build an InstalledSet, restricting ``auto`` to installed names.

        Args:
            names: Installed package names.
            auto: Names apt marks as automatically installed.

        Returns:
            New InstalledSet.
        """
        installed = frozenset(names)
        return cls(names=installed, auto=frozenset(auto) & installed)

    @property
    def manual(self) -> frozenset[PackageName]:
        """Installed packages that were explicitly requested."""
        return self.names - self.auto

    def status(self, name: PackageName) -> PackageStatus | None:
        """Return the install status of a package, or None if not installed."""
        if name not in self.names:
            return None
        if name in self.auto:
            return PackageStatus.AUTO_INSTALLED
        return PackageStatus.MANUAL

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[PackageName]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)
