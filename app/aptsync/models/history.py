"""History event model for package provenance.

Events are reconstructed from the package manager's own history log on
every query. They are never mutated or persisted by apt-sync.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from aptsync.models.package import PackageName


class HistoryAction(str, Enum):
    """Kind of change recorded in the package manager history.

    Attributes:
        INSTALLED: Package was newly installed.
        REINSTALLED: Package was reinstalled at the same version.
        UPGRADED: Package moved to a newer version.
        DOWNGRADED: Package moved to an older version.
        REMOVED: Package was removed (configuration kept).
        PURGED: Package was removed together with its configuration.
    """

    INSTALLED = "installed"
    REINSTALLED = "reinstalled"
    UPGRADED = "upgraded"
    DOWNGRADED = "downgraded"
    REMOVED = "removed"
    PURGED = "purged"


class InstallSource(str, Enum):
    """Whether a change was requested by the user or pulled in as a dependency."""

    MANUAL = "manual"
    DEPENDENCY = "dependency"


@dataclass(frozen=True, slots=True)
class HistoryEvent:
    """A single package change parsed from the history log.

    Attributes:
        package: Package name without architecture qualifier.
        action: What happened to the package.
        timestamp: Start time of the transaction.
        source: Manual request or automatic dependency.
        architecture: Architecture qualifier (e.g. ``amd64``), if present.
        version: Resulting version (new version for upgrades/downgrades).
        commandline: Command line that started the transaction.
        requested_by: User that requested the transaction, if recorded.
    """

    package: PackageName
    action: HistoryAction
    timestamp: datetime
    source: InstallSource = InstallSource.MANUAL
    architecture: str | None = None
    version: str | None = None
    commandline: str | None = None
    requested_by: str | None = None

    @property
    def is_dependency(self) -> bool:
        """Check if the package was pulled in as a dependency."""
        return self.source == InstallSource.DEPENDENCY

    def matches(self, query: str) -> bool:
        """Check whether this event belongs to a queried package name.

        A bare name matches every architecture; ``name:arch`` matches only
        that architecture.
        """
        name, sep, arch = query.partition(":")
        if name != self.package:
            return False
        return not sep or arch == self.architecture

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        result: dict[str, Any] = {
            "package": self.package,
            "action": self.action.value,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
        }
        for key in ("architecture", "version", "commandline", "requested_by"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result
