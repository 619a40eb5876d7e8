"""Package provenance from the apt history log.

apt appends one block per transaction to ``/var/log/apt/history.log``::

    Start-Date: 2026-02-10  12:11:38
    Commandline: apt-get install -y build-essential
    Requested-By: user (1000)
    Install: build-essential:amd64 (12.12ubuntu1), gcc:amd64 (4:15.2.0-4ubuntu1, automatic)
    End-Date: 2026-02-10  12:12:00

This module turns those blocks into HistoryEvent records and answers
"when and how was package X installed" for many names in one scan.
Malformed or unrelated lines are skipped, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from aptsync.models.history import HistoryAction, HistoryEvent, InstallSource

if TYPE_CHECKING:
    from aptsync.models.package import PackageName
    from aptsync.scanners.base import Scanner

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ACTION_FIELDS: dict[str, HistoryAction] = {
    "Install": HistoryAction.INSTALLED,
    "Reinstall": HistoryAction.REINSTALLED,
    "Upgrade": HistoryAction.UPGRADED,
    "Downgrade": HistoryAction.DOWNGRADED,
    "Remove": HistoryAction.REMOVED,
    "Purge": HistoryAction.PURGED,
}

# Known fields that carry no package changes
_IGNORED_FIELDS = frozenset({"Error"})


@dataclass(frozen=True, slots=True)
class PackageChange:
    """One ``name:arch (details)`` entry of an action line."""

    name: str
    architecture: str | None
    version: str | None
    automatic: bool


@dataclass
class _Transaction:
    """Accumulates the fields of one Start-Date/End-Date block."""

    timestamp: datetime
    commandline: str | None = None
    requested_by: str | None = None
    changes: list[tuple[HistoryAction, PackageChange]] = field(default_factory=list)

    def events(self) -> Iterator[HistoryEvent]:
        for action, change in self.changes:
            yield HistoryEvent(
                package=change.name,
                action=action,
                timestamp=self.timestamp,
                source=InstallSource.DEPENDENCY if change.automatic else InstallSource.MANUAL,
                architecture=change.architecture,
                version=change.version,
                commandline=self.commandline,
                requested_by=self.requested_by,
            )


def parse_timestamp(value: str) -> datetime | None:
    """Parse an apt history date (``2026-02-10  12:11:38``).

    Returns:
        Naive local datetime, or None if the value is malformed.
    """
    try:
        return datetime.strptime(" ".join(value.split()), _DATE_FORMAT)
    except ValueError:
        return None


def parse_package_changes(value: str) -> list[PackageChange]:
    """Parse the package list of an action line.

    Entries are separated by ``"), "``; commas inside parentheses belong
    to the entry (``gcc:amd64 (4:15.2.0-4ubuntu1, automatic)``). For
    upgrades and downgrades the details hold ``old, new`` and the new
    version is kept. Malformed entries are skipped.

    Args:
        value: Text after ``Install: `` (or another action field).

    Returns:
        Parsed package changes in log order.
    """
    changes: list[PackageChange] = []
    for raw in value.split("), "):
        entry = raw.strip().removesuffix(")")
        head, _, details = entry.partition(" (")
        name, _, arch = head.strip().partition(":")
        if not name or any(c.isspace() for c in head.strip()):
            if entry:
                logger.debug("Skipping malformed history entry: %r", entry[:100])
            continue

        tokens = [t.strip() for t in details.split(",") if t.strip()]
        automatic = "automatic" in tokens
        versions = [t for t in tokens if t != "automatic"]
        changes.append(
            PackageChange(
                name=name,
                architecture=arch or None,
                version=versions[-1] if versions else None,
                automatic=automatic,
            )
        )
    return changes


def parse_history_log(text: str) -> Iterator[HistoryEvent]:
    """Parse apt history log text into events, in log order.

    Events are emitted when a block is closed by ``End-Date:``. A block
    without a valid ``Start-Date:`` is dropped; unknown or malformed
    lines are skipped.

    Args:
        text: Raw log text (possibly several concatenated logs).

    Yields:
        HistoryEvent for each package change.
    """
    current: _Transaction | None = None

    for line_num, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        key, sep, value = line.partition(": ")
        value = value.strip()
        if not sep:
            logger.debug("Skipping unrecognised history line %d: %r", line_num, line[:100])
            continue

        if key == "Start-Date":
            timestamp = parse_timestamp(value)
            if timestamp is None:
                logger.debug("Skipping block with bad Start-Date at line %d", line_num)
            current = _Transaction(timestamp) if timestamp is not None else None
        elif current is None:
            continue
        elif key == "End-Date":
            yield from current.events()
            current = None
        elif key == "Commandline":
            current.commandline = value
        elif key == "Requested-By":
            current.requested_by = value
        elif key in ACTION_FIELDS:
            action = ACTION_FIELDS[key]
            current.changes.extend((action, change) for change in parse_package_changes(value))
        elif key not in _IGNORED_FIELDS:
            logger.debug("Skipping unknown history field %r at line %d", key, line_num)


def history(
    names: Iterable[PackageName],
    log_text: str,
) -> dict[PackageName, list[HistoryEvent]]:
    """Collect the history of several packages in a single pass over the log.

    Args:
        names: Package names to look up. ``name:arch`` restricts the match
            to one architecture.
        log_text: Raw apt history log text.

    Returns:
        Mapping with an entry for every queried name; each list is
        chronological (oldest first) and empty when the package never
        appears in the log.
    """
    results: dict[PackageName, list[HistoryEvent]] = {name: [] for name in names}

    # Bare package name -> queries that may match it
    queries_by_name: dict[str, list[PackageName]] = {}
    for query in results:
        queries_by_name.setdefault(query.partition(":")[0], []).append(query)

    if not queries_by_name:
        return results

    for event in parse_history_log(log_text):
        for query in queries_by_name.get(event.package, ()):
            if event.matches(query):
                results[query].append(event)

    for events in results.values():
        # Concatenated rotated logs are already ordered; sorting is stable
        events.sort(key=lambda e: e.timestamp)

    return results


class ProvenanceTracker:
    """Answer "why/when" queries using a scanner's history log.

    Example:
        >>> tracker = ProvenanceTracker(AptScanner())
        >>> for event in tracker.history(["git"])["git"]:
        ...     print(event.timestamp, event.action.value)
    """

    def __init__(self, scanner: Scanner) -> None:
        """Initialize the tracker.

        Args:
            scanner: Scanner providing the history log text.
        """
        self.scanner = scanner

    def history(self, names: Iterable[PackageName]) -> dict[PackageName, list[HistoryEvent]]:
        """Return the chronological events for each queried package."""
        return history(names, self.scanner.read_history_log())
