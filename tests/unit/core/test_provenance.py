"""Unit tests for apt history provenance."""

from datetime import datetime
from unittest.mock import MagicMock

from aptsync.core.provenance import (
    PackageChange,
    ProvenanceTracker,
    history,
    parse_history_log,
    parse_package_changes,
    parse_timestamp,
)
from aptsync.models.history import HistoryAction, InstallSource
from aptsync.scanners.base import Scanner

SINGLE_INSTALL = """\
Start-Date: 2026-02-10  12:11:38
Commandline: apt-get install -y build-essential
Requested-By: user (1000)
Install: build-essential:amd64 (12.12ubuntu1), gcc:amd64 (4:15.2.0-4ubuntu1, automatic)
End-Date: 2026-02-10  12:12:00
"""


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_double_space(self) -> None:
        """apt's two-space separator is accepted."""
        assert parse_timestamp("2026-02-10  12:11:38") == datetime(2026, 2, 10, 12, 11, 38)

    def test_malformed(self) -> None:
        """Malformed dates give None."""
        assert parse_timestamp("yesterday") is None


class TestParsePackageChanges:
    """Tests for parse_package_changes."""

    def test_commas_inside_parentheses(self) -> None:
        """Entries split on '), ' so version commas stay inside the entry."""
        changes = parse_package_changes(
            "build-essential:amd64 (12.12), "
            "gcc:amd64 (15.2, automatic), "
            "make:amd64 (4.4, automatic)"
        )
        assert changes == [
            PackageChange("build-essential", "amd64", "12.12", automatic=False),
            PackageChange("gcc", "amd64", "15.2", automatic=True),
            PackageChange("make", "amd64", "4.4", automatic=True),
        ]

    def test_upgrade_keeps_new_version(self) -> None:
        """For upgrades the version after the comma is kept."""
        (change,) = parse_package_changes("python3.13:amd64 (3.13.7-1ubuntu0.2, 3.13.7-1ubuntu0.3)")
        assert change.version == "3.13.7-1ubuntu0.3"
        assert change.automatic is False

    def test_epoch_colon_in_version(self) -> None:
        """A colon in the version is not mistaken for the architecture."""
        (change,) = parse_package_changes("git:amd64 (1:2.43.0-1ubuntu7)")
        assert change.name == "git"
        assert change.architecture == "amd64"
        assert change.version == "1:2.43.0-1ubuntu7"

    def test_without_architecture(self) -> None:
        """Entries without an architecture qualifier are accepted."""
        (change,) = parse_package_changes("foo (1.0)")
        assert change.name == "foo"
        assert change.architecture is None

    def test_skips_malformed_entries(self) -> None:
        """Empty or garbled entries are skipped."""
        assert parse_package_changes("") == []
        assert [c.name for c in parse_package_changes("not a package (1.0), vim:amd64 (9)")] == [
            "vim"
        ]


class TestParseHistoryLog:
    """Tests for parse_history_log."""

    def test_single_transaction(self) -> None:
        """A block yields one event per package with the block metadata."""
        events = list(parse_history_log(SINGLE_INSTALL))

        assert [e.package for e in events] == ["build-essential", "gcc"]
        first = events[0]
        assert first.action == HistoryAction.INSTALLED
        assert first.timestamp == datetime(2026, 2, 10, 12, 11, 38)
        assert first.commandline == "apt-get install -y build-essential"
        assert first.requested_by == "user (1000)"
        assert first.source == InstallSource.MANUAL
        assert events[1].source == InstallSource.DEPENDENCY

    def test_upgrade_is_recorded_as_upgrade(self) -> None:
        """Upgrade lines produce UPGRADED events."""
        log = """\
Start-Date: 2026-02-06  08:54:10
Commandline: apt full-upgrade --autoremove --purge
Upgrade: python3.13:amd64 (3.13.7-1ubuntu0.2, 3.13.7-1ubuntu0.3)
Purge: oldlib:amd64 (1.0)
End-Date: 2026-02-06  08:55:14
"""
        events = list(parse_history_log(log))
        assert [(e.package, e.action) for e in events] == [
            ("python3.13", HistoryAction.UPGRADED),
            ("oldlib", HistoryAction.PURGED),
        ]

    def test_block_without_end_date_is_dropped(self) -> None:
        """A truncated block at the end of the log yields nothing."""
        log = SINGLE_INSTALL.replace("End-Date: 2026-02-10  12:12:00\n", "")
        assert list(parse_history_log(log)) == []

    def test_block_with_bad_start_date_is_dropped(self) -> None:
        """A block whose Start-Date cannot be parsed is skipped."""
        log = SINGLE_INSTALL.replace("2026-02-10  12:11:38", "garbage")
        assert list(parse_history_log(log)) == []

    def test_unknown_lines_are_ignored(self) -> None:
        """Unrelated lines do not break parsing."""
        log = "random noise\nError: Sub-process returned an error code\n" + SINGLE_INSTALL
        assert len(list(parse_history_log(log))) == 2

    def test_missing_requested_by(self) -> None:
        """Requested-By is optional."""
        log = """\
Start-Date: 2026-01-15  14:26:08
Commandline: apt -y install apt-transport-https
Install: apt-transport-https:amd64 (3.1.6ubuntu2)
End-Date: 2026-01-15  14:26:10
"""
        (event,) = parse_history_log(log)
        assert event.requested_by is None

    def test_empty_log(self) -> None:
        """Empty text yields no events."""
        assert list(parse_history_log("")) == []


class TestHistory:
    """Tests for the history lookup."""

    def test_every_query_gets_an_entry(self, sample_history_log: str) -> None:
        """Names without history map to an empty list."""
        result = history(["git", "nonexistent"], sample_history_log)
        assert set(result) == {"git", "nonexistent"}
        assert result["nonexistent"] == []

    def test_chronological_events(self, sample_history_log: str) -> None:
        """Events for a package are ordered oldest first."""
        events = history(["git"], sample_history_log)["git"]
        assert [e.action for e in events] == [HistoryAction.INSTALLED, HistoryAction.UPGRADED]
        assert events[0].requested_by == "alice (1000)"
        assert events[1].version == "1:2.43.0-1ubuntu7.1"

    def test_dependency_install_is_reported(self, sample_history_log: str) -> None:
        """Dependency installs are included and marked as such."""
        (event,) = history(["git-man"], sample_history_log)["git-man"]
        assert event.is_dependency is True

    def test_architecture_qualified_query(self, sample_history_log: str) -> None:
        """name:arch restricts matches to that architecture."""
        result = history(["libc6:amd64", "libc6:i386"], sample_history_log)
        assert len(result["libc6:amd64"]) == 1
        assert result["libc6:i386"] == []

    def test_removal_is_reported(self, sample_history_log: str) -> None:
        """Removals are part of the history."""
        events = history(["vim"], sample_history_log)["vim"]
        assert [e.action for e in events] == [HistoryAction.REMOVED]

    def test_multiple_installs(self) -> None:
        """Repeated installs of the same package are all returned."""
        log = """\
Start-Date: 2025-07-17  11:55:46
Commandline: apt-get install --assume-yes apt-transport-https ca-certificates
Install: apt-transport-https:amd64 (3.0.0), ca-certificates:amd64 (1.0, automatic)
End-Date: 2025-07-17  11:56:00

Start-Date: 2026-01-15  14:26:08
Commandline: apt -y install apt-transport-https
Install: apt-transport-https:amd64 (3.1.6ubuntu2)
End-Date: 2026-01-15  14:26:10
"""
        events = history(["apt-transport-https"], log)["apt-transport-https"]
        assert [e.version for e in events] == ["3.0.0", "3.1.6ubuntu2"]

    def test_no_queries(self, sample_history_log: str) -> None:
        """An empty query list gives an empty mapping."""
        assert history([], sample_history_log) == {}


class TestProvenanceTracker:
    """Tests for ProvenanceTracker."""

    def test_reads_log_from_scanner(self, sample_history_log: str) -> None:
        """The tracker reads the log once through the scanner."""
        scanner = MagicMock(spec=Scanner)
        scanner.read_history_log.return_value = sample_history_log

        result = ProvenanceTracker(scanner).history(["git", "vim"])

        scanner.read_history_log.assert_called_once()
        assert len(result["git"]) == 2
        assert len(result["vim"]) == 1
