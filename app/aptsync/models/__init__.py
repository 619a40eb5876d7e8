"""Data models for apt-sync.

This module exports the core data structures used throughout the application.
"""

from aptsync.models.history import HistoryAction, HistoryEvent, InstallSource
from aptsync.models.manifest import CuratedSet, validate_package_name
from aptsync.models.outcome import InstallOutcome, OutcomeKind
from aptsync.models.package import InstalledSet, PackageName, PackageStatus

__all__ = [
    "CuratedSet",
    "HistoryAction",
    "HistoryEvent",
    "InstallOutcome",
    "InstallSource",
    "InstalledSet",
    "OutcomeKind",
    "PackageName",
    "PackageStatus",
    "validate_package_name",
]
