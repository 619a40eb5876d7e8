"""Abstract base class for system inventory probes.

This module defines the Scanner interface that every package manager
backend implements. Scanners only read system state; they never mutate it.
"""

from abc import ABC, abstractmethod

from aptsync.models.package import InstalledSet


class ProbeError(RuntimeError):
    """Raised when the installed-package query fails.

    Typical causes are a locked or corrupt package database, or a missing
    package manager. Commands that need installed state treat it as fatal.
    """


class Scanner(ABC):
    """Abstract base class for all inventory scanners.

    Example:
        >>> scanner = AptScanner()
        >>> if scanner.is_available():
        ...     installed = scanner.query_installed()
        ...     print(len(installed))
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the package manager name (e.g. "apt")."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    @abstractmethod
    def query_installed(self) -> InstalledSet:
        """Query the complete, de-duplicated set of installed packages.

        Returns:
            InstalledSet snapshot.

        Raises:
            ProbeError: If the package manager cannot be queried.
        """

    @abstractmethod
    def read_history_log(self) -> str:
        """Read the package manager history log text, oldest entries first.

        Reading is best effort: unreadable parts are skipped.

        Returns:
            Concatenated log text (possibly empty).
        """
