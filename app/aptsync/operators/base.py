"""Abstract base class for package operators.

This module defines the Operator interface that all package manager
backends implement to mutate system state.
"""

from abc import ABC, abstractmethod

from aptsync.utils.shell import CommandResult


class Operator(ABC):
    """Abstract base class for all package operators.

    Operators install one package per call. They never decide *what* to
    install; that is the orchestrator's job.

    Example:
        >>> operator = AptOperator()
        >>> if operator.is_available() and operator.ensure_privileges() is None:
        ...     result = operator.install_one("htop")
        ...     print(result.success)
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
    def install_command(self, package: str) -> list[str]:
        """Build the command that installs a single package.

        Args:
            package: Package name.

        Returns:
            Command and arguments.
        """

    @abstractmethod
    def ensure_privileges(self) -> str | None:
        """Make sure install commands will run with sufficient privileges.

        Returns:
            None if privileges are sufficient, otherwise a human-readable
            reason why they are not.
        """

    @abstractmethod
    def install_one(self, package: str) -> CommandResult:
        """Install a single package.

        Args:
            package: Package name to install.

        Returns:
            CommandResult of the package manager call.

        Raises:
            OSError: If the command cannot be executed.
            subprocess.TimeoutExpired: If the command exceeds its timeout.
        """
