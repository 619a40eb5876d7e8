"""APT package operator implementation.

Executes package installation using apt-get.
"""

import logging

from aptsync.core.config import DEFAULT_INSTALL_TIMEOUT
from aptsync.operators.base import Operator
from aptsync.utils.shell import CommandResult, command_exists, is_root, run_command, run_interactive

logger = logging.getLogger(__name__)


class AptOperator(Operator):
    """Operator for APT/dpkg packages.

    Uses ``apt-get install -y`` for one package at a time. Installing
    requires root; when not running as root the command is prefixed with
    sudo (unless disabled).

    Attributes:
        timeout: Timeout in seconds for a single install.
        use_sudo: Escalate with sudo when not running as root.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_INSTALL_TIMEOUT,
        use_sudo: bool = True,
    ) -> None:
        """Initialize the operator.

        Args:
            timeout: Timeout in seconds for a single install.
            use_sudo: Escalate with sudo when not running as root.
        """
        self.timeout = timeout
        self.use_sudo = use_sudo

    @property
    def name(self) -> str:
        """Return "apt" as the package manager name."""
        return "apt"

    def is_available(self) -> bool:
        """Check if apt-get is available."""
        return command_exists("apt-get")

    def _needs_sudo(self) -> bool:
        return self.use_sudo and not is_root()

    def install_command(self, package: str) -> list[str]:
        """Build ``[sudo] apt-get install -y <package>``."""
        args = ["apt-get", "install", "-y", package]
        if self._needs_sudo():
            args.insert(0, "sudo")
        return args

    def ensure_privileges(self) -> str | None:
        """Check for root or validate sudo credentials.

        ``sudo -v`` runs interactively so the user can type a password once;
        the cached credentials then cover every following install call.

        Returns:
            None if installs can run, otherwise the reason they cannot.
        """
        if not self.is_available():
            return "apt-get is not available on this system"
        if is_root():
            return None
        if not self.use_sudo:
            return "root privileges required (run as root or enable use_sudo)"
        if not command_exists("sudo"):
            return "root privileges required and sudo is not installed"

        try:
            returncode = run_interactive(["sudo", "-v"])
        except OSError as e:
            return f"sudo could not be executed: {e}"
        if returncode != 0:
            return f"sudo authentication failed (exit code {returncode})"
        return None

    def install_one(self, package: str) -> CommandResult:
        """Install a single package using apt-get.

        Args:
            package: Package name to install.

        Returns:
            CommandResult of the apt-get call.
        """
        args = self.install_command(package)
        logger.info("Executing: %s", " ".join(args))
        return run_command(args, timeout=self.timeout)
